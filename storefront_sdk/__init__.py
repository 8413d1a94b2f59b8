# Copyright 2025 Storefront SDK Contributors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Storefront Python SDK

Client SDK for the Storefront commerce and telemetry platform: member
enrollment, delivery eligibility, shop status and analytics events with
device, session and browser context attached.
"""

__version__ = "1.0.0"
__author__ = "Storefront SDK Contributors"

# library variant reported in browser context
VARIANT = "python"

from .client import StorefrontClient  # noqa: E402
from .config import StorefrontConfig, configure, get_global_config, set_global_config  # noqa: E402
from .exceptions import (  # noqa: E402
    AuthenticationError,
    ConfigurationError,
    ContextError,
    ContextErrorKind,
    SerializationError,
    SerializationErrorKind,
    StorefrontError,
    ValidationError,
    ValidationErrorKind,
)
from .identity import ContactInfo, DoctorRec, GovernmentID, IDType, Name, Person, StreetAddress  # noqa: E402
from .shop import Customer, Enrollment, EnrollmentSource, ShopStatus, shop_availability  # noqa: E402
from .telemetry import (  # noqa: E402
    BrowserContext,
    Collection,
    Context,
    EventType,
    GlobalContextCache,
    JsonFileStorage,
    MemoryStorage,
    RuntimeEnvironment,
    serialize_generic,
)

__all__ = [
    # Main client
    "StorefrontClient",
    # Configuration
    "StorefrontConfig",
    "configure",
    "get_global_config",
    "set_global_config",
    # Identity
    "IDType",
    "GovernmentID",
    "Name",
    "StreetAddress",
    "ContactInfo",
    "Person",
    "DoctorRec",
    # Shop
    "Customer",
    "Enrollment",
    "EnrollmentSource",
    "ShopStatus",
    "shop_availability",
    # Telemetry
    "BrowserContext",
    "Collection",
    "Context",
    "EventType",
    "GlobalContextCache",
    "JsonFileStorage",
    "MemoryStorage",
    "RuntimeEnvironment",
    "serialize_generic",
    # Exceptions
    "StorefrontError",
    "ValidationError",
    "ValidationErrorKind",
    "ContextError",
    "ContextErrorKind",
    "SerializationError",
    "SerializationErrorKind",
    "AuthenticationError",
    "ConfigurationError",
]
