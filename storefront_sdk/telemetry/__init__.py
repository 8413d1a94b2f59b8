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

"""Event context, serialization and the global context cache."""

from .cache import DEVICE_FINGERPRINT_KEY, SESSION_ID_KEY, GlobalContextCache
from .context import (
    BrowserContext,
    BrowserType,
    Collection,
    Context,
    DeviceKey,
    DeviceType,
    LocationKey,
    OrderKey,
    OSType,
    PartnerKey,
    UserKey,
)
from .environment import RuntimeEnvironment, build_browser_context
from .serializer import EventType, serialize_generic
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "DEVICE_FINGERPRINT_KEY",
    "SESSION_ID_KEY",
    "GlobalContextCache",
    "BrowserContext",
    "BrowserType",
    "Collection",
    "Context",
    "DeviceKey",
    "DeviceType",
    "LocationKey",
    "OrderKey",
    "OSType",
    "PartnerKey",
    "UserKey",
    "RuntimeEnvironment",
    "build_browser_context",
    "EventType",
    "serialize_generic",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
]
