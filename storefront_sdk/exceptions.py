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
Storefront SDK Exceptions

Custom exception classes for the Storefront SDK.
"""

from enum import Enum
from typing import Any


class StorefrontError(Exception):
    """Base exception for Storefront SDK errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ValidationErrorKind(Enum):
    """Reasons a value object refused its constructor input."""

    INVALID_FIELD = "invalid_field"


class ContextErrorKind(Enum):
    """Illegal combinations of context fields."""

    MISSING_PARTNER_FOR_LOCATION = "missing_partner_for_location"


class SerializationErrorKind(Enum):
    """Reasons an event could not be placed into an envelope."""

    UNRECOGNIZED_TYPE = "unrecognized_type"
    INVALID_PAYLOAD = "invalid_payload"


class ValidationError(StorefrontError):
    """Raised when constructor input for a value object is missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        kind: ValidationErrorKind = ValidationErrorKind.INVALID_FIELD,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.kind = kind


class ContextError(StorefrontError):
    """Raised when event context is built from an illegal field combination."""

    def __init__(
        self,
        message: str,
        kind: ContextErrorKind = ContextErrorKind.MISSING_PARTNER_FOR_LOCATION,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.kind = kind


class SerializationError(StorefrontError):
    """Raised when an event payload cannot be mapped onto a telemetry envelope."""

    def __init__(
        self,
        message: str,
        event_type: Any = None,
        value: Any = None,
        kind: SerializationErrorKind = SerializationErrorKind.UNRECOGNIZED_TYPE,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.event_type = event_type
        self.value = value
        self.kind = kind


class AuthenticationError(StorefrontError):
    """Raised when no usable credential can be attached to a request."""

    pass


class ConfigurationError(StorefrontError):
    """Raised when there are configuration issues."""

    pass
