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

"""Event context: specifying, merging and rendering per-event metadata.

A :class:`Context` bundles the collection, device fingerprint, session, the
partner/location/device scope, the active user and order, and the detected
browser environment. It renders two ways from the same fields:

* :meth:`Context.export` builds the :class:`~storefront_sdk.models.AnalyticsContext`
  wire message placed inside telemetry envelopes.
* :meth:`Context.serialize` builds a nested plain ``dict`` for transport and
  debugging.

Absent fields are left out of both renderings.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import ContextError, ContextErrorKind
from ..models import (
    AnalyticsContext,
    BrowserDeviceContext,
    CollectionMessage,
    DeviceApplication,
    DeviceLibrary,
    DeviceOS,
    OrderKeyMessage,
    ScopeMessage,
    UserKeyMessage,
    VersionSpec,
)

logger = logging.getLogger(__name__)


class BrowserType(Enum):
    BROWSER_UNKNOWN = "BROWSER_UNKNOWN"
    CHROME = "CHROME"
    SAFARI = "SAFARI"
    FIREFOX = "FIREFOX"
    OPERA = "OPERA"
    IE_OR_EDGE = "IE_OR_EDGE"


class DeviceType(Enum):
    UNKNOWN_DEVICE_TYPE = "UNKNOWN_DEVICE_TYPE"
    DESKTOP = "DESKTOP"
    TABLET = "TABLET"
    PHONE = "PHONE"


class OSType(Enum):
    OS_UNKNOWN = "OS_UNKNOWN"
    IOS = "IOS"
    WINDOWS_PHONE = "WINDOWS_PHONE"
    WINDOWS = "WINDOWS"
    ANDROID = "ANDROID"
    MACOS = "MACOS"
    LINUX = "LINUX"


# -- Event collections -- #


@dataclass(frozen=True)
class Collection:
    """Named bucket that events are filed against.

    The name is base64-encoded on construction unless ``encoded`` says it
    already is; afterwards ``encoded`` is always true.
    """

    name: str
    encoded: bool = False

    def __post_init__(self):
        if not self.encoded:
            object.__setattr__(self, "name", base64.b64encode(self.name.encode("utf-8")).decode("ascii"))
            object.__setattr__(self, "encoded", True)

    @classmethod
    def named(cls, name: str) -> Collection:
        return cls(name)

    def export(self) -> CollectionMessage:
        return CollectionMessage(name=self.name)

    def serialize(self) -> dict[str, Any]:
        return {"name": self.name}


# -- Identifier wrappers -- #


@dataclass(frozen=True)
class PartnerKey:
    code: str


@dataclass(frozen=True)
class LocationKey:
    code: str
    partner: PartnerKey


@dataclass(frozen=True)
class DeviceKey:
    """A known partner device. ``location`` is a back-reference and may be absent."""

    uuid: str
    location: LocationKey | None = None


@dataclass(frozen=True)
class UserKey:
    uid: str


@dataclass(frozen=True)
class OrderKey:
    id: str


# -- Browser environment -- #


def _version(name: str | None) -> dict[str, str]:
    return {"name": name} if name else {}


def _version_spec(name: str | None) -> VersionSpec | None:
    return VersionSpec(name=name) if name else None


@dataclass(frozen=True)
class BrowserContext:
    """Detected browser, device, OS, app and library details for this process."""

    browser_type: BrowserType = BrowserType.BROWSER_UNKNOWN
    device_type: DeviceType = DeviceType.UNKNOWN_DEVICE_TYPE
    browser_version: str | None = None
    os_type: OSType = OSType.OS_UNKNOWN
    os_version: str | None = None
    app_origin: str | None = None
    library_version: str | None = None
    library_variant: str | None = None

    def export(self) -> BrowserDeviceContext:
        return BrowserDeviceContext(
            browser_type=self.browser_type.value,
            device_type=self.device_type.value,
            version=_version_spec(self.browser_version),
            os=DeviceOS(type=self.os_type.value, version=_version_spec(self.os_version)),
            app=DeviceApplication(origin=self.app_origin),
            library=DeviceLibrary(variant=self.library_variant, version=_version_spec(self.library_version)),
        )

    def serialize(self) -> dict[str, Any]:
        app: dict[str, Any] = {}
        if self.app_origin:
            app["origin"] = self.app_origin
        library: dict[str, Any] = {"version": _version(self.library_version)}
        if self.library_variant:
            library["variant"] = self.library_variant
        return {
            "browserType": self.browser_type.value,
            "deviceType": self.device_type.value,
            "version": _version(self.browser_version),
            "os": {"type": self.os_type.value, "version": _version(self.os_version)},
            "app": app,
            "library": library,
        }


# -- Master context -- #


class Context:
    """Gathered event context.

    Args:
        collection: Collection to file the event against.
        partner: Partner code.
        location: Location code. Requires ``partner``.
        fingerprint: Durable device fingerprint.
        session: Session ID; rendered as ``group``.
        user: User key.
        device: Known partner device UUID. Only kept when a partner scope
            exists; it refers back to the location, if any.
        order: Order key.
        browser: Detected browser environment.

    Raises:
        ContextError: If ``location`` is given without ``partner``.
    """

    def __init__(
        self,
        *,
        collection: Collection | None = None,
        partner: str | None = None,
        location: str | None = None,
        fingerprint: str | None = None,
        session: str | None = None,
        user: str | None = None,
        device: str | None = None,
        order: str | None = None,
        browser: BrowserContext | None = None,
    ):
        if location and not partner:
            raise ContextError(
                "Cannot provide location context without partner context.",
                kind=ContextErrorKind.MISSING_PARTNER_FOR_LOCATION,
                details={"location": location},
            )

        self.collection = collection or None
        self.fingerprint = fingerprint or None
        self.session = session or None

        self.partner = PartnerKey(partner) if partner else None
        self.location = LocationKey(location, self.partner) if self.partner and location else None

        if device and not self.partner:
            logger.debug("Dropping device '%s' from context: no partner scope.", device)
        self.device = DeviceKey(device, self.location) if self.partner and device else None

        self.user = UserKey(user) if user else None
        self.order = OrderKey(order) if order else None
        self.browser = browser or None

    def __repr__(self) -> str:
        return f"Context({self.serialize()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return (
            self.collection == other.collection
            and self.fingerprint == other.fingerprint
            and self.session == other.session
            and self.partner == other.partner
            and self.location == other.location
            and self.device == other.device
            and self.user == other.user
            and self.order == other.order
            and self.browser == other.browser
        )

    def _scope_segments(self) -> list[tuple[str, str]]:
        # partner -> location -> device; partner+device without a location
        # yields two segments, the same as partner+location.
        if self.location is not None:
            segments = [("partner", self.location.partner.code), ("location", self.location.code)]
            if self.device is not None:
                segments.append(("device", self.device.uuid))
            return segments
        if self.partner is not None:
            segments = [("partner", self.partner.code)]
            if self.device is not None:
                segments.append(("device", self.device.uuid))
            return segments
        return []

    def partner_scope(self) -> str | None:
        """Scope path in plain form, e.g. ``"acme/downtown/kiosk-1"``."""
        segments = self._scope_segments()
        if not segments:
            return None
        return "/".join(value for _, value in segments)

    def wire_scope(self) -> str | None:
        """Scope path in wire form, e.g. ``"partner/acme/location/downtown"``."""
        segments = self._scope_segments()
        if not segments:
            return None
        return "/".join(f"{label}/{value}" for label, value in segments)

    def merged_with(self, base: Context | None) -> Context:
        """Merge this (event-level) context over ``base``, usually the global context.

        Each field missing here is taken from ``base``. The partner, location and
        device scope moves as a unit so two tenants are never mixed.
        """
        if base is None:
            return self
        scope_source = self if self.partner is not None else base
        return Context(
            collection=self.collection or base.collection,
            partner=scope_source.partner.code if scope_source.partner else None,
            location=scope_source.location.code if scope_source.location else None,
            fingerprint=self.fingerprint or base.fingerprint,
            session=self.session or base.session,
            user=(self.user or base.user).uid if (self.user or base.user) else None,
            device=scope_source.device.uuid if scope_source.device else None,
            order=(self.order or base.order).id if (self.order or base.order) else None,
            browser=self.browser or base.browser,
        )

    def export(self) -> AnalyticsContext:
        """Export this context as the wire message attached to telemetry events."""
        wire_scope = self.wire_scope()
        return AnalyticsContext(
            collection=self.collection.export() if self.collection else None,
            fingerprint=self.fingerprint,
            group=self.session,
            user=UserKeyMessage(uid=self.user.uid) if self.user else None,
            order=OrderKeyMessage(id=self.order.id) if self.order else None,
            scope=ScopeMessage(partner=wire_scope) if wire_scope else None,
            browser=self.browser.export() if self.browser else None,
        )

    def serialize(self) -> dict[str, Any]:
        """Render this context into a JSON-serializable ``dict``."""
        base: dict[str, Any] = {}

        if self.collection:
            base["collection"] = self.collection.serialize()
        if self.fingerprint:
            base["fingerprint"] = self.fingerprint
        if self.session:
            base["group"] = self.session
        if self.user:
            base["user"] = {"uid": self.user.uid}
        if self.order:
            base["order"] = {"id": self.order.id}

        partner_scope = self.partner_scope()
        if partner_scope:
            base["scope"] = {"partner": partner_scope}
        elif self.order:
            # TODO: section and product keys for commercial scope
            base["scope"] = {"order": self.order.id}

        if self.browser:
            base["browser"] = self.browser.serialize()
        return base

    @staticmethod
    def serialize_wire(message: AnalyticsContext) -> dict[str, Any]:
        """Render an exported wire context into the plain ``dict`` form."""
        base: dict[str, Any] = {}

        if message.collection and message.collection.name:
            base["collection"] = {"name": message.collection.name}
        if message.fingerprint:
            base["fingerprint"] = message.fingerprint
        if message.group:
            base["group"] = message.group
        if message.user and message.user.uid:
            base["user"] = {"uid": message.user.uid}
        if message.order and message.order.id:
            base["order"] = {"id": message.order.id}

        if message.scope:
            scope: dict[str, str] = {}
            if message.scope.partner:
                scope["partner"] = message.scope.partner
            if message.scope.commercial:
                scope["commercial"] = message.scope.commercial
            if scope:
                base["scope"] = scope

        if message.browser:
            browser = message.browser
            base["browser"] = {
                "browserType": browser.browser_type,
                "deviceType": browser.device_type,
                "version": _version(browser.version.name if browser.version else None),
                "os": {
                    "type": browser.os.type,
                    "version": _version(browser.os.version.name if browser.os.version else None),
                },
                "app": {"origin": browser.app.origin} if browser.app.origin else {},
                "library": {
                    **({"variant": browser.library.variant} if browser.library.variant else {}),
                    "version": _version(browser.library.version.name if browser.library.version else None),
                },
            }
        return base
