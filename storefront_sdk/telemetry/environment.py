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

"""Browser/OS/device detection for the global context.

Detection is a pure function of a :class:`RuntimeEnvironment`. When a user
agent is known (the SDK is embedded behind a browser-facing service) it is
parsed; otherwise the host platform is described.
"""

from __future__ import annotations

import platform
import re
from dataclasses import dataclass

from .context import BrowserContext, BrowserType, DeviceType, OSType

_BROWSER_PATTERNS: list[tuple[BrowserType, re.Pattern[str]]] = [
    (BrowserType.IE_OR_EDGE, re.compile(r"(?:Edge?|EdgA|EdgiOS)/([\d.]+)|MSIE ([\d.]+)|Trident/.*rv:([\d.]+)")),
    (BrowserType.OPERA, re.compile(r"(?:OPR|Opera)/([\d.]+)")),
    (BrowserType.FIREFOX, re.compile(r"(?:Firefox|FxiOS)/([\d.]+)")),
    (BrowserType.CHROME, re.compile(r"(?:Chrome|CriOS)/([\d.]+)")),
    (BrowserType.SAFARI, re.compile(r"Version/([\d.]+).*Safari/|Safari/([\d.]+)")),
]

_IOS_VERSION = re.compile(r"OS (\d+(?:_\d+)*) like Mac OS X")
_WINDOWS_PHONE_VERSION = re.compile(r"Windows Phone(?: OS)? ([\d.]+)")
_WINDOWS_VERSION = re.compile(r"Windows NT ([\d.]+)")
_ANDROID_VERSION = re.compile(r"Android ([\d.]+)")
_MACOS_VERSION = re.compile(r"Mac OS X (\d+(?:[_.]\d+)*)")

_PLATFORM_OS = {
    "Darwin": OSType.MACOS,
    "Windows": OSType.WINDOWS,
    "Linux": OSType.LINUX,
}


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Everything detection looks at. Build with :meth:`from_process` for the live process."""

    user_agent: str | None = None
    origin: str | None = None
    system: str | None = None
    release: str | None = None

    @classmethod
    def from_process(cls, user_agent: str | None = None, origin: str | None = None) -> RuntimeEnvironment:
        return cls(user_agent=user_agent, origin=origin, system=platform.system(), release=platform.release())


def _first_group(match: re.Match[str] | None) -> str | None:
    if match is None:
        return None
    return next((group for group in match.groups() if group), None)


def detect_browser(user_agent: str) -> tuple[BrowserType, str | None]:
    for browser_type, pattern in _BROWSER_PATTERNS:
        match = pattern.search(user_agent)
        if match:
            return browser_type, _first_group(match)
    return BrowserType.BROWSER_UNKNOWN, None


def detect_device(user_agent: str) -> DeviceType:
    if "iPad" in user_agent or "Tablet" in user_agent or ("Android" in user_agent and "Mobile" not in user_agent):
        return DeviceType.TABLET
    if "Mobi" in user_agent or "iPhone" in user_agent or "iPod" in user_agent:
        return DeviceType.PHONE
    return DeviceType.DESKTOP


def detect_os(user_agent: str) -> tuple[OSType, str | None]:
    if any(marker in user_agent for marker in ("iPhone", "iPad", "iPod")):
        version = _first_group(_IOS_VERSION.search(user_agent))
        return OSType.IOS, version.replace("_", ".") if version else None
    if "Windows Phone" in user_agent or ("Windows" in user_agent and "Mobile" in user_agent):
        return OSType.WINDOWS_PHONE, _first_group(_WINDOWS_PHONE_VERSION.search(user_agent))
    if "Windows" in user_agent:
        return OSType.WINDOWS, _first_group(_WINDOWS_VERSION.search(user_agent))
    if "Android" in user_agent:
        return OSType.ANDROID, _first_group(_ANDROID_VERSION.search(user_agent))
    if "Macintosh" in user_agent or "Mac OS X" in user_agent:
        version = _first_group(_MACOS_VERSION.search(user_agent))
        return OSType.MACOS, version.replace("_", ".") if version else None
    if "Linux" in user_agent or "X11" in user_agent:
        return OSType.LINUX, None
    return OSType.OS_UNKNOWN, None


def build_browser_context(
    environment: RuntimeEnvironment,
    library_version: str | None = None,
    library_variant: str | None = None,
) -> BrowserContext:
    """Build the browser context for ``environment``. No I/O."""
    if environment.user_agent:
        browser_type, browser_version = detect_browser(environment.user_agent)
        device_type = detect_device(environment.user_agent)
        os_type, os_version = detect_os(environment.user_agent)
    else:
        browser_type, browser_version = BrowserType.BROWSER_UNKNOWN, None
        device_type = DeviceType.UNKNOWN_DEVICE_TYPE
        os_type = _PLATFORM_OS.get(environment.system or "", OSType.OS_UNKNOWN)
        os_version = environment.release or None

    return BrowserContext(
        browser_type=browser_type,
        device_type=device_type,
        browser_version=browser_version,
        os_type=os_type,
        os_version=os_version,
        app_origin=environment.origin,
        library_version=library_version,
        library_variant=library_variant,
    )
