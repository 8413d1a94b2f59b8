"""Tests for browser/OS/device detection."""

import pytest

from storefront_sdk.telemetry.context import BrowserType, DeviceType, OSType
from storefront_sdk.telemetry.environment import RuntimeEnvironment, build_browser_context

CHROME_MAC = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
EDGE_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.2210.91"
)
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
SAFARI_IPAD = (
    "Mozilla/5.0 (iPad; CPU OS 16_6 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.6 Mobile/15E148 Safari/604.1"
)
CHROME_ANDROID_PHONE = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.6099.144 Mobile Safari/537.36"
)
FIREFOX_LINUX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
OPERA_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36 OPR/105.0.0.0"
)


class TestUserAgentDetection:
    """Test detection from a user agent string."""

    @pytest.mark.parametrize(
        "user_agent, browser, version, device, os_type, os_version",
        [
            (CHROME_MAC, BrowserType.CHROME, "120.0.0.0", DeviceType.DESKTOP, OSType.MACOS, "10.15.7"),
            (EDGE_WINDOWS, BrowserType.IE_OR_EDGE, "120.0.2210.91", DeviceType.DESKTOP, OSType.WINDOWS, "10.0"),
            (SAFARI_IPHONE, BrowserType.SAFARI, "17.1", DeviceType.PHONE, OSType.IOS, "17.1"),
            (SAFARI_IPAD, BrowserType.SAFARI, "16.6", DeviceType.TABLET, OSType.IOS, "16.6"),
            (CHROME_ANDROID_PHONE, BrowserType.CHROME, "120.0.6099.144", DeviceType.PHONE, OSType.ANDROID, "14"),
            (FIREFOX_LINUX, BrowserType.FIREFOX, "121.0", DeviceType.DESKTOP, OSType.LINUX, None),
            (OPERA_WINDOWS, BrowserType.OPERA, "105.0.0.0", DeviceType.DESKTOP, OSType.WINDOWS, "10.0"),
        ],
    )
    def test_detects(self, user_agent, browser, version, device, os_type, os_version):
        context = build_browser_context(RuntimeEnvironment(user_agent=user_agent))

        assert context.browser_type is browser
        assert context.browser_version == version
        assert context.device_type is device
        assert context.os_type is os_type
        assert context.os_version == os_version

    def test_unknown_user_agent(self):
        context = build_browser_context(RuntimeEnvironment(user_agent="curl/8.4.0"))
        assert context.browser_type is BrowserType.BROWSER_UNKNOWN
        assert context.os_type is OSType.OS_UNKNOWN

    def test_origin_and_library_are_carried(self):
        context = build_browser_context(
            RuntimeEnvironment(user_agent=CHROME_MAC, origin="https://shop.example.com"),
            library_version="1.0.0",
            library_variant="python",
        )
        assert context.app_origin == "https://shop.example.com"
        assert context.library_version == "1.0.0"
        assert context.library_variant == "python"


class TestPlatformDetection:
    """Test detection without a user agent."""

    def test_describes_host_platform(self):
        context = build_browser_context(RuntimeEnvironment(system="Linux", release="6.5.0"))

        assert context.browser_type is BrowserType.BROWSER_UNKNOWN
        assert context.device_type is DeviceType.UNKNOWN_DEVICE_TYPE
        assert context.os_type is OSType.LINUX
        assert context.os_version == "6.5.0"

    def test_is_pure(self):
        environment = RuntimeEnvironment(system="Darwin", release="23.1.0")
        assert build_browser_context(environment) == build_browser_context(environment)

    def test_from_process_reads_platform(self, monkeypatch):
        monkeypatch.setattr("platform.system", lambda: "Windows")
        monkeypatch.setattr("platform.release", lambda: "11")

        environment = RuntimeEnvironment.from_process(origin="https://kiosk.local")

        assert environment == RuntimeEnvironment(origin="https://kiosk.local", system="Windows", release="11")
        assert build_browser_context(environment).os_type is OSType.WINDOWS
