"""Tests for the zipcode eligibility check."""

from unittest.mock import MagicMock

import pytest

from conftest import ReplayTransport, json_responder, raising_responder
from storefront_sdk.config import StorefrontConfig
from storefront_sdk.exceptions import ConfigurationError, ValidationError
from storefront_sdk.shop import validate_zipcode, zipcheck


class TestZipcheck:
    """Test zipcheck requests and outcomes."""

    def test_supported(self, config, mock_api):
        api, transport = mock_api(config, json_responder({"supported": True}))
        callback = MagicMock()

        zipcheck("94612", callback, transport)

        assert str(api.requests[0].url) == (
            "https://shop.api.storefront.cloud/shop/v1/partners/acme/locations/downtown/zipcheck/94612"
        )
        callback.assert_called_once_with(True)

    @pytest.mark.parametrize("payload", [{"supported": False}, {}, {"supported": "yes"}])
    def test_not_supported(self, config, mock_api, payload):
        _, transport = mock_api(config, json_responder(payload))
        callback = MagicMock()

        zipcheck("94612", callback, transport)

        callback.assert_called_once_with(False)

    def test_non_object_response(self, config, mock_api):
        _, transport = mock_api(config, json_responder([True]))
        callback = MagicMock()

        zipcheck("94612", callback, transport)

        callback.assert_called_once_with(None)

    def test_transport_failure(self, config, mock_api):
        _, transport = mock_api(config, raising_responder)
        callback = MagicMock()

        zipcheck("94612", callback, transport)

        callback.assert_called_once_with(None)

    def test_status_failure(self, config, mock_api):
        _, transport = mock_api(config, json_responder({"supported": True}, status_code=404))
        callback = MagicMock()

        zipcheck("94612", callback, transport)

        callback.assert_called_once_with(None)

    def test_missing_scope_raises(self, mock_api):
        api, transport = mock_api(StorefrontConfig(api_key="test-key"), json_responder({}))

        with pytest.raises(ConfigurationError):
            zipcheck("94612", MagicMock(), transport)
        assert api.requests == []


@pytest.mark.parametrize(
    "zipcode",
    [
        "9461",
        "946123",
        "9461a",
        "",
        None,
        94612,
        # Arabic-Indic and fullwidth digits
        "\u0661\u0662\u0663\u0664\u0665",
        "\uff19\uff14\uff16\uff11\uff12",
    ],
)
def test_invalid_zipcode(zipcode):
    with pytest.raises(ValidationError) as exc_info:
        validate_zipcode(zipcode)
    assert exc_info.value.field == "zipcode"


def test_invalid_zipcode_sends_nothing(config, mock_api):
    api, transport = mock_api(config, json_responder({}))

    with pytest.raises(ValidationError):
        zipcheck("abcde", MagicMock(), transport)
    assert api.requests == []


@pytest.mark.parametrize(
    "deliveries, expected",
    [
        ([("success", {"supported": True}), ("success", {"supported": False})], True),
        ([("success", {"supported": True}), ("failure", 500)], True),
        ([("failure", 500), ("success", {"supported": True})], None),
    ],
)
def test_callback_fires_once(config, deliveries, expected):
    callback = MagicMock()
    transport = ReplayTransport(config, deliveries)

    zipcheck("94612", callback, transport)

    assert len(transport.calls) == 1
    callback.assert_called_once_with(expected)
