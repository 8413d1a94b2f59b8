"""Pytest configuration and shared fixtures for the Storefront SDK tests."""

# Ensure project root on sys.path for imports
import os
import sys
from collections.abc import Callable
from typing import Any

import httpx
import pytest

root = os.path.dirname(os.path.abspath(__file__))
proj = os.path.abspath(os.path.join(root, ".."))
if proj not in sys.path:
    sys.path.insert(0, proj)

from storefront_sdk.config import StorefrontConfig, set_global_config  # noqa: E402
from storefront_sdk.rpc import Transport  # noqa: E402


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: Any) -> None:
    """Keep developer STOREFRONT_* variables from leaking into config objects."""
    for name in list(os.environ):
        if name.startswith("STOREFRONT_"):
            monkeypatch.delenv(name, raising=False)
    set_global_config(None)


@pytest.fixture
def config() -> StorefrontConfig:
    return StorefrontConfig(api_key="test-key", partner="acme", location="downtown")


class MockShopAPI:
    """Fake HTTP backend recording every request it receives."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


def json_responder(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def respond(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return respond


def raising_responder(_request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused")


@pytest.fixture
def mock_api() -> Callable[..., tuple[MockShopAPI, Transport]]:
    """Build a (fake backend, transport) pair for a config and responder."""

    def build(
        config: StorefrontConfig, responder: Callable[[httpx.Request], httpx.Response]
    ) -> tuple[MockShopAPI, Transport]:
        api = MockShopAPI(responder)
        return api, Transport(config, client=api.client())

    return build


class ReplayTransport:
    """Transport stand-in that replays a fixed sequence of continuation calls.

    Each delivery is ``("success", payload)`` or ``("failure", status)``; all of
    them are fired in order for every call, as a misbehaving backend might.
    """

    def __init__(self, config: StorefrontConfig, deliveries: list[tuple[str, Any]]) -> None:
        self.config = config
        self.deliveries = deliveries
        self.calls: list[tuple[Any, str, str]] = []

    def call(self, routine, method, path, on_success, on_failure, body=None, service="shop"):
        self.calls.append((routine, method, path))
        for kind, value in self.deliveries:
            if kind == "success":
                on_success(value)
            else:
                on_failure(value)
        return None
