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
Storefront SDK RPC

One outbound call per :class:`ServiceRPC`, reported through a success or a
failure continuation. Transport problems never raise to the caller.
"""

import json
import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future
from enum import Enum
from typing import Any

import httpx

from . import __version__
from .auth import AuthManager
from .config import StorefrontConfig

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[int | None], None]


class Routine(Enum):
    """Named API operations, used for logging and headers."""

    ENROLL_USER = "enroll_user"
    CHECK_ZIP = "check_zip"
    SHOP_INFO = "shop_info"
    SEND_EVENT = "send_event"


def build_http_client(config: StorefrontConfig) -> httpx.Client:
    """Build the shared HTTP client. Connection retries live in the transport."""
    transport = httpx.HTTPTransport(retries=config.max_retries)
    return httpx.Client(transport=transport, timeout=config.timeout)


class ServiceRPC:
    """A single request against the shop or telemetry service."""

    def __init__(
        self,
        routine: Routine,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        *,
        config: StorefrontConfig,
        client: httpx.Client,
        auth: AuthManager | None = None,
        service: str = "shop",
    ):
        self.routine = routine
        self.method = method.upper()
        self.path = path.lstrip("/")
        self.body = body
        self.config = config
        self.client = client
        self.auth = auth or AuthManager(config)
        self.service = service

    @property
    def url(self) -> str:
        if self.service == "telemetry":
            endpoint, version = self.config.telemetry_endpoint, self.config.telemetry_api_version
        else:
            endpoint, version = self.config.shop_endpoint, self.config.shop_api_version
        return f"{endpoint.rstrip('/')}/{self.service}/{version}/{self.path}"

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": f"Storefront-Python-SDK/{__version__}",
            "Accept": "application/json",
            "X-Storefront-Routine": self.routine.value,
        }
        if self.body is not None:
            headers["Content-Type"] = "application/json"
        headers.update(self.config.custom_headers)
        if self.auth.has_credentials():
            headers.update(self.auth.get_auth_header())
        return headers

    def send(
        self,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
        executor: Executor | None = None,
    ) -> Future | None:
        """Issue the call. Exactly one of the continuations fires.

        With an ``executor`` the call runs there and its ``Future`` is
        returned; otherwise it runs before ``send`` returns.

        Raises:
            AuthenticationError: If the configured credential is unusable.
        """
        headers = self._get_headers()
        if self.config.log_requests:
            logger.debug("%s %s %s body=%s", self.routine.value, self.method, self.url, self.body)
        if executor is not None:
            return executor.submit(self._execute, headers, on_success, on_failure)
        self._execute(headers, on_success, on_failure)
        return None

    def _execute(self, headers: dict[str, str], on_success: SuccessCallback, on_failure: FailureCallback) -> None:
        try:
            response = self.client.request(self.method, self.url, json=self.body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("RPC %s failed in transport: %s", self.routine.value, e)
            on_failure(None)
            return

        if response.status_code >= 400:
            logger.error("RPC %s failed with status %s.", self.routine.value, response.status_code)
            on_failure(response.status_code)
            return

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.error("RPC %s response could not be decoded.", self.routine.value)
            on_failure(None)
            return

        if self.config.log_responses:
            logger.debug("%s response: %s", self.routine.value, payload)
        on_success(payload)


class Transport:
    """Everything a sender needs to issue calls: config, HTTP client, auth and an optional executor."""

    def __init__(
        self,
        config: StorefrontConfig,
        client: httpx.Client | None = None,
        auth: AuthManager | None = None,
        executor: Executor | None = None,
    ):
        self.config = config
        self.client = client or build_http_client(config)
        self.auth = auth or AuthManager(config)
        self.executor = executor

    def call(
        self,
        routine: Routine,
        method: str,
        path: str,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
        body: dict[str, Any] | None = None,
        service: str = "shop",
    ) -> Future | None:
        rpc = ServiceRPC(
            routine, method, path, body, config=self.config, client=self.client, auth=self.auth, service=service
        )
        return rpc.send(on_success, on_failure, executor=self.executor)

    def close(self) -> None:
        self.client.close()
