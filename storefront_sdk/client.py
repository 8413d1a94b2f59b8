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
Storefront Client Implementation

Main client class wiring configuration, transport and the global context
cache together for shop and telemetry calls.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future
from dataclasses import replace
from typing import Any

import httpx

from . import VARIANT, __version__
from .auth import AuthManager
from .config import StorefrontConfig, get_global_config
from .rpc import Routine, Transport
from .shop.enroll import EnrollCallback, Enrollment
from .shop.info import ShopInfoCallback, shop_info
from .shop.zipcheck import ZipcheckCallback, zipcheck
from .telemetry.cache import GlobalContextCache
from .telemetry.context import Context
from .telemetry.environment import RuntimeEnvironment
from .telemetry.serializer import EventType, serialize_generic
from .telemetry.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)

# (ok, status_code)
EventCallback = Callable[[bool, int | None], None]


class StorefrontClient:
    """
    Client for the Storefront shop and telemetry APIs.

    Senders report through callbacks. By default calls complete before the
    method returns; pass an ``executor`` to run them in the background, in
    which case each method returns the call's ``Future``.
    """

    def __init__(
        self,
        config: StorefrontConfig | None = None,
        *,
        api_key: str | None = None,
        partner: str | None = None,
        location: str | None = None,
        http_client: httpx.Client | None = None,
        device_storage: KeyValueStorage | None = None,
        session_storage: KeyValueStorage | None = None,
        environment: RuntimeEnvironment | None = None,
        executor: Executor | None = None,
    ):
        """
        Initialize the Storefront client.

        Args:
            config: Optional configuration object; defaults to a copy of the
                global configuration
            api_key: API key for authentication
            partner: Partner code to scope calls and context to
            location: Location code within the partner
            http_client: Pre-built ``httpx.Client`` (tests pass a mock transport here)
            device_storage: Durable storage for the device fingerprint
            session_storage: Session-scoped storage for the session ID
            environment: Environment to detect browser context from
            executor: Optional executor for background dispatch
        """
        # copied so the overrides below never leak into the global config
        self.config = config if config is not None else replace(get_global_config())

        # Override config with explicit parameters
        if api_key:
            self.config.api_key = api_key
        if partner:
            self.config.partner = partner
        if location:
            self.config.location = location

        log_level = "DEBUG" if self.config.debug else self.config.log_level.upper()
        logging.getLogger("storefront_sdk").setLevel(log_level)

        self.auth = AuthManager(self.config)
        self.transport = Transport(self.config, client=http_client, auth=self.auth, executor=executor)

        if device_storage is None:
            device_storage = (
                JsonFileStorage(self.config.fingerprint_path) if self.config.fingerprint_path else MemoryStorage()
            )
        self.context_cache = GlobalContextCache(
            self.config,
            device_storage=device_storage,
            session_storage=session_storage,
            environment=environment,
            library_version=__version__,
            library_variant=VARIANT,
        )

    def global_context(self, force_fresh: bool = False) -> Context:
        """Global context merged into every event."""
        return self.context_cache.global_context(force_fresh=force_fresh)

    def enroll(self, enrollment: Enrollment, callback: EnrollCallback) -> Future | None:
        """Enroll a member; ``callback(ok, error, customer)``."""
        return enrollment.send(callback, self.transport)

    def zipcheck(self, zipcode: str, callback: ZipcheckCallback) -> Future | None:
        """Check delivery eligibility; ``callback(supported)``."""
        return zipcheck(zipcode, callback, self.transport)

    def shop_info(self, callback: ShopInfoCallback) -> Future | None:
        """Fetch shop status; ``callback(pickup, delivery, error_code)``."""
        return shop_info(callback, self.transport)

    def send_event(
        self,
        event_type: EventType | str,
        payload: Any,
        context: Context | None = None,
        callback: EventCallback | None = None,
    ) -> Future | None:
        """
        Send a telemetry event with the global context merged in.

        Args:
            event_type: Event tag
            payload: Payload model or dict for the tag
            context: Event-level context, merged over the global context
            callback: Optional ``callback(ok, status_code)``

        Raises:
            SerializationError: If the event cannot be serialized
        """
        global_context = self.global_context()
        merged = context.merged_with(global_context) if context is not None else global_context
        event = serialize_generic(event_type, payload, merged)

        done = False

        def on_success(_response: Any) -> None:
            nonlocal done
            if done:
                return
            done = True
            if callback:
                callback(True, None)

        def on_failure(status: int | None) -> None:
            nonlocal done
            if done:
                return
            done = True
            logger.error("Failed to send telemetry event. Status code: '%s'.", status)
            if callback:
                callback(False, status)

        return self.transport.call(
            Routine.SEND_EVENT, "POST", "event", on_success, on_failure, body=event.to_wire(), service="telemetry"
        )

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self):
        """Close the HTTP client."""
        self.transport.close()
