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

"""Global context cache.

Holds the values that are detected, loaded or computed once per process and
merged into every event: the device fingerprint, the session ID and the
global :class:`~storefront_sdk.telemetry.context.Context`. One instance is
created at application start and handed to whatever sends events.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable

from ..config import StorefrontConfig
from .context import BrowserContext, Context
from .environment import RuntimeEnvironment, build_browser_context
from .storage import KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)

DEVICE_FINGERPRINT_KEY = "sf:v1:t.df"
SESSION_ID_KEY = "sf:v1:t.sid"


def generate_uuid() -> str:
    return str(uuid.uuid4())


class GlobalContextCache:
    """Process-wide context state with an explicit lifecycle.

    ``device_storage`` should be durable (it survives restarts); ``session_storage``
    is reset at session boundaries by whoever owns it. Access is serialized by
    a lock so create-if-absent stays idempotent across threads.
    """

    def __init__(
        self,
        config: StorefrontConfig,
        device_storage: KeyValueStorage | None = None,
        session_storage: KeyValueStorage | None = None,
        environment: RuntimeEnvironment | None = None,
        library_version: str | None = None,
        library_variant: str | None = None,
        id_factory: Callable[[], str] = generate_uuid,
    ):
        self.config = config
        self.device_storage = device_storage if device_storage is not None else MemoryStorage()
        self.session_storage = session_storage if session_storage is not None else MemoryStorage()
        self.environment = environment
        self.library_version = library_version
        self.library_variant = library_variant
        self._id_factory = id_factory
        self._lock = threading.RLock()

        self.device_fingerprint: str | None = None
        self.session_id: str | None = None
        self.cached_context: Context | None = None

    def _resolve(self, storage: KeyValueStorage, key: str, label: str) -> str:
        existing = storage.get(key)
        if existing and isinstance(existing, str):
            return existing
        created = self._id_factory()
        storage.set(key, created)
        logger.info("Established %s: '%s'.", label, created)
        return created

    def resolve_fingerprint(self) -> str:
        """Return the device fingerprint, creating and persisting it if absent."""
        with self._lock:
            self.device_fingerprint = self._resolve(self.device_storage, DEVICE_FINGERPRINT_KEY, "device fingerprint")
            return self.device_fingerprint

    def resolve_session_id(self) -> str:
        """Return the session ID, creating and persisting it if absent."""
        with self._lock:
            self.session_id = self._resolve(self.session_storage, SESSION_ID_KEY, "user session ID")
            return self.session_id

    def browser_context(self) -> BrowserContext:
        environment = self.environment or RuntimeEnvironment.from_process(
            user_agent=self.config.user_agent, origin=self.config.origin
        )
        return build_browser_context(
            environment, library_version=self.library_version, library_variant=self.library_variant
        )

    def global_context(self, force_fresh: bool = False) -> Context:
        """Return the cached global context, recomputing it when empty or forced."""
        with self._lock:
            if self.cached_context is None or force_fresh:
                self.cached_context = Context(
                    partner=self.config.partner or None,
                    location=self.config.location or None,
                    fingerprint=self.resolve_fingerprint(),
                    session=self.resolve_session_id(),
                    browser=self.browser_context(),
                )
                logger.debug("Computed global context: %s", self.cached_context)
            return self.cached_context

    def invalidate(self) -> None:
        """Drop in-memory values; storage is untouched."""
        with self._lock:
            self.device_fingerprint = None
            self.session_id = None
            self.cached_context = None

    def end_session(self) -> None:
        """Forget the current session so the next resolve starts a new one."""
        with self._lock:
            self.session_storage.delete(SESSION_ID_KEY)
            self.session_id = None
            self.cached_context = None
