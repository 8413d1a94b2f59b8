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
Storefront SDK Authentication

Builds the credential header attached to outbound RPCs.
"""

import time

import jwt

from .config import StorefrontConfig
from .exceptions import AuthenticationError


class AuthManager:
    """Manages authentication for Storefront API requests."""

    def __init__(self, config: StorefrontConfig):
        self.config = config
        self._token_cache: str | None = None
        self._token_expires_at: float | None = None

    def has_credentials(self) -> bool:
        return bool(self.config.api_key)

    def get_auth_header(self) -> dict[str, str]:
        """Get authentication header for requests."""
        if not self.config.api_key:
            raise AuthenticationError("No API key configured")

        if self._is_jwt_token(self.config.api_key):
            token = self._get_or_refresh_token()
            return {"Authorization": f"Bearer {token}"}
        return {"Authorization": f"Bearer {self.config.api_key}"}

    def _is_jwt_token(self, token: str) -> bool:
        """Check if the token is a JWT token."""
        # JWT tokens have 3 parts separated by dots
        if len(token.split(".")) != 3:
            return False
        try:
            jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError:
            return False
        return True

    def _get_or_refresh_token(self) -> str:
        """Get cached token or re-read it if expired."""
        current_time = time.time()

        if (
            self._token_cache
            and self._token_cache == self.config.api_key
            and (self._token_expires_at is None or current_time < self._token_expires_at - 60)
        ):  # 60 second buffer
            return self._token_cache

        return self._refresh_token()

    def _refresh_token(self) -> str:
        """Decode the configured JWT and cache it until its expiry."""
        try:
            decoded = jwt.decode(self.config.api_key, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid JWT token: {e}")

        exp = decoded.get("exp")
        if exp and time.time() >= exp:
            raise AuthenticationError("JWT token has expired")

        self._token_cache = self.config.api_key
        self._token_expires_at = exp
        return self._token_cache
