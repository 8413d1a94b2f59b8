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
Storefront SDK Configuration

Configuration management for the Storefront SDK.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any

from .exceptions import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_flag(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.lower() in ("true", "1", "yes")


@dataclass
class StorefrontConfig:
    """Configuration for the Storefront SDK."""

    # API Configuration
    api_key: str | None = None
    shop_endpoint: str = "https://shop.api.storefront.cloud"
    shop_api_version: str = "v1"
    telemetry_endpoint: str = "https://telemetry.api.storefront.cloud"
    telemetry_api_version: str = "v1beta2"

    # Tenant scope
    partner: str | None = None
    location: str | None = None

    # Request Configuration
    timeout: float = 30.0
    max_retries: int = 2

    # Logging Configuration
    log_level: str = "INFO"
    log_requests: bool = False
    log_responses: bool = False
    debug: bool = False  # forces DEBUG logging for the storefront_sdk logger

    # Environment overrides for context detection
    user_agent: str | None = None
    origin: str | None = None
    fingerprint_path: str | None = None

    # Additional Headers
    custom_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Post-initialization validation and environment variable loading."""
        self._load_from_environment()
        self._validate_config()

    def _load_from_environment(self):
        """Load configuration from environment variables."""
        if not self.api_key:
            self.api_key = os.getenv("STOREFRONT_API_KEY")

        if not self.partner:
            self.partner = os.getenv("STOREFRONT_PARTNER")

        if not self.location:
            self.location = os.getenv("STOREFRONT_LOCATION")

        if os.getenv("STOREFRONT_SHOP_ENDPOINT"):
            self.shop_endpoint = os.getenv("STOREFRONT_SHOP_ENDPOINT")

        if os.getenv("STOREFRONT_TELEMETRY_ENDPOINT"):
            self.telemetry_endpoint = os.getenv("STOREFRONT_TELEMETRY_ENDPOINT")

        if os.getenv("STOREFRONT_TIMEOUT"):
            try:
                self.timeout = float(os.getenv("STOREFRONT_TIMEOUT"))
            except ValueError:
                raise ConfigurationError(f"Invalid STOREFRONT_TIMEOUT: {os.getenv('STOREFRONT_TIMEOUT')!r}")

        if os.getenv("STOREFRONT_LOG_LEVEL"):
            self.log_level = os.getenv("STOREFRONT_LOG_LEVEL").upper()

        log_requests = _env_flag("STOREFRONT_LOG_REQUESTS")
        if log_requests is not None:
            self.log_requests = log_requests

        log_responses = _env_flag("STOREFRONT_LOG_RESPONSES")
        if log_responses is not None:
            self.log_responses = log_responses

        debug = _env_flag("STOREFRONT_DEBUG")
        if debug is not None:
            self.debug = debug

        if not self.fingerprint_path:
            self.fingerprint_path = os.getenv("STOREFRONT_FINGERPRINT_PATH")

    def _validate_config(self):
        """Validate configuration values."""
        if not self.shop_endpoint:
            raise ConfigurationError("Shop endpoint is required.")

        if not self.telemetry_endpoint:
            raise ConfigurationError("Telemetry endpoint is required.")

        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be positive.")

        if self.max_retries < 0:
            raise ConfigurationError("Max retries must be non-negative.")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"Log level must be one of: {', '.join(_LOG_LEVELS)}")

    def has_scope(self) -> bool:
        """Whether a usable partner and location code are both configured."""
        return (
            isinstance(self.partner, str)
            and len(self.partner) > 1
            and isinstance(self.location, str)
            and len(self.location) > 1
        )

    @classmethod
    def from_file(cls, config_file: str) -> "StorefrontConfig":
        """Load configuration from a JSON or YAML file."""
        import json

        import yaml

        try:
            with open(config_file) as f:
                if config_file.endswith(".json"):
                    config_data = json.load(f)
                elif config_file.endswith((".yml", ".yaml")):
                    config_data = yaml.safe_load(f)
                else:
                    raise ConfigurationError(f"Unsupported config file format: {config_file}")

            return cls(**(config_data or {}))

        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}")
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration parameter in {config_file}: {e}")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["api_key"] = "***" if self.api_key else None  # Mask API key
        return data

    def update(self, **kwargs):
        """Update configuration with new values."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ConfigurationError(f"Unknown configuration parameter: {key}")

        self._validate_config()


# Global configuration instance
_global_config: StorefrontConfig | None = None


def get_global_config() -> StorefrontConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = StorefrontConfig()
    return _global_config


def set_global_config(config: StorefrontConfig | None):
    """Set (or with ``None``, clear) the global configuration instance."""
    global _global_config
    _global_config = config


def configure(**kwargs):
    """Configure the global Storefront SDK settings."""
    config = get_global_config()
    config.update(**kwargs)
