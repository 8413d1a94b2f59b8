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

"""Delivery eligibility check for a zipcode."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from ..exceptions import ConfigurationError, ValidationError
from ..rpc import Routine, Transport

logger = logging.getLogger(__name__)

# receives True/False, or None when the check could not be completed
ZipcheckCallback = Callable[[bool | None], None]


def validate_zipcode(zipcode: Any) -> str:
    if not isinstance(zipcode, str) or len(zipcode) != 5 or not (zipcode.isascii() and zipcode.isdigit()):
        raise ValidationError(f"Zipcode was found to be invalid: {zipcode}", field="zipcode", value=zipcode)
    return zipcode


def zipcheck(zipcode: str, callback: ZipcheckCallback, transport: Transport) -> Future | None:
    """Ask whether the configured location delivers to ``zipcode``.

    Raises:
        ValidationError: If ``zipcode`` is not five digits.
        ConfigurationError: If partner or location are not configured.
    """
    validate_zipcode(zipcode)

    config = transport.config
    if not config.has_scope():
        raise ConfigurationError(
            "Partner and location must be configured before conducting a zipcode eligibility check.",
            details={"partner": config.partner, "location": config.location},
        )

    logger.info("Verifying zipcode '%s' for delivery eligibility...", zipcode)
    path = "/".join(["partners", config.partner, "locations", config.location, "zipcheck", zipcode])

    done = False

    def on_success(response: Any) -> None:
        nonlocal done
        if done:
            return
        done = True

        if isinstance(response, dict):
            callback(response.get("supported") is True)
        else:
            logger.error("Received unrecognized response payload for zipcheck: %r", response)
            callback(None)

    def on_failure(status: int | None) -> None:
        nonlocal done
        if done:
            return
        done = True
        logger.error("An error occurred while verifying a zipcode. Status code: '%s'.", status)
        callback(None)

    return transport.call(Routine.CHECK_ZIP, "GET", path, on_success, on_failure)
