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

"""Shop status for the configured partner location."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from enum import Enum
from typing import Any

from ..exceptions import ConfigurationError
from ..rpc import Routine, Transport

logger = logging.getLogger(__name__)

# (pickup_available, delivery_available, error_code)
ShopInfoCallback = Callable[[bool | None, bool | None, int | None], None]


class ShopStatus(Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    PICKUP_ONLY = "PICKUP_ONLY"
    DELIVERY_ONLY = "DELIVERY_ONLY"


def shop_availability(status: ShopStatus | str | None) -> tuple[bool, bool]:
    """Map a shop status to ``(pickup, delivery)``. Absent or unknown means fully open."""
    if isinstance(status, str):
        try:
            status = ShopStatus(status)
        except ValueError:
            status = None

    if status is ShopStatus.CLOSED:
        return False, False
    if status is ShopStatus.DELIVERY_ONLY:
        return False, True
    if status is ShopStatus.PICKUP_ONLY:
        return True, False
    return True, True


def shop_info(callback: ShopInfoCallback, transport: Transport) -> Future | None:
    """Fetch pickup/delivery availability for the configured location.

    Raises:
        ConfigurationError: If partner or location are not configured.
    """
    config = transport.config
    if not config.has_scope():
        raise ConfigurationError(
            "Partner and location must be configured before retrieving shop info.",
            details={"partner": config.partner, "location": config.location},
        )

    logger.info("Retrieving shop info for '%s:%s'...", config.partner, config.location)
    path = "/".join(["partners", config.partner, "locations", config.location, "shop", "info"])

    done = False

    def on_success(response: Any) -> None:
        nonlocal done
        if done:
            return
        done = True

        if isinstance(response, dict):
            pickup, delivery = shop_availability(response.get("shopStatus"))
            callback(pickup, delivery, None)
        else:
            logger.error("Received unrecognized response payload for shop info: %r", response)
            callback(None, None, None)

    def on_failure(status: int | None) -> None:
        nonlocal done
        if done:
            return
        done = True
        logger.error("An error occurred while querying shop info. Status code: '%s'.", status)
        callback(None, None, status or None)

    return transport.call(Routine.SHOP_INFO, "GET", path, on_success, on_failure)
