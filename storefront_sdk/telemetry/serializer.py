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

"""Event serialization: places a typed event payload into a telemetry envelope."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import SerializationError, SerializationErrorKind
from ..models import AnalyticsContext, GenericEvent, GenericException, TelemetryEvent, WireModel
from .context import Context

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event tags. Only the generic variants have an envelope field today."""

    EVENT = "genericEvent"
    EXCEPTION = "genericError"
    SECTION_IMPRESSION = "sectionImpression"
    SECTION_VIEW = "sectionView"
    SECTION_ACTION = "sectionAction"
    PRODUCT_IMPRESSION = "productImpression"
    PRODUCT_VIEW = "productView"
    PRODUCT_ACTION = "productAction"
    ORDER_ACTION = "orderAction"


# envelope field and payload model per serializable variant
ENVELOPE_FIELDS: dict[EventType, tuple[str, type[WireModel]]] = {
    EventType.EVENT: ("generic", GenericEvent),
    EventType.EXCEPTION: ("error", GenericException),
}


def resolve_event_type(tag: EventType | str) -> EventType | None:
    if isinstance(tag, EventType):
        return tag
    try:
        return EventType(tag)
    except ValueError:
        return None


def _coerce_payload(model: type[WireModel], value: Any) -> WireModel:
    if isinstance(value, model):
        return value
    if isinstance(value, dict):
        return model.model_validate(value)
    raise TypeError(f"expected {model.__name__} or dict, got {type(value).__name__}")


def serialize_generic(
    event_type: EventType | str,
    value: Any,
    context: Context | AnalyticsContext | None = None,
    raise_on_error: bool = True,
) -> TelemetryEvent | None:
    """Serialize an event payload into a :class:`TelemetryEvent`.

    Args:
        event_type: Event tag, as an :class:`EventType` or its wire string.
        value: Payload model for the tag, or a ``dict`` it can be built from.
        context: Context to attach; a :class:`Context` is exported first.
        raise_on_error: When false, failures log and return ``None`` instead.

    Raises:
        SerializationError: If the tag has no envelope field or the payload
            does not fit it, and ``raise_on_error`` is true.
    """
    resolved = resolve_event_type(event_type)
    variant = ENVELOPE_FIELDS.get(resolved) if resolved is not None else None

    if variant is None:
        logger.error("Unrecognized event type, cannot serialize: %s", event_type)
        if raise_on_error:
            raise SerializationError(
                "Unable to serialize generic TelemetryEvent.",
                event_type=event_type,
                value=value,
                kind=SerializationErrorKind.UNRECOGNIZED_TYPE,
            )
        return None

    field_name, model = variant
    try:
        payload = _coerce_payload(model, value)
    except (TypeError, PydanticValidationError) as e:
        logger.error("Invalid payload for event type %s: %s", resolved.value, e)
        if raise_on_error:
            raise SerializationError(
                f"Invalid payload for {resolved.value}: {e}",
                event_type=event_type,
                value=value,
                kind=SerializationErrorKind.INVALID_PAYLOAD,
            )
        return None

    event = TelemetryEvent(**{field_name: payload})
    if context is not None:
        event.context = context.export() if isinstance(context, Context) else context
    return event
