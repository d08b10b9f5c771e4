"""
Base class for Domain Events.

Domain Events represent something significant that happened in the domain.
They are immutable records of past occurrences that other parts of the
system can react to.

Example:
    @dataclass(frozen=True)
    class OrderSubmitted(DomainEvent):
        total_cents: int

    event = OrderSubmitted(total_cents=1200, aggregate_id=order.local_token)
    data = event.to_dict()
    restored = deserialize_event(data, create_event_registry(OrderSubmitted))
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

import structlog

from domainkit.domain.common.exceptions import EventDeserializationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for Domain Events.

    Domain Events are:
    - Immutable (frozen dataclass)
    - Named in past tense (OrderSubmitted, not SubmitOrder)
    - Self-contained (carry all data needed to understand what happened)
    - Timestamped (when the event occurred)

    Subclasses should be decorated with @dataclass(frozen=True)
    and define their specific attributes.
    """

    aggregate_id: str = field(kw_only=True)
    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC), kw_only=True)

    @property
    def event_type(self) -> str:
        """Return the event type name for serialization."""
        return self.__class__.__name__

    @property
    def event_name(self) -> str:
        """Display name of the event; defaults to the event type."""
        return self.event_type

    def to_dict(self) -> dict[str, object]:
        """Convert event to dictionary for serialization."""
        result: dict[str, object] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                result[f.name] = value.isoformat()
            elif isinstance(value, UUID):
                result[f.name] = str(value)
            elif hasattr(value, "to_primitive"):
                result[f.name] = value.to_primitive()
            else:
                result[f.name] = value
        result["event_type"] = self.event_type
        return result


EventRegistry = Mapping[str, type[DomainEvent]]


def create_event_registry(*event_classes: type[DomainEvent]) -> dict[str, type[DomainEvent]]:
    """Map each event class's type name to the class."""
    return {event_class.__name__: event_class for event_class in event_classes}


def deserialize_event(data: Mapping[str, Any], registry: EventRegistry) -> DomainEvent:
    """
    Rebuild a domain event from the output of ``DomainEvent.to_dict``.

    The original ``event_id`` and ``occurred_at`` are kept.

    Args:
        data: Serialized event, including ``event_type``
        registry: Event classes by type name (see ``create_event_registry``)

    Returns:
        The restored event

    Raises:
        EventDeserializationError: If ``event_type`` is missing or unknown,
            or the payload does not fit the event class
    """
    event_type = data.get("event_type")
    if not event_type:
        raise EventDeserializationError("Invalid event data: missing event_type field")

    event_class = registry.get(event_type)
    if event_class is None:
        available = ", ".join(sorted(registry)) or "none"
        logger.warning("domain_event_type_unknown", event_type=event_type)
        raise EventDeserializationError(
            f"Unknown event type: {event_type}. Available types: {available}",
            {"event_type": event_type},
        )

    payload = {key: value for key, value in data.items() if key != "event_type"}
    try:
        if "event_id" in payload:
            payload["event_id"] = UUID(str(payload["event_id"]))
        if isinstance(payload.get("occurred_at"), str):
            payload["occurred_at"] = datetime.fromisoformat(payload["occurred_at"])
        event = event_class(**payload)
    except (TypeError, ValueError) as err:
        raise EventDeserializationError(
            f"Cannot deserialize {event_type}: {err}", {"event_type": event_type}
        ) from err

    logger.debug("domain_event_deserialized", event_type=event_type, event_id=str(event.event_id))
    return event
