"""
Base class for Aggregate Roots.

Aggregate Roots are the entry point to an aggregate - a cluster of domain
objects that are treated as a single unit. All external references should
go through the aggregate root, and all invariants are enforced here.

Example:
    @dataclass(eq=False)
    class Order(AggregateRoot[int]):
        customer_id: str
        status: str = "draft"

        def validate(self) -> None:
            if not self.customer_id:
                raise ValidationError("Customer is required", field="customer_id")

        def submit(self) -> None:
            self.status = "submitted"
            self.add_domain_event(OrderSubmitted(aggregate_id=self.local_token))
"""

from dataclasses import dataclass, field
from typing import Generic

from domainkit.domain.common.domain_event import DomainEvent
from domainkit.domain.common.entity import Entity
from domainkit.domain.common.entity_id import KeyT


@dataclass(eq=False)
class AggregateRoot(Entity[KeyT], Generic[KeyT]):
    """
    Base class for Aggregate Roots in the domain model.

    Aggregate Roots are:
    - Entry point to an aggregate (cluster of related entities)
    - Responsible for maintaining invariants
    - The only entity referenced from outside the aggregate
    - Can record domain events for later dispatch

    Recording is append-only; dispatching is left to the caller.
    """

    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def add_domain_event(self, event: DomainEvent) -> None:
        """Record a domain event to be dispatched later."""
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """
        Collect and clear all recorded domain events.

        Called by whoever dispatches events, typically after the aggregate
        is persisted.
        """
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def domain_events(self) -> list[DomainEvent]:
        """Return pending events without clearing them."""
        return self._events.copy()

    def clear_domain_events(self) -> None:
        self._events.clear()

    def has_domain_events(self) -> bool:
        return bool(self._events)

    @property
    def domain_event_count(self) -> int:
        return len(self._events)
