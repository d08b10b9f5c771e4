"""
Domain common module.

Contains base classes for domain modeling:
- EntityId: Identity with a local token and two write-once business keys
- Entity: Objects with identity and lifecycle
- AggregateRoot: Consistency boundaries with domain events
- DomainEvent: Notifications of significant domain occurrences
- ValueObject: Immutable objects defined by their attributes
- ValueObjectBuilder: Fluent, validating construction of value objects
- Result: Success or failure returned as a value
"""

from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent, create_event_registry, deserialize_event
from .entity import Entity
from .entity_id import EntityId, EntityIdSnapshot
from .exceptions import (
    DomainError,
    EventDeserializationError,
    InvalidKeyError,
    InvalidSnapshotError,
    KeyAlreadySetError,
    ResultAccessError,
    ValidationError,
)
from .result import Result, combine_results, sequence
from .value_object import ValueObject
from .value_object_builder import GenericValueObjectBuilder, ValueObjectBuilder

__all__ = [
    "AggregateRoot",
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "EntityIdSnapshot",
    "EventDeserializationError",
    "GenericValueObjectBuilder",
    "InvalidKeyError",
    "InvalidSnapshotError",
    "KeyAlreadySetError",
    "Result",
    "ResultAccessError",
    "ValidationError",
    "ValueObject",
    "ValueObjectBuilder",
    "combine_results",
    "create_event_registry",
    "deserialize_event",
    "sequence",
]
