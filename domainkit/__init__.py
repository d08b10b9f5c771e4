"""
domainkit: domain-driven design building blocks.

Entities with dual business-key identity, immutable value objects backed by a
structural clone/equality/freeze engine, aggregate roots with domain events,
and a Result type.
"""

from domainkit.domain.common import (
    AggregateRoot,
    DomainError,
    DomainEvent,
    Entity,
    EntityId,
    GenericValueObjectBuilder,
    Result,
    ValidationError,
    ValueObject,
    ValueObjectBuilder,
)
from domainkit.utils import deep_clone, deep_equals, deep_freeze

__version__ = "0.1.0"

__all__ = [
    "AggregateRoot",
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "GenericValueObjectBuilder",
    "Result",
    "ValidationError",
    "ValueObject",
    "ValueObjectBuilder",
    "deep_clone",
    "deep_equals",
    "deep_freeze",
]
