"""
Base class for Entities.

Entities are objects that have a distinct identity that runs through time
and different states. Two entities are equal if their EntityIds identify the
same entity, regardless of their attributes.

Example:
    @dataclass(eq=False)
    class User(Entity[int]):
        name: str
        email: str

        def validate(self) -> None:
            if "@" not in self.email:
                raise ValidationError("Invalid email", field="email", value=self.email)

    user = User(name="Ada", email="ada@example.com")
    user.is_new()            # True
    user.set_business_key(42)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, Generic

from domainkit.domain.common.entity_id import EntityId, KeyT
from domainkit.utils.deep_clone import deep_clone


@dataclass(eq=False)
class Entity(ABC, Generic[KeyT]):
    """
    Base class for Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable (state can change over time)
    - Have lifecycle (created, modified, deleted)

    Subclasses are dataclasses declared with ``eq=False`` so the generated
    field-wise ``__eq__`` does not replace identity equality. ``validate``
    runs after construction.
    """

    id: EntityId[KeyT] = field(default_factory=EntityId.create, kw_only=True)

    def __post_init__(self) -> None:
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Check invariants; raise ValidationError if they do not hold."""

    @property
    def local_token(self) -> str:
        return self.id.local_token

    @property
    def business_key(self) -> KeyT | None:
        return self.id.business_key

    def set_business_key(self, key: KeyT) -> None:
        self.id.set_business_key(key)

    def is_new(self) -> bool:
        return self.id.is_new()

    def equals(self, other: object) -> bool:
        if other is None or not isinstance(other, Entity):
            return False
        return self.id.equals(other.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the identity plus a deep copy of the public fields."""
        props = {
            f.name: deep_clone(getattr(self, f.name))
            for f in fields(self)
            if f.name != "id" and not f.name.startswith("_")
        }
        return {"id": self.id.to_snapshot(), "props": props}
