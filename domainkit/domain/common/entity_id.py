"""
Dual business-key entity identifier.

An EntityId couples a locally generated token, fixed for the lifetime of the
handle, with up to two externally assigned business keys:

- primary key: the main key from the system of record (e.g. a database id)
- secondary key: a key from another addressing scheme (e.g. an employee
  number, a legacy or federated system id)

Keys typically arrive after the entity was created, so each slot is
write-once rather than immutable.

Example:
    user_id = EntityId.create()
    user_id.is_new()              # True
    user_id.set_primary_key(42)
    user_id.effective_value       # 42

    legacy = EntityId.restore({"local_token": "...", "secondary_key": 42})
    user_id == legacy             # True, keys cross-match
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Generic, Self, TypeVar

import pydantic
import structlog
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from domainkit.config import get_settings
from domainkit.domain.common.exceptions import (
    InvalidKeyError,
    InvalidSnapshotError,
    KeyAlreadySetError,
)
from domainkit.utils.uuid_utils import generate_uuid

logger = structlog.get_logger(__name__)

KeyT = TypeVar("KeyT", bound=str | int)

BusinessKey = str | int


class EntityIdSnapshot(BaseModel):
    """
    Serialized form of an EntityId.

    Accepts snake_case or camelCase field names. ``business_key`` is the
    legacy single-key field and stands in for ``primary_key`` when that is
    absent. ``created_at`` accepts datetimes, ISO strings and epoch seconds or
    milliseconds, and is emitted as epoch milliseconds.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )

    local_token: str = Field(..., description="Locally generated UUID token")
    primary_key: BusinessKey | None = None
    secondary_key: BusinessKey | None = None
    business_key: BusinessKey | None = Field(None, description="Legacy alias of primary_key")
    created_at: datetime | None = None

    @field_validator("local_token", mode="after")
    @classmethod
    def validate_local_token(cls, value: str) -> str:
        """Token must be non-blank; it is kept exactly as given."""
        if not value.strip():
            msg = "local_token cannot be empty"
            raise ValueError(msg)
        return value

    @field_validator("created_at", mode="after")
    @classmethod
    def ensure_utc(cls, value: datetime | None) -> datetime | None:
        """Naive timestamps are taken to be UTC."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime | None) -> int | None:
        """Emit epoch milliseconds."""
        if value is None:
            return None
        return int(value.timestamp() * 1000)

    @property
    def effective_primary_key(self) -> BusinessKey | None:
        """Primary key, falling back to the legacy business key."""
        return self.primary_key if self.primary_key is not None else self.business_key


class EntityId(Generic[KeyT]):
    """
    Identifier with a local token and two write-once business keys.

    Equality (see ``equals``) reconciles handles populated from different
    combinations of keys. It is not transitive and keys can still be
    assigned, so EntityId is deliberately unhashable.
    """

    __slots__ = ("_local_token", "_primary_key", "_secondary_key", "_created_at")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, local_token: str | None = None, created_at: datetime | None = None) -> None:
        self._local_token = local_token or generate_uuid()
        self._primary_key: KeyT | None = None
        self._secondary_key: KeyT | None = None
        self._created_at = created_at or datetime.now(UTC)

    @classmethod
    def create(cls) -> Self:
        """Create an identifier with a fresh token and no business keys."""
        return cls()

    @classmethod
    def restore(cls, snapshot: "Mapping[str, Any] | EntityIdSnapshot") -> Self:
        """
        Rebuild an identifier from a snapshot.

        Args:
            snapshot: Mapping with ``local_token`` and optionally
                ``primary_key`` (or legacy ``business_key``), ``secondary_key``
                and ``created_at``; or an EntityIdSnapshot

        Returns:
            EntityId with the same token and keys

        Raises:
            InvalidSnapshotError: If the token is missing or empty, or a field is malformed
        """
        if not isinstance(snapshot, EntityIdSnapshot):
            if not isinstance(snapshot, Mapping):
                raise InvalidSnapshotError(
                    f"Snapshot must be a mapping, got {type(snapshot).__name__}"
                )
            try:
                snapshot = EntityIdSnapshot.model_validate(dict(snapshot))
            except pydantic.ValidationError as err:
                errors = [
                    f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                    for error in err.errors()
                ]
                logger.warning("entity_id_snapshot_rejected", errors=errors)
                raise InvalidSnapshotError("Invalid entity id snapshot", errors) from err

        entity_id = cls(snapshot.local_token, snapshot.created_at)
        entity_id._primary_key = snapshot.effective_primary_key  # type: ignore[assignment]
        entity_id._secondary_key = snapshot.secondary_key  # type: ignore[assignment]
        logger.debug(
            "entity_id_restored",
            local_token=entity_id._local_token,
            primary_key=entity_id._primary_key,
            secondary_key=entity_id._secondary_key,
        )
        return entity_id

    @property
    def local_token(self) -> str:
        return self._local_token

    @property
    def primary_key(self) -> KeyT | None:
        return self._primary_key

    @property
    def secondary_key(self) -> KeyT | None:
        return self._secondary_key

    @property
    def business_key(self) -> KeyT | None:
        """Legacy name of the primary key."""
        return self._primary_key

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def set_primary_key(self, key: KeyT) -> None:
        """
        Assign the primary business key (once).

        Raises:
            KeyAlreadySetError: If a primary key is already set
            InvalidKeyError: If key is None
        """
        self._primary_key = self._checked("primary", self._primary_key, key)

    def set_secondary_key(self, key: KeyT) -> None:
        """
        Assign the secondary business key (once).

        Raises:
            KeyAlreadySetError: If a secondary key is already set
            InvalidKeyError: If key is None
        """
        self._secondary_key = self._checked("secondary", self._secondary_key, key)

    def set_business_key(self, key: KeyT) -> None:
        """Legacy setter, assigns the primary key."""
        self._primary_key = self._checked("business", self._primary_key, key)

    def _checked(self, slot: str, current: KeyT | None, key: KeyT | None) -> KeyT:
        if current is not None:
            raise KeyAlreadySetError(slot)
        if key is None:
            raise InvalidKeyError(slot)
        logger.debug("entity_id_key_assigned", slot=slot, key=key, local_token=self._local_token)
        return key

    def has_primary_key(self) -> bool:
        return self._primary_key is not None

    def has_secondary_key(self) -> bool:
        return self._secondary_key is not None

    def has_business_key(self) -> bool:
        return self.has_primary_key()

    def has_any_key(self) -> bool:
        return self.has_primary_key() or self.has_secondary_key()

    def is_new(self) -> bool:
        """True until either business key is assigned."""
        return not self.has_any_key()

    @property
    def effective_value(self) -> KeyT | str:
        """Primary key, else secondary key, else the local token."""
        if self._primary_key is not None:
            return self._primary_key
        if self._secondary_key is not None:
            return self._secondary_key
        return self._local_token

    def equals(self, other: "EntityId[Any] | None") -> bool:
        """
        Decide whether two handles identify the same entity.

        Rules, in order; any matching rule makes the handles equal:
        1. both primary keys are set and equal
        2. both secondary keys are set and equal
        3. this primary key equals the other's secondary key
        4. this secondary key equals the other's primary key
        Otherwise the handles are equal only if their local tokens match.

        Rules 3 and 4 cover systems that assigned the same pair of external
        keys to opposite slots.
        """
        if other is None:
            return False

        mine = (self._primary_key, self._secondary_key)
        theirs = (other.primary_key, other.secondary_key)
        for left, right in (
            (mine[0], theirs[0]),
            (mine[1], theirs[1]),
            (mine[0], theirs[1]),
            (mine[1], theirs[0]),
        ):
            if left is not None and right is not None and left == right:
                return True

        return self._local_token == other.local_token

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityId):
            return NotImplemented
        return self.equals(other)

    def clone(self) -> Self:
        """Independent handle with the same token, keys and creation time."""
        cloned = type(self)(self._local_token, self._created_at)
        cloned._primary_key = self._primary_key
        cloned._secondary_key = self._secondary_key
        return cloned

    def to_snapshot(self, *, by_alias: bool = False) -> dict[str, Any]:
        """
        Serialize to a plain dict.

        The legacy ``business_key`` mirror of the primary key is included
        when the ``EMIT_LEGACY_KEY_ALIAS`` setting is on.
        """
        snapshot = EntityIdSnapshot(
            local_token=self._local_token,
            primary_key=self._primary_key,
            secondary_key=self._secondary_key,
            business_key=self._primary_key if get_settings().EMIT_LEGACY_KEY_ALIAS else None,
            created_at=self._created_at,
        )
        return snapshot.model_dump(by_alias=by_alias, exclude_none=True)

    def __str__(self) -> str:
        parts: list[str] = []
        if self._primary_key is not None and self._secondary_key is None:
            parts.append(f"business: {self._primary_key}")
        else:
            if self._primary_key is not None:
                parts.append(f"primary: {self._primary_key}")
            if self._secondary_key is not None:
                parts.append(f"secondary: {self._secondary_key}")
        parts.append(f"client: {self._local_token}")
        return f"EntityId({', '.join(parts)})"

    def __repr__(self) -> str:
        return (
            f"EntityId(local_token={self._local_token!r}, "
            f"primary_key={self._primary_key!r}, secondary_key={self._secondary_key!r})"
        )
