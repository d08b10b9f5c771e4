"""Tests for EntityId."""

from datetime import UTC, datetime

import pytest

from domainkit.config import get_settings
from domainkit.domain.common import (
    EntityId,
    EntityIdSnapshot,
    InvalidKeyError,
    InvalidSnapshotError,
    KeyAlreadySetError,
)
from domainkit.utils import is_valid_uuid


def make_id(
    primary: int | str | None = None,
    secondary: int | str | None = None,
    token: str | None = None,
) -> EntityId[int | str]:
    entity_id: EntityId[int | str] = EntityId(token)
    if primary is not None:
        entity_id.set_primary_key(primary)
    if secondary is not None:
        entity_id.set_secondary_key(secondary)
    return entity_id


class TestEntityIdCreation:
    """Test suite for creating identifiers."""

    def test_create_is_new(self) -> None:
        entity_id = EntityId.create()

        assert entity_id.is_new()
        assert not entity_id.has_any_key()
        assert is_valid_uuid(entity_id.local_token)
        assert entity_id.effective_value == entity_id.local_token

    def test_tokens_are_unique(self) -> None:
        assert EntityId.create().local_token != EntityId.create().local_token

    def test_created_at_is_utc(self) -> None:
        assert EntityId.create().created_at.tzinfo is UTC

    def test_not_new_after_primary_key(self) -> None:
        entity_id = EntityId.create()
        entity_id.set_primary_key(42)

        assert not entity_id.is_new()
        assert entity_id.effective_value == 42
        assert entity_id.business_key == 42
        assert entity_id.has_business_key()

    def test_effective_value_falls_back_to_secondary(self) -> None:
        entity_id = make_id(secondary="EMP-7")
        assert entity_id.effective_value == "EMP-7"
        assert not entity_id.is_new()


class TestEntityIdKeySetters:
    """Each key slot is write-once."""

    @pytest.mark.parametrize(
        "setter", ["set_primary_key", "set_secondary_key", "set_business_key"]
    )
    def test_second_assignment_fails(self, setter: str) -> None:
        entity_id = EntityId.create()
        getattr(entity_id, setter)(1)

        with pytest.raises(KeyAlreadySetError):
            getattr(entity_id, setter)(2)

    def test_error_names_the_slot(self) -> None:
        entity_id = make_id(primary=1)
        with pytest.raises(KeyAlreadySetError, match="Primary key has already been set"):
            entity_id.set_primary_key(2)

    def test_business_key_shares_primary_slot(self) -> None:
        entity_id = make_id(primary=1)
        with pytest.raises(KeyAlreadySetError, match="Business key"):
            entity_id.set_business_key(2)

    def test_none_is_rejected(self) -> None:
        entity_id = EntityId.create()
        with pytest.raises(InvalidKeyError, match="Secondary key cannot be None"):
            entity_id.set_secondary_key(None)  # type: ignore[arg-type]
        assert entity_id.is_new()

    def test_falsy_keys_are_accepted(self) -> None:
        entity_id = make_id(primary=0, secondary="")
        assert entity_id.primary_key == 0
        assert entity_id.secondary_key == ""
        assert entity_id.effective_value == 0


class TestEntityIdEquality:
    """Test suite for identity resolution."""

    def test_primary_keys_match(self) -> None:
        assert make_id(primary=5).equals(make_id(primary=5))

    def test_secondary_keys_match(self) -> None:
        assert make_id(secondary="S").equals(make_id(secondary="S"))

    def test_cross_slot_match_is_symmetric(self) -> None:
        a = make_id(primary=5)
        b = make_id(secondary=5)
        assert a.equals(b)
        assert b.equals(a)

    def test_no_key_overlap_compares_tokens(self) -> None:
        assert make_id(token="t1").equals(make_id(token="t1"))
        assert not make_id(token="t1").equals(make_id(token="t2"))
        assert not make_id(primary=1).equals(make_id(primary=2))

    def test_mismatched_keys_fall_back_to_token(self) -> None:
        a = make_id(primary=1, token="same")
        b = make_id(primary=2, token="same")
        assert a.equals(b)

    def test_any_matching_rule_wins(self) -> None:
        a = make_id(primary=1, secondary="x")
        b = make_id(primary=2, secondary="x")
        assert a.equals(b)

    def test_none_is_not_equal(self) -> None:
        assert not EntityId.create().equals(None)

    def test_dunder_eq(self) -> None:
        assert make_id(primary=3) == make_id(primary=3)
        assert make_id(primary=3) != make_id(primary=4)
        assert make_id(primary=3) != 3

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(EntityId.create())


class TestEntityIdSnapshot:
    """Test suite for snapshots and restore."""

    def test_roundtrip(self) -> None:
        original = make_id(primary=42, secondary="EMP-1")
        restored = EntityId.restore(original.to_snapshot())

        assert restored.equals(original)
        assert restored.local_token == original.local_token
        assert restored.primary_key == 42
        assert restored.secondary_key == "EMP-1"

    def test_roundtrip_of_new_id(self) -> None:
        original = EntityId.create()
        restored = EntityId.restore(original.to_snapshot())
        assert restored.equals(original)
        assert restored.is_new()

    def test_created_at_survives_in_milliseconds(self) -> None:
        original = EntityId.create()
        restored = EntityId.restore(original.to_snapshot())
        expected_ms = int(original.created_at.timestamp() * 1000)
        assert int(restored.created_at.timestamp() * 1000) == expected_ms

    def test_snapshot_shape(self) -> None:
        entity_id = make_id(primary=7, token="tok")
        snapshot = entity_id.to_snapshot()

        assert snapshot["local_token"] == "tok"
        assert snapshot["primary_key"] == 7
        assert snapshot["business_key"] == 7
        assert isinstance(snapshot["created_at"], int)
        assert "secondary_key" not in snapshot

    def test_legacy_alias_can_be_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOMAINKIT_EMIT_LEGACY_KEY_ALIAS", "false")
        get_settings.cache_clear()

        snapshot = make_id(primary=7).to_snapshot()

        assert "business_key" not in snapshot

    def test_camel_case_aliases(self) -> None:
        snapshot = make_id(primary=7, token="tok").to_snapshot(by_alias=True)
        assert snapshot["localToken"] == "tok"
        assert snapshot["primaryKey"] == 7

        restored = EntityId.restore({"localToken": "tok", "secondaryKey": 9})
        assert restored.secondary_key == 9

    def test_legacy_business_key_restores_primary(self) -> None:
        restored = EntityId.restore({"local_token": "tok", "business_key": 5})
        assert restored.primary_key == 5

    def test_primary_key_takes_precedence_over_business_key(self) -> None:
        restored = EntityId.restore({"local_token": "tok", "primary_key": 1, "business_key": 2})
        assert restored.primary_key == 1

    def test_created_at_accepts_iso_and_naive(self) -> None:
        restored = EntityId.restore(
            {"local_token": "tok", "created_at": "2024-01-02T03:04:05"}
        )
        assert restored.created_at == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)

    def test_restored_keys_are_write_once(self) -> None:
        restored = EntityId.restore({"local_token": "tok", "primary_key": 1})
        with pytest.raises(KeyAlreadySetError):
            restored.set_primary_key(2)

    @pytest.mark.parametrize(
        "snapshot",
        [{}, {"local_token": ""}, {"local_token": "   "}, {"local_token": None}],
    )
    def test_missing_token_is_rejected(self, snapshot: dict[str, object]) -> None:
        with pytest.raises(InvalidSnapshotError) as exc_info:
            EntityId.restore(snapshot)
        assert exc_info.value.errors

    def test_token_is_kept_as_given(self) -> None:
        restored = EntityId.restore({"local_token": " tok "})
        assert restored.local_token == " tok "
        assert restored.to_snapshot()["local_token"] == " tok "

    def test_malformed_timestamp_is_rejected(self) -> None:
        with pytest.raises(InvalidSnapshotError):
            EntityId.restore({"local_token": "tok", "created_at": "yesterday"})

    def test_non_mapping_is_rejected(self) -> None:
        with pytest.raises(InvalidSnapshotError):
            EntityId.restore(["tok"])  # type: ignore[arg-type]

    def test_accepts_snapshot_model(self) -> None:
        restored = EntityId.restore(EntityIdSnapshot(local_token="tok", primary_key=3))
        assert restored.primary_key == 3


class TestEntityIdMisc:
    """Test suite for clone and string forms."""

    def test_clone_is_independent(self) -> None:
        original = make_id(primary=1)
        cloned = original.clone()

        cloned.set_secondary_key("S")

        assert cloned.equals(original)
        assert not original.has_secondary_key()
        assert cloned.created_at == original.created_at

    def test_str_with_primary_only(self) -> None:
        assert str(make_id(primary=1, token="tok")) == "EntityId(business: 1, client: tok)"

    def test_str_with_both_keys(self) -> None:
        assert (
            str(make_id(primary=1, secondary="S", token="tok"))
            == "EntityId(primary: 1, secondary: S, client: tok)"
        )

    def test_str_without_keys(self) -> None:
        assert str(make_id(token="tok")) == "EntityId(client: tok)"
