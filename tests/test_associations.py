"""Tests for the association table."""

from pathlib import Path

import pytest

from profilesync.associations import (
    MAX_CHARACTERS_PER_ACCOUNT,
    AlreadyAssociatedError,
    AssociationNotFoundError,
    AssociationTable,
    CapacityExceededError,
)
from profilesync.scanner import CharacterFile
from profilesync.store import Association, CacheStore


def _character(character_id: str, name: str) -> CharacterFile:
    file_name = f"core_char_{character_id}.dat"
    return CharacterFile(character_id, file_name, Path(file_name), 0.0, name)


KNOWN = [_character("2001", "Alpha Pilot"), _character("2002", "Beta Pilot")]


class TestAssociate:
    """Tests for AssociationTable.associate."""

    def test_appends_with_scanned_name(self, store):
        table = AssociationTable(store)

        association = table.associate("1001", "2001", KNOWN)

        assert association == Association("1001", "2001", "Alpha Pilot")
        assert store.associations == [association]

    def test_unknown_name_fallback(self, store):
        table = AssociationTable(store)

        assert table.associate("1001", "7777", KNOWN).character_name == "Unknown"

    def test_persists(self, store):
        AssociationTable(store).associate("1001", "2001", KNOWN)

        reloaded = CacheStore(store.data_dir)
        reloaded.load()
        assert reloaded.associations == [Association("1001", "2001", "Alpha Pilot")]

    def test_fourth_association_rejected(self, store):
        table = AssociationTable(store)
        for character_id in ("1", "2", "3"):
            table.associate("1001", character_id)

        with pytest.raises(CapacityExceededError):
            table.associate("1001", "4")

        assert len(table.for_account("1001")) == MAX_CHARACTERS_PER_ACCOUNT

    def test_character_already_associated_elsewhere(self, store):
        table = AssociationTable(store)
        table.associate("1001", "2001")

        with pytest.raises(AlreadyAssociatedError, match="User ID 1001"):
            table.associate("1002", "2001")

    def test_character_already_associated_same_account(self, store):
        table = AssociationTable(store)
        table.associate("1001", "2001")

        with pytest.raises(AlreadyAssociatedError):
            table.associate("1001", "2001")
        assert len(store.associations) == 1

    def test_capacity_checked_before_uniqueness(self, store):
        table = AssociationTable(store)
        for character_id in ("1", "2", "3"):
            table.associate("1001", character_id)

        with pytest.raises(CapacityExceededError):
            table.associate("1001", "1")

    def test_name_frozen_at_association_time(self, store):
        table = AssociationTable(store)
        table.associate("1001", "2001", KNOWN)

        table.associate("1002", "2002", [_character("2001", "Renamed"), *KNOWN])

        assert table.find_character("2001").character_name == "Alpha Pilot"


class TestUnassociate:
    """Tests for AssociationTable.unassociate."""

    def test_removes_exact_pair(self, store):
        table = AssociationTable(store)
        table.associate("1001", "2001")
        table.associate("1001", "2002")

        table.unassociate("1001", "2001")

        assert [a.character_id for a in store.associations] == ["2002"]

    def test_missing_pair_raises(self, store):
        table = AssociationTable(store)
        table.associate("1001", "2001")

        with pytest.raises(AssociationNotFoundError):
            table.unassociate("1002", "2001")
        assert len(store.associations) == 1

    def test_frees_capacity(self, store):
        table = AssociationTable(store)
        for character_id in ("1", "2", "3"):
            table.associate("1001", character_id)

        table.unassociate("1001", "2")
        table.associate("1001", "4")

        assert [a.character_id for a in table.for_account("1001")] == ["1", "3", "4"]


class TestFilterAvailableCharacters:
    """Tests for AssociationTable.filter_available_characters."""

    def test_excludes_associated(self, store):
        table = AssociationTable(store)
        table.associate("1001", "2001", KNOWN)

        assert table.filter_available_characters(KNOWN) == [KNOWN[1]]

    def test_all_available_when_empty(self, store):
        assert AssociationTable(store).filter_available_characters(KNOWN) == KNOWN
