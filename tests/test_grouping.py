"""Tests for deduplication and mtime grouping."""

from pathlib import Path

from profilesync.scanner import AccountFile, CharacterFile, deduplicate_by_id, group_by_mtime


def _account(account_id: str, mtime: float, profile: str = "p1") -> AccountFile:
    name = f"core_user_{account_id}.dat"
    return AccountFile(account_id, name, Path(profile) / name, mtime)


def _character(character_id: str, mtime: float, profile: str = "p1") -> CharacterFile:
    name = f"core_char_{character_id}.dat"
    return CharacterFile(character_id, name, Path(profile) / name, mtime, f"Pilot {character_id}")


class TestDeduplicateById:
    """Tests for deduplicate_by_id."""

    def test_keeps_latest_modification(self):
        older = _account("1001", 100.0, "p1")
        newer = _account("1001", 200.0, "p2")

        assert deduplicate_by_id([older, newer]) == [newer]
        assert deduplicate_by_id([newer, older]) == [newer]

    def test_tie_keeps_first_seen(self):
        first = _character("2001", 100.0, "p1")
        second = _character("2001", 100.0, "p2")

        assert deduplicate_by_id([first, second]) == [first]

    def test_preserves_first_appearance_order(self):
        a1 = _account("1", 10.0, "p1")
        b1 = _account("2", 10.0, "p1")
        a2 = _account("1", 50.0, "p2")

        result = deduplicate_by_id([a1, b1, a2])

        assert [a.account_id for a in result] == ["1", "2"]
        assert result[0] is a2

    def test_empty(self):
        assert deduplicate_by_id([]) == []


class TestGroupByMtime:
    """Tests for group_by_mtime."""

    def test_chains_within_threshold(self):
        files = [_account("1", 0.0), _account("2", 50.0), _account("3", 100.0)]

        groups = group_by_mtime(files, threshold_seconds=60)

        assert len(groups) == 1

    def test_splits_on_gap(self):
        late = _character("3", 1000.0)
        early = _account("1", 0.0)
        middle = _character("2", 30.0)

        groups = group_by_mtime([late, early, middle], threshold_seconds=60)

        assert groups == [[early, middle], [late]]

    def test_gap_equal_to_threshold_stays_grouped(self):
        files = [_account("1", 0.0), _account("2", 60.0)]

        assert len(group_by_mtime(files, threshold_seconds=60)) == 1

    def test_empty(self):
        assert group_by_mtime([]) == []
