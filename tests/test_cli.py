"""Tests for the command line interface."""

# pylint: disable=redefined-outer-name

from pathlib import Path

import pytest
from click.testing import CliRunner

from profilesync.cli import cli


@pytest.fixture
def root(make_profile, tmp_path: Path) -> Path:
    make_profile(
        "settings_main",
        {
            "core_user_1001.dat": b"U1",
            "core_user_1002.dat": b"U2",
            "core_char_2001.dat": b"C1",
            "core_char_2002.dat": b"C2",
        },
    )
    make_profile("settings_alt", {"core_user_1003.dat": b"U3", "core_char_2003.dat": b"C3"})
    return tmp_path / "root"


@pytest.fixture
def invoke(tmp_path: Path, root: Path, fake_lookup, monkeypatch):
    monkeypatch.setattr("profilesync.app.EsiNameLookup", lambda lookup_config: fake_lookup)
    runner = CliRunner()

    def _invoke(*args: str, input_text: str | None = None):
        return runner.invoke(
            cli,
            ["--data-dir", str(tmp_path / "data"), "--settings-dir", str(root), *args],
            input=input_text,
        )

    return _invoke


class TestCli:
    """Tests for CLI commands."""

    def test_list(self, invoke):
        result = invoke("list")

        assert result.exit_code == 0
        assert "[main]" in result.output
        assert "[alt]" in result.output
        assert "Alpha Pilot" in result.output

    def test_mappings_shows_associations(self, invoke):
        assert invoke("associate", "1001", "2001").exit_code == 0

        result = invoke("mappings")

        assert result.exit_code == 0
        assert "- Alpha Pilot (2001)" in result.output
        available = result.output.split("Available characters:")[1]
        assert "Alpha Pilot" not in available
        assert "Beta Pilot" in available

    def test_associate_capacity_error_exits_nonzero(self, invoke):
        for character_id in ("1", "2", "3"):
            assert invoke("associate", "1001", character_id).exit_code == 0

        result = invoke("associate", "1001", "4")

        assert result.exit_code == 1
        assert "maximum of 3" in result.output

    def test_unassociate_missing(self, invoke):
        result = invoke("unassociate", "1001", "2001")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_sync_local(self, invoke, root):
        result = invoke("sync", "settings_main", "1001", "2001", "--yes")

        assert result.exit_code == 0
        assert "1 user files copied and 1 character files copied" in result.output
        assert (root / "settings_main" / "core_user_1002.dat").read_bytes() == b"U1"

    def test_sync_all_requires_confirmation(self, invoke, root):
        result = invoke("sync", "settings_main", "1001", "2001", "--all", input_text="n\n")

        assert result.exit_code == 1
        assert (root / "settings_alt" / "core_user_1003.dat").read_bytes() == b"U3"

    def test_sync_all(self, invoke, root):
        result = invoke("sync", "settings_main", "1001", "2001", "--all", input_text="y\n")

        assert result.exit_code == 0
        assert (root / "settings_alt" / "core_user_1003.dat").read_bytes() == b"U1"
        assert (root / "settings_alt" / "core_char_2003.dat").read_bytes() == b"C1"

    def test_backup_list_and_delete(self, invoke):
        assert invoke("backup").exit_code == 0

        listed = invoke("backups")
        assert ".bak.tar.gz" in listed.output

        deleted = invoke("delete-backups", "--yes")
        assert deleted.exit_code == 0
        assert "All backups deleted successfully (1 files)." in deleted.output
        assert "No backups found." in invoke("backups").output

    def test_resolves_names_through_the_configured_lookup(self, invoke, fake_lookup):
        result = invoke("list")

        assert result.exit_code == 0
        assert sorted(fake_lookup.calls) == ["2001", "2002", "2003"]

    def test_select_marks_listing(self, invoke):
        assert invoke("select", "settings_main", "1002", "2002").exit_code == 0

        result = invoke("list")

        assert " * user 1002" in result.output
        assert " * char 2002" in result.output
