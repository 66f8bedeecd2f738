"""Shared fixtures for profilesync tests."""

# pylint: disable=redefined-outer-name

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from profilesync.resolver import CharacterNotFoundError, NameLookupError
from profilesync.store import CacheStore


class FakeLookup:
    """In-memory NameLookup recording every call."""

    def __init__(self, names: dict[str, str] | None = None, broken: set[str] | None = None):
        self.names = names or {}
        self.broken = broken or set()
        self.calls: list[str] = []

    def lookup(self, character_id: str) -> str:
        self.calls.append(character_id)
        if character_id in self.broken:
            raise NameLookupError(f"connection reset for {character_id}")
        if character_id not in self.names:
            raise CharacterNotFoundError(f"Character ID {character_id} not found (404).")
        return self.names[character_id]


@pytest.fixture
def fake_lookup() -> FakeLookup:
    return FakeLookup(names={"2001": "Alpha Pilot", "2002": "Beta Pilot", "2003": "Gamma Pilot"})


@pytest.fixture
def store(tmp_path: Path) -> Iterator[CacheStore]:
    with CacheStore(tmp_path / "data") as cache_store:
        yield cache_store


@pytest.fixture
def make_profile(tmp_path: Path):
    """Create a profile directory under tmp_path/root holding the given files.

    files maps file name to bytes; mtimes optionally maps file name to an
    mtime to set.
    """
    root = tmp_path / "root"
    root.mkdir(exist_ok=True)

    def _make(name: str, files: dict[str, bytes], mtimes: dict[str, float] | None = None) -> Path:
        profile = root / name
        profile.mkdir()
        for file_name, content in files.items():
            (profile / file_name).write_bytes(content)
        for file_name, mtime in (mtimes or {}).items():
            os.utime(profile / file_name, (mtime, mtime))
        return profile

    return _make
