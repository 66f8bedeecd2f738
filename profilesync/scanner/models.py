"""Scan result models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

SETTINGS_PREFIX = "settings_"


class FileKind(Enum):
    """Class of a profile state file."""

    ACCOUNT = "user"
    CHARACTER = "char"


class ScanMode(Enum):
    """Which subdirectories of the settings root count as profiles."""

    SETTINGS = "settings"  # only settings_* directories
    MAPPINGS = "mappings"  # every directory


@dataclass(frozen=True)
class AccountFile:
    """A core_user_<id>.dat file."""

    account_id: str
    file_name: str
    path: Path
    last_modified: float

    @property
    def identifier(self) -> str:
        return self.account_id

    @property
    def display_name(self) -> str:
        return self.account_id


@dataclass(frozen=True)
class CharacterFile:
    """A core_char_<id>.dat file with its resolved display name."""

    character_id: str
    file_name: str
    path: Path
    last_modified: float
    display_name: str

    @property
    def identifier(self) -> str:
        return self.character_id


@dataclass(frozen=True)
class ProfileDirectory:
    """Snapshot of one profile subdirectory."""

    name: str
    path: Path
    account_files: tuple[AccountFile, ...] = ()
    character_files: tuple[CharacterFile, ...] = ()

    @property
    def display_name(self) -> str:
        return self.name.removeprefix(SETTINGS_PREFIX)


@dataclass
class ScanResult:
    """Profiles found by a scan plus the entries that had to be skipped."""

    profiles: list[ProfileDirectory] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def account_files(self) -> list[AccountFile]:
        return [f for p in self.profiles for f in p.account_files]

    @property
    def character_files(self) -> list[CharacterFile]:
        return [f for p in self.profiles for f in p.character_files]

    def find_profile(self, name: str) -> ProfileDirectory | None:
        for profile in self.profiles:
            if profile.name == name:
                return profile
        return None
