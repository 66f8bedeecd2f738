"""Main scanner implementation."""

import logging
from pathlib import Path

from profilesync.resolver import NameResolver
from profilesync.scanner.filesystem import FileEntry, list_subdirectories, scan_state_files
from profilesync.scanner.models import (
    SETTINGS_PREFIX,
    AccountFile,
    CharacterFile,
    FileKind,
    ProfileDirectory,
    ScanMode,
    ScanResult,
)

logger = logging.getLogger(__name__)


def unknown_character_name(character_id: str) -> str:
    return f"Unknown ({character_id})"


class Scanner:
    """Builds ProfileDirectory snapshots for a settings root."""

    def __init__(self, resolver: NameResolver):
        self.resolver = resolver

    def scan(self, root: Path, mode: ScanMode = ScanMode.SETTINGS) -> ScanResult:
        result = ScanResult()
        subdirs, warnings = list_subdirectories(root)
        result.warnings.extend(warnings)

        for subdir in subdirs:
            if mode is ScanMode.SETTINGS and not subdir.name.startswith(SETTINGS_PREFIX):
                continue
            result.profiles.append(self._scan_profile(subdir, result.warnings))

        logger.info(
            "Scanned %d profile directories under %s (%d warnings)",
            len(result.profiles),
            root,
            len(result.warnings),
        )
        return result

    def _scan_profile(self, directory: Path, warnings: list[str]) -> ProfileDirectory:
        entries, entry_warnings = scan_state_files(directory)
        warnings.extend(entry_warnings)

        accounts: list[AccountFile] = []
        characters: list[CharacterFile] = []
        for entry in entries:
            if entry.kind is FileKind.ACCOUNT:
                accounts.append(_to_account(entry))
            else:
                characters.append(self._to_character(entry))

        return ProfileDirectory(
            name=directory.name,
            path=directory,
            account_files=tuple(accounts),
            character_files=tuple(characters),
        )

    def _to_character(self, entry: FileEntry) -> CharacterFile:
        name = self.resolver.resolve(entry.identifier, str(entry.path))
        return CharacterFile(
            character_id=entry.identifier,
            file_name=entry.name,
            path=entry.path,
            last_modified=entry.last_modified,
            display_name=name or unknown_character_name(entry.identifier),
        )


def _to_account(entry: FileEntry) -> AccountFile:
    return AccountFile(
        account_id=entry.identifier,
        file_name=entry.name,
        path=entry.path,
        last_modified=entry.last_modified,
    )
