"""Filesystem helpers for finding profile directories and state files."""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from profilesync.scanner.models import FileKind

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".dat"

_FILE_PATTERN = re.compile(r"core_(user|char)_([0-9]+)\.dat")


@dataclass
class FileEntry:
    path: Path
    name: str
    kind: FileKind
    identifier: str
    last_modified: float


def state_file_name(kind: FileKind, identifier: str) -> str:
    return f"core_{kind.value}_{identifier}{FILE_SUFFIX}"


def account_file_name(account_id: str) -> str:
    return state_file_name(FileKind.ACCOUNT, account_id)


def character_file_name(character_id: str) -> str:
    return state_file_name(FileKind.CHARACTER, character_id)


def parse_state_filename(filename: str) -> tuple[FileKind, str] | None:
    """Return (kind, id) for core_user_<digits>.dat / core_char_<digits>.dat, else None."""
    match = _FILE_PATTERN.fullmatch(filename)
    if not match:
        return None
    return FileKind(match.group(1)), match.group(2)


def is_state_file(filename: str, kind: FileKind) -> bool:
    """Loose class test used for overwrite targets: prefix and suffix only."""
    return filename.startswith(f"core_{kind.value}_") and filename.endswith(FILE_SUFFIX)


def list_subdirectories(root: Path) -> tuple[list[Path], list[str]]:
    """List direct child directories of root, sorted by name.

    Returns the directories and a warning per entry that could not be read.
    """
    subdirs: list[Path] = []
    warnings: list[str] = []
    try:
        with os.scandir(root) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(Path(entry.path))
                except OSError as e:
                    logger.error("Error getting stats for subdirectory %s: %s", entry.path, e)
                    warnings.append(f"Could not read {entry.path}: {e}")
    except PermissionError:
        logger.warning("Permission denied listing directory: %s", root)
        warnings.append(f"Permission denied listing directory: {root}")
    except OSError as e:
        logger.error("Error reading settings directory %s: %s", root, e)
        warnings.append(f"Error reading settings directory {root}: {e}")
    return subdirs, warnings


def scan_state_files(directory: Path) -> tuple[list[FileEntry], list[str]]:
    """Collect account and character files of one profile directory, sorted by name."""
    files: list[FileEntry] = []
    warnings: list[str] = []

    try:
        with os.scandir(directory) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                parsed = parse_state_filename(entry.name)
                if parsed is None:
                    continue
                file_entry = _process_entry(entry, *parsed, warnings)
                if file_entry:
                    files.append(file_entry)
    except PermissionError:
        logger.warning("Permission denied scanning directory: %s", directory)
        warnings.append(f"Permission denied scanning directory: {directory}")
    except OSError as e:
        logger.error("Error reading directory %s: %s", directory, e)
        warnings.append(f"Error reading directory {directory}: {e}")

    return files, warnings


def _process_entry(
    entry: os.DirEntry,
    kind: FileKind,
    identifier: str,
    warnings: list[str],
) -> FileEntry | None:
    try:
        if not entry.is_file():
            return None
        stat_result = entry.stat()
        return FileEntry(
            path=Path(entry.path),
            name=entry.name,
            kind=kind,
            identifier=identifier,
            last_modified=stat_result.st_mtime,
        )
    except FileNotFoundError:
        logger.warning("File disappeared during scan: %s", entry.path)
        warnings.append(f"File disappeared during scan: {entry.path}")
        return None
    except OSError as e:
        logger.error("Error getting stats for file %s: %s", entry.path, e)
        warnings.append(f"Error getting stats for file {entry.path}: {e}")
        return None
