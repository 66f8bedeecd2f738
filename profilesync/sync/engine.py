"""Whole-file synchronization of account and character state files."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from profilesync.results import ErrorKind
from profilesync.scanner import FileKind, account_file_name, character_file_name, is_state_file

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """Raised when a sync cannot start or must abort before writing anything."""

    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(message)
        self.kind = kind


@dataclass
class SyncResult:
    """Counts of overwritten files and the per-file problems that were skipped."""

    profile: str
    account_files_copied: int = 0
    character_files_copied: int = 0
    warnings: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def partial(self) -> bool:
        return bool(self.warnings)


class SyncEngine:
    """Copies a chosen account/character file pair over other state files.

    Files are opaque blobs and are always overwritten whole. Local sync
    targets siblings inside one profile directory; global sync targets every
    state file in every other profile directory.
    """

    def __init__(self, root: Path):
        self.root = root

    def sync_local(self, sub_dir: str, account_id: str, character_id: str) -> SyncResult:
        """Overwrite sibling state files in sub_dir with the selected pair.

        A missing source file only skips its own class of targets.
        """
        profile_path = self._profile_path(sub_dir)
        result = SyncResult(profile=sub_dir)

        account_source = account_file_name(account_id)
        character_source = character_file_name(character_id)
        account_bytes = _read_optional(profile_path / account_source, "user", result.warnings)
        character_bytes = _read_optional(
            profile_path / character_source, "character", result.warnings
        )

        try:
            names = sorted(os.listdir(profile_path))
        except OSError as e:
            raise SyncError(
                f"Error reading subdirectory {profile_path}: {e}", ErrorKind.FATAL_IO_FAILURE
            ) from e

        for name in names:
            if is_state_file(name, FileKind.ACCOUNT) and name != account_source:
                if _copy_into(profile_path / name, account_bytes, "User", result.warnings):
                    result.account_files_copied += 1
            elif is_state_file(name, FileKind.CHARACTER) and name != character_source:
                if _copy_into(profile_path / name, character_bytes, "Character", result.warnings):
                    result.character_files_copied += 1

        result.message = (
            f'Synchronization complete in "{sub_dir}", '
            f"{result.account_files_copied} user files copied and "
            f"{result.character_files_copied} character files copied."
        )
        logger.info(result.message)
        return result

    def sync_global(self, sub_dir: str, account_id: str, character_id: str) -> SyncResult:
        """Overwrite every state file of every other profile with the selected pair.

        Both source files must be readable or nothing is written. Destination
        file ids are ignored: every account file receives the account bytes
        and every character file the character bytes.
        """
        profile_path = self._profile_path(sub_dir)
        result = SyncResult(profile=sub_dir)

        logger.info("Syncing all subdirectories using files from subdirectory: %s", sub_dir)
        account_bytes = _read_required(profile_path / account_file_name(account_id))
        character_bytes = _read_required(profile_path / character_file_name(character_id))

        try:
            others = sorted(os.listdir(self.root))
        except OSError as e:
            raise SyncError(
                f"Error reading settings directory {self.root}: {e}", ErrorKind.FATAL_IO_FAILURE
            ) from e

        for other in others:
            if other == sub_dir:
                continue
            other_path = self.root / other
            if not other_path.is_dir():
                continue
            self._sync_into(other_path, account_bytes, character_bytes, result)

        result.message = (
            f"Sync completed for all subdirectories: "
            f"{result.account_files_copied} user files copied and "
            f"{result.character_files_copied} character files copied, "
            f'based on user/char files from "{sub_dir}".'
        )
        logger.info(result.message)
        return result

    def _sync_into(
        self,
        directory: Path,
        account_bytes: bytes,
        character_bytes: bytes,
        result: SyncResult,
    ) -> None:
        try:
            names = sorted(os.listdir(directory))
            for name in names:
                if is_state_file(name, FileKind.ACCOUNT):
                    (directory / name).write_bytes(account_bytes)
                    result.account_files_copied += 1
                    logger.debug('Synced user file to: %s in "%s"', name, directory.name)
                elif is_state_file(name, FileKind.CHARACTER):
                    (directory / name).write_bytes(character_bytes)
                    result.character_files_copied += 1
                    logger.debug('Synced character file to: %s in "%s"', name, directory.name)
        except OSError as e:
            logger.error('Error syncing files for subdirectory "%s": %s', directory.name, e)
            result.warnings.append(f'Error syncing files for subdirectory "{directory.name}": {e}')

    def _profile_path(self, sub_dir: str) -> Path:
        if sub_dir in ("", ".", "..") or Path(sub_dir).name != sub_dir:
            raise SyncError(f"Invalid subdirectory name: {sub_dir!r}", ErrorKind.NOT_FOUND)
        path = self.root / sub_dir
        if not path.is_dir():
            raise SyncError(f"Subdirectory does not exist: {path}", ErrorKind.NOT_FOUND)
        return path


def _read_optional(path: Path, label: str, warnings: list[str]) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        logger.warning("Selected %s file does not exist: %s", label, path)
        warnings.append(f"Selected {label} file does not exist: {path}")
        return None
    except OSError as e:
        raise SyncError(
            f"Error reading selected {label} file {path}: {e}", ErrorKind.FATAL_IO_FAILURE
        ) from e


def _read_required(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise SyncError(f"Error reading source file {path}: {e}", ErrorKind.FATAL_IO_FAILURE) from e


def _copy_into(target: Path, content: bytes | None, label: str, warnings: list[str]) -> bool:
    if content is None:
        logger.warning("%s file content is missing, skipping file: %s", label, target)
        return False
    try:
        target.write_bytes(content)
        return True
    except OSError as e:
        logger.error("Error copying to file %s: %s", target, e)
        warnings.append(f"Error copying to file {target}: {e}")
        return False
