"""Application context wiring the store, scanner, associations, sync and backups."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from profilesync.associations import (
    AlreadyAssociatedError,
    AssociationError,
    AssociationNotFoundError,
    AssociationTable,
    CapacityExceededError,
)
from profilesync.backup import BackupError, BackupManager
from profilesync.config import Config, default_settings_dir
from profilesync.resolver import EsiNameLookup, NameLookup, NameResolver
from profilesync.results import ErrorKind, OperationResult
from profilesync.scanner import (
    AccountFile,
    CharacterFile,
    ProfileDirectory,
    Scanner,
    ScanMode,
    ScanResult,
    deduplicate_by_id,
)
from profilesync.store import AppSettings, Association, CacheStore, UserSelections
from profilesync.sync import SyncEngine, SyncError

logger = logging.getLogger(__name__)

NO_SETTINGS_DIR = "No settings directory selected. Use 'set-dir' to choose one."


@dataclass
class SettingsListing:
    settings_dir: Path
    is_default: bool
    profiles: list[ProfileDirectory]
    associations: list[Association]
    warnings: list[str] = field(default_factory=list)


@dataclass
class MappingsListing:
    profiles: list[ProfileDirectory]
    accounts: list[AccountFile]
    characters: list[CharacterFile]
    available_characters: list[CharacterFile]
    associations: list[Association]
    warnings: list[str] = field(default_factory=list)


_ASSOCIATION_ERROR_KINDS = {
    CapacityExceededError: ErrorKind.CAPACITY_EXCEEDED,
    AlreadyAssociatedError: ErrorKind.ALREADY_ASSOCIATED,
    AssociationNotFoundError: ErrorKind.NOT_FOUND,
}


class ProfileSyncApp:
    """Owns all persistent state for one process.

    Operations are meant to run one at a time; nothing here guards the store
    or the association list against concurrent callers.
    """

    def __init__(self, config: Config, lookup: NameLookup | None = None) -> None:
        self.config = config
        with CacheStore(config.data_dir) as store:
            self.store = store
        self.app_settings = AppSettings.load(config.app_settings_path)
        self.selections = UserSelections.load(config.selections_path)
        self.resolver = NameResolver(self.store, lookup or EsiNameLookup(config.lookup))
        self.scanner = Scanner(self.resolver)
        self.associations = AssociationTable(self.store)
        self.backups = BackupManager(config.data_dir)
        self.settings_dir = self._initial_settings_dir()
        self._last_scan: ScanResult | None = None

    def _initial_settings_dir(self) -> Path | None:
        if self.config.settings_dir is not None:
            return self.config.settings_dir
        saved = self.app_settings.settings_dir
        if saved is not None:
            logger.info("Using saved directory: %s", saved)
            return saved
        default = default_settings_dir()
        if default is not None and default.is_dir():
            logger.info("Using default directory: %s", default)
            return default
        logger.info("Default directory does not exist: %s", default)
        return None

    # Listings

    def scan(self, mode: ScanMode) -> ScanResult:
        if self.settings_dir is None:
            raise FileNotFoundError(NO_SETTINGS_DIR)
        result = self.scanner.scan(self.settings_dir, mode)
        self._last_scan = result

        stats = self.resolver.stats
        logger.info(
            "Name resolution: %d cached, %d looked up, %d skipped after earlier failure",
            stats.cache_hits,
            stats.lookups,
            stats.skipped_failed,
        )

        failed = self.resolver.pop_failed_requests()
        if failed:
            logger.warning("Total failed name lookups (character names not found): %d", failed)
        return result

    def load_settings(self) -> OperationResult:
        try:
            result = self.scan(ScanMode.SETTINGS)
        except FileNotFoundError as e:
            return OperationResult.fail(str(e), ErrorKind.NOT_FOUND)

        listing = SettingsListing(
            settings_dir=self.settings_dir,
            is_default=self.is_default_directory(self.settings_dir),
            profiles=result.profiles,
            associations=list(self.associations.associations),
            warnings=result.warnings,
        )
        return OperationResult.ok(
            f"Loaded {len(result.profiles)} profiles from {self.settings_dir}",
            data=listing,
            kind=ErrorKind.PARTIAL_IO_FAILURE if result.warnings else None,
        )

    def load_mappings(self) -> OperationResult:
        try:
            result = self.scan(ScanMode.MAPPINGS)
        except FileNotFoundError as e:
            return OperationResult.fail(str(e), ErrorKind.NOT_FOUND)

        characters = deduplicate_by_id(result.character_files)
        listing = MappingsListing(
            profiles=result.profiles,
            accounts=deduplicate_by_id(result.account_files),
            characters=characters,
            available_characters=self.associations.filter_available_characters(characters),
            associations=list(self.associations.associations),
            warnings=result.warnings,
        )
        return OperationResult.ok(
            f"Loaded {len(listing.accounts)} accounts and {len(characters)} characters",
            data=listing,
            kind=ErrorKind.PARTIAL_IO_FAILURE if result.warnings else None,
        )

    # Associations

    def associate(self, account_id: str, character_id: str) -> OperationResult:
        known = self._last_scan
        if known is None and self.settings_dir is not None:
            known = self.scan(ScanMode.MAPPINGS)
        characters = known.character_files if known else []

        try:
            association = self.associations.associate(account_id, character_id, characters)
        except AssociationError as e:
            logger.error("Error associating character: %s", e)
            return OperationResult.fail(str(e), _ASSOCIATION_ERROR_KINDS[type(e)])
        return OperationResult.ok(
            f"Character ID {character_id} associated with User ID {account_id}.",
            data=association,
        )

    def unassociate(self, account_id: str, character_id: str) -> OperationResult:
        try:
            association = self.associations.unassociate(account_id, character_id)
        except AssociationError as e:
            logger.error("Error unassociating character: %s", e)
            return OperationResult.fail(str(e), _ASSOCIATION_ERROR_KINDS[type(e)])
        return OperationResult.ok(
            f"Character ID {character_id} has been unassociated from User ID {account_id}.",
            data=association,
        )

    # Sync

    def sync_local(self, sub_dir: str, account_id: str, character_id: str) -> OperationResult:
        return self._run_sync(sub_dir, account_id, character_id, sync_all=False)

    def sync_global(self, sub_dir: str, account_id: str, character_id: str) -> OperationResult:
        return self._run_sync(sub_dir, account_id, character_id, sync_all=True)

    def _run_sync(
        self, sub_dir: str, account_id: str, character_id: str, sync_all: bool
    ) -> OperationResult:
        if self.settings_dir is None:
            return OperationResult.fail(NO_SETTINGS_DIR, ErrorKind.NOT_FOUND)

        engine = SyncEngine(self.settings_dir)
        try:
            if sync_all:
                result = engine.sync_global(sub_dir, account_id, character_id)
            else:
                result = engine.sync_local(sub_dir, account_id, character_id)
        except SyncError as e:
            logger.error('Error syncing subdirectory "%s": %s', sub_dir, e)
            return OperationResult.fail(str(e), e.kind)

        return OperationResult.ok(
            result.message,
            data=result,
            kind=ErrorKind.PARTIAL_IO_FAILURE if result.partial else None,
        )

    # Backups

    def backup(self, target_dir: Path | None = None) -> OperationResult:
        target = target_dir or self.settings_dir
        if target is None:
            return OperationResult.fail(NO_SETTINGS_DIR, ErrorKind.NOT_FOUND)
        try:
            archive = self.backups.backup(target)
        except BackupError as e:
            logger.error("Error creating backup: %s", e)
            return OperationResult.fail(f"Backup failed: {e}", ErrorKind.FATAL_IO_FAILURE)
        return OperationResult.ok(f"Backup created successfully at: {archive}", data=archive)

    def delete_backups(self) -> OperationResult:
        report = self.backups.delete_all_backups()
        if report.failures:
            details = "; ".join(f"{path.name}: {error}" for path, error in report.failures)
            return OperationResult(
                success=False,
                message=(
                    f"Deleted {report.count} backups, "
                    f"{len(report.failures)} could not be deleted: {details}"
                ),
                kind=ErrorKind.PARTIAL_IO_FAILURE,
                data=report,
            )
        return OperationResult.ok(
            f"All backups deleted successfully ({report.count} files).", data=report
        )

    # Settings root and selections

    def choose_settings_dir(self, path: Path) -> OperationResult:
        if not path.is_dir():
            return OperationResult.fail(f"Directory does not exist: {path}", ErrorKind.NOT_FOUND)
        self._set_settings_dir(path)
        logger.info("Settings directory changed to: %s", path)
        return OperationResult.ok(f"Settings directory set to: {path}", data=path)

    def reset_to_default_directory(self) -> OperationResult:
        default = default_settings_dir()
        if default is None or not default.is_dir():
            return OperationResult.fail(
                f"Default directory does not exist: {default}", ErrorKind.NOT_FOUND
            )
        self._set_settings_dir(default)
        logger.info("Reset to default directory: %s", default)
        return OperationResult.ok(f"Settings directory reset to: {default}", data=default)

    def is_default_directory(self, path: Path | None) -> bool:
        default = default_settings_dir()
        return path is not None and default is not None and Path(path) == default

    def _set_settings_dir(self, path: Path) -> None:
        self.settings_dir = path
        self._last_scan = None
        self.app_settings.settings_dir = path
        self.app_settings.save()

    def load_user_selections(self) -> dict:
        return dict(self.selections.selections)

    def save_user_selections(self, selections: dict) -> OperationResult:
        self.selections.replace(selections)
        self.selections.save()
        return OperationResult.ok("Selections saved.")

    def select(self, profile: str, account_id: str, character_id: str) -> OperationResult:
        self.selections.select(profile, character_id, account_id)
        self.selections.save()
        logger.info(
            "Saved selections for %s: Character - %s, User - %s",
            profile,
            character_id,
            account_id,
        )
        return OperationResult.ok(f"Saved selection for {profile}.")
