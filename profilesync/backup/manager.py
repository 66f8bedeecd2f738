"""Compressed backups of a settings directory tree."""

import logging
import tarfile
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak.tar.gz"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


class BackupError(Exception):
    """Raised when a backup archive cannot be created."""


@dataclass
class DeleteReport:
    """Outcome of deleting all backups; failures hold (path, error) pairs."""

    deleted: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.deleted)


def backup_file_name(target_dir: Path, now: datetime | None = None) -> str:
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return f"{target_dir.name}_{timestamp}{BACKUP_SUFFIX}"


class BackupManager:
    """Creates and purges .bak.tar.gz archives in the application data directory."""

    def __init__(self, backup_dir: Path):
        self.backup_dir = backup_dir

    def backup(self, target_dir: Path, now: datetime | None = None) -> Path:
        """Archive target_dir, stored under its own basename inside the archive."""
        source = target_dir.resolve()
        if not source.is_dir():
            raise BackupError(f"Backup source is not a directory: {target_dir}")

        self.backup_dir.mkdir(parents=True, exist_ok=True)
        archive_path = self.backup_dir / backup_file_name(source, now)
        logger.info("Creating backup at: %s", archive_path)

        try:
            with tarfile.open(archive_path, "w:gz") as tar:
                tar.add(source, arcname=source.name)
        except (OSError, tarfile.TarError) as e:
            archive_path.unlink(missing_ok=True)
            raise BackupError(f"Error creating backup: {e}") from e

        logger.info("Backup created successfully at: %s", archive_path)
        return archive_path

    def list_backups(self) -> list[Path]:
        if not self.backup_dir.is_dir():
            return []
        return sorted(
            p for p in self.backup_dir.iterdir() if p.name.endswith(BACKUP_SUFFIX) and p.is_file()
        )

    def delete_all_backups(self) -> DeleteReport:
        """Delete every backup archive, continuing past individual failures."""
        report = DeleteReport()
        try:
            backups = self.list_backups()
        except OSError as e:
            logger.error("Error listing backups in %s: %s", self.backup_dir, e)
            report.failures.append((self.backup_dir, str(e)))
            return report

        for path in backups:
            try:
                path.unlink()
                report.deleted.append(path)
                logger.info("Deleted backup file: %s", path.name)
            except OSError as e:
                logger.error("Error deleting backup %s: %s", path, e)
                report.failures.append((path, str(e)))
        return report
