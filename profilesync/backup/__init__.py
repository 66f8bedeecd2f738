"""Backup archives of the settings directory."""

from .manager import BACKUP_SUFFIX, BackupError, BackupManager, DeleteReport, backup_file_name

__all__ = [
    "BACKUP_SUFFIX",
    "BackupError",
    "BackupManager",
    "DeleteReport",
    "backup_file_name",
]
