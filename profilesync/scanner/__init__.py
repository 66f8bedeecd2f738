"""Scanner module for profile directory discovery."""

from .filesystem import (
    account_file_name,
    character_file_name,
    is_state_file,
    list_subdirectories,
    parse_state_filename,
)
from .grouping import deduplicate_by_id, group_by_mtime
from .models import (
    AccountFile,
    CharacterFile,
    FileKind,
    ProfileDirectory,
    ScanMode,
    ScanResult,
)
from .scanner import Scanner, unknown_character_name

__all__ = [
    "Scanner",
    "ScanMode",
    "ScanResult",
    "ProfileDirectory",
    "AccountFile",
    "CharacterFile",
    "FileKind",
    "account_file_name",
    "character_file_name",
    "is_state_file",
    "list_subdirectories",
    "parse_state_filename",
    "deduplicate_by_id",
    "group_by_mtime",
    "unknown_character_name",
]
