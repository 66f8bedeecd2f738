"""Sync engine for profile state files."""

from .engine import SyncEngine, SyncError, SyncResult

__all__ = ["SyncEngine", "SyncError", "SyncResult"]
