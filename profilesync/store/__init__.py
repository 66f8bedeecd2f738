"""Persistent state for profilesync."""

from .cache import CacheStore
from .models import Association
from .preferences import AppSettings, UserSelections

__all__ = [
    "CacheStore",
    "Association",
    "AppSettings",
    "UserSelections",
]
