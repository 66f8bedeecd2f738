"""profilesync - keep account and character settings identical across client profiles."""

__version__ = "0.1.0"

from profilesync.app import ProfileSyncApp
from profilesync.config import Config

__all__ = ["ProfileSyncApp", "Config"]
