"""Configuration module for profilesync."""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

import click

APP_NAME = "profilesync"
DATA_DIR_ENV = "PROFILESYNC_DATA_DIR"

# Relative to the user's home directory.
_DEFAULT_SETTINGS_PATHS = {
    "win32": ("AppData", "Local", "CCP", "EVE", "c_ccp_eve_online_tq_tranquility"),
    "darwin": (
        "Library",
        "Application Support",
        "CCP",
        "EVE",
        "c_ccp_eve_online_tq_tranquility",
    ),
    "linux": (".local", "share", "CCP", "EVE", "c_ccp_eve_online_tq_tranquility"),
}


def _get_data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override)
    return Path(click.get_app_dir(APP_NAME))


def default_settings_dir(platform: str | None = None, home: Path | None = None) -> Path | None:
    """Return the client's default settings root for a platform, if one is known."""
    parts = _DEFAULT_SETTINGS_PATHS.get(platform or sys.platform)
    if parts is None:
        return None
    return (home or Path.home()).joinpath(*parts)


@dataclass
class ScannerConfig:
    group_threshold_seconds: float = 60.0


@dataclass
class LookupConfig:
    base_url: str = "https://esi.evetech.net/latest"
    datasource: str = "tranquility"
    timeout: float = 10.0


@dataclass
class Config:
    data_dir: Path = field(default_factory=_get_data_dir)
    settings_dir: Path | None = None
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    lookup: LookupConfig = field(default_factory=LookupConfig)

    @property
    def app_settings_path(self) -> Path:
        return self.data_dir / "settings.json"

    @property
    def selections_path(self) -> Path:
        return self.data_dir / "userSelections.json"
