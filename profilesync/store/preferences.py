"""Persisted user preferences: the chosen settings root and UI selections."""

import logging
from pathlib import Path

from .cache import read_json, write_json

logger = logging.getLogger(__name__)


class AppSettings:
    """settings.json, holding the chosen settings root.

    Unknown keys are kept so that other tools writing the same file are not
    clobbered on save.
    """

    def __init__(self, path: Path):
        self.path = path
        self._data: dict = {}

    @classmethod
    def load(cls, path: Path) -> "AppSettings":
        settings = cls(path)
        data = read_json(path, {})
        if isinstance(data, dict):
            settings._data = data
        else:
            logger.warning("Ignoring malformed settings file: %s", path)
        return settings

    @property
    def settings_dir(self) -> Path | None:
        value = self._data.get("settingsDir")
        if isinstance(value, str) and value:
            return Path(value)
        return None

    @settings_dir.setter
    def settings_dir(self, value: Path | None) -> None:
        if value is None:
            self._data.pop("settingsDir", None)
        else:
            self._data["settingsDir"] = str(value)

    def save(self) -> None:
        logger.debug("Saving settings directory: %s", self._data.get("settingsDir"))
        write_json(self.path, self._data)


class UserSelections:
    """userSelections.json, the last account/character picked per profile.

    The mapping is opaque to the sync logic; it only pre-fills choices.
    """

    def __init__(self, path: Path):
        self.path = path
        self.selections: dict = {}

    @classmethod
    def load(cls, path: Path) -> "UserSelections":
        selections = cls(path)
        data = read_json(path, {})
        selections.selections = data if isinstance(data, dict) else {}
        return selections

    def select(self, profile: str, character_id: str, account_id: str) -> None:
        self.selections[profile] = {"charId": character_id, "userId": account_id}

    def get(self, profile: str) -> dict | None:
        return self.selections.get(profile)

    def replace(self, selections: dict) -> None:
        self.selections = dict(selections)

    def save(self) -> None:
        write_json(self.path, self.selections)
