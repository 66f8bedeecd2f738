"""JSON-backed store for name caches and associations."""

import json
import logging
from pathlib import Path
from typing import Any, Self

from .models import Association

logger = logging.getLogger(__name__)

FAILED_LOOKUPS_FILE = "failed_esi_requests.json"
CHARACTER_CACHE_FILE = "character_cache.json"
ASSOCIATIONS_FILE = "associations.json"


class CacheStore:
    """Owns the resolved-name cache, the failed-lookup cache and the association list.

    State is loaded once when the store is opened and every mutation is
    flushed by the component that made it. There is no implicit reload.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir
        self.failed_lookups: dict[str, bool] = {}
        self.character_names: dict[str, str] = {}
        self.associations: list[Association] = []

    def __enter__(self) -> Self:
        self.load()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # Mutations are already flushed; nothing is held open.
        pass

    @property
    def failed_lookups_path(self) -> Path:
        return self.data_dir / FAILED_LOOKUPS_FILE

    @property
    def character_cache_path(self) -> Path:
        return self.data_dir / CHARACTER_CACHE_FILE

    @property
    def associations_path(self) -> Path:
        return self.data_dir / ASSOCIATIONS_FILE

    def load(self) -> None:
        failed = read_json(self.failed_lookups_path, {})
        names = read_json(self.character_cache_path, {})
        associations = read_json(self.associations_path, [])

        self.failed_lookups = {str(k): True for k, v in _as_dict(failed).items() if v}
        self.character_names = {
            str(k): v for k, v in _as_dict(names).items() if isinstance(v, str) and v
        }

        if not isinstance(associations, list):
            logger.warning("Associations data is not an array. Resetting to empty array.")
            self.associations = []
            self.save_associations()
        else:
            self.associations = _parse_associations(associations)

        logger.debug(
            "Loaded %d cached names, %d failed lookups, %d associations from %s",
            len(self.character_names),
            len(self.failed_lookups),
            len(self.associations),
            self.data_dir,
        )

    def save_failed_lookups(self) -> None:
        write_json(self.failed_lookups_path, self.failed_lookups)

    def save_character_names(self) -> None:
        write_json(self.character_cache_path, self.character_names)

    def save_associations(self) -> None:
        if write_json(self.associations_path, [a.to_json() for a in self.associations]):
            logger.info("Associations saved successfully.")


def read_json(path: Path, default: Any) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error reading %s, using empty value: %s", path, e)
        return default


def write_json(path: Path, data: Any) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        return True
    except OSError as e:
        logger.error("Error saving %s: %s", path, e)
        return False


def _as_dict(data: Any) -> dict:
    if isinstance(data, dict):
        return data
    logger.warning("Expected a JSON object, got %s. Ignoring.", type(data).__name__)
    return {}


def _parse_associations(items: list) -> list[Association]:
    associations: list[Association] = []
    for item in items:
        try:
            associations.append(Association.from_json(item))
        except (KeyError, TypeError, AttributeError):
            logger.warning("Dropping malformed association entry: %r", item)
    return associations
