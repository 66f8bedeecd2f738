"""NameResolver: cached character name resolution with permanent failure memoization."""

import logging
from dataclasses import dataclass

from profilesync.resolver.lookup import CharacterNotFoundError, NameLookup, NameLookupError
from profilesync.store import CacheStore


logger = logging.getLogger(__name__)


@dataclass
class ResolverStats:
    """Counters for one resolver instance."""

    cache_hits: int = 0
    skipped_failed: int = 0
    lookups: int = 0
    failed_requests: int = 0


class NameResolver:
    """Resolves character ids to display names.

    A failure is remembered per file path, not per character id: the same id
    found under a different path is looked up again.
    """

    def __init__(self, store: CacheStore, lookup: NameLookup) -> None:
        self.store = store
        self.lookup = lookup
        self.stats = ResolverStats()
        self._failed_since_report = 0

    def resolve(self, character_id: str, full_file_path: str) -> str | None:
        """
        Return the display name for a character, or None.

        Args:
            character_id: Numeric id taken from the character file name.
            full_file_path: Path of the file the id came from; failures are keyed on it.
        """
        if self.store.failed_lookups.get(full_file_path):
            logger.debug("Skipping lookup for %s as it previously failed.", full_file_path)
            self.stats.skipped_failed += 1
            return None

        cached = self.store.character_names.get(character_id)
        if cached:
            self.stats.cache_hits += 1
            return cached

        self.stats.lookups += 1
        try:
            name = self.lookup.lookup(character_id)
        except CharacterNotFoundError:
            logger.warning("Character ID %s not found (404).", character_id)
            self._record_failure(full_file_path)
            return None
        except NameLookupError as e:
            logger.warning(
                "Failed to fetch character name for ID %s, file: %s: %s",
                character_id,
                full_file_path,
                e,
            )
            self._record_failure(full_file_path)
            return None

        self.store.character_names[character_id] = name
        self.store.save_character_names()
        return name

    def pop_failed_requests(self) -> int:
        """Return the failures counted since the last call and reset the count."""
        count = self._failed_since_report
        self._failed_since_report = 0
        return count

    def _record_failure(self, full_file_path: str) -> None:
        self.store.failed_lookups[full_file_path] = True
        self.stats.failed_requests += 1
        self._failed_since_report += 1
        self.store.save_failed_lookups()
