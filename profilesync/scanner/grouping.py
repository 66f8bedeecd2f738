"""Deduplication and recency grouping of scanned files."""

from collections.abc import Iterable
from typing import Protocol, TypeVar


class _Timestamped(Protocol):
    @property
    def identifier(self) -> str: ...

    @property
    def last_modified(self) -> float: ...


T = TypeVar("T", bound=_Timestamped)


def deduplicate_by_id(files: Iterable[T]) -> list[T]:
    """Keep one file per identifier, the most recently modified one.

    Ties keep the file seen first. The result is ordered by each
    identifier's first appearance.
    """
    latest: dict[str, T] = {}
    for item in files:
        existing = latest.get(item.identifier)
        if existing is None or item.last_modified > existing.last_modified:
            latest[item.identifier] = item
    return list(latest.values())


def group_by_mtime(files: Iterable[T], threshold_seconds: float = 60.0) -> list[list[T]]:
    """Group files whose modification times chain within threshold_seconds.

    Files are sorted by mtime; a new group starts whenever the gap to the
    previous file exceeds the threshold.
    """
    groups: list[list[T]] = []
    current: list[T] = []

    for item in sorted(files, key=lambda f: f.last_modified):
        if current and item.last_modified - current[-1].last_modified > threshold_seconds:
            groups.append(current)
            current = []
        current.append(item)

    if current:
        groups.append(current)
    return groups
