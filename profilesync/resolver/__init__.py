"""Character name resolution."""

from profilesync.resolver.lookup import (
    CharacterNotFoundError,
    EsiNameLookup,
    NameLookup,
    NameLookupError,
)
from profilesync.resolver.resolver import NameResolver, ResolverStats

__all__ = [
    "CharacterNotFoundError",
    "EsiNameLookup",
    "NameLookup",
    "NameLookupError",
    "NameResolver",
    "ResolverStats",
]
