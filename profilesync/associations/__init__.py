"""Account to character associations."""

from .table import (
    MAX_CHARACTERS_PER_ACCOUNT,
    AlreadyAssociatedError,
    AssociationError,
    AssociationNotFoundError,
    AssociationTable,
    CapacityExceededError,
)

__all__ = [
    "MAX_CHARACTERS_PER_ACCOUNT",
    "AlreadyAssociatedError",
    "AssociationError",
    "AssociationNotFoundError",
    "AssociationTable",
    "CapacityExceededError",
]
