"""Account to character association table."""

import logging
from collections.abc import Iterable

from profilesync.scanner import CharacterFile
from profilesync.store import Association, CacheStore

logger = logging.getLogger(__name__)

MAX_CHARACTERS_PER_ACCOUNT = 3
UNKNOWN_CHARACTER_NAME = "Unknown"


class AssociationError(Exception):
    """Base class for association table failures."""


class CapacityExceededError(AssociationError):
    """Raised when an account already has the maximum number of characters."""


class AlreadyAssociatedError(AssociationError):
    """Raised when a character is already linked to an account."""


class AssociationNotFoundError(AssociationError):
    """Raised when an account/character pair is not associated."""


class AssociationTable:
    """Associations held by the store, persisted after every change.

    A character belongs to at most one account, an account holds at most
    MAX_CHARACTERS_PER_ACCOUNT characters.
    """

    def __init__(self, store: CacheStore) -> None:
        self.store = store

    @property
    def associations(self) -> list[Association]:
        return self.store.associations

    def for_account(self, account_id: str) -> list[Association]:
        return [a for a in self.associations if a.account_id == account_id]

    def find_character(self, character_id: str) -> Association | None:
        for association in self.associations:
            if association.character_id == character_id:
                return association
        return None

    def associate(
        self,
        account_id: str,
        character_id: str,
        known_characters: Iterable[CharacterFile] = (),
    ) -> Association:
        """Link a character to an account.

        The character name is taken from known_characters (the latest scan)
        and frozen into the association.
        """
        if len(self.for_account(account_id)) >= MAX_CHARACTERS_PER_ACCOUNT:
            raise CapacityExceededError(
                f"User ID {account_id} already has the maximum of "
                f"{MAX_CHARACTERS_PER_ACCOUNT} associated characters."
            )

        existing = self.find_character(character_id)
        if existing is not None:
            raise AlreadyAssociatedError(
                f"Character ID {character_id} is already associated with "
                f"User ID {existing.account_id}."
            )

        association = Association(
            account_id=account_id,
            character_id=character_id,
            character_name=_find_name(character_id, known_characters),
        )
        self.associations.append(association)
        self.store.save_associations()
        logger.info("Associated character %s with account %s", character_id, account_id)
        return association

    def unassociate(self, account_id: str, character_id: str) -> Association:
        for index, association in enumerate(self.associations):
            if association.account_id == account_id and association.character_id == character_id:
                del self.associations[index]
                self.store.save_associations()
                logger.info("Unassociated character %s from account %s", character_id, account_id)
                return association

        raise AssociationNotFoundError(
            f"Association between User ID {account_id} and "
            f"Character ID {character_id} not found."
        )

    def filter_available_characters(
        self, characters: Iterable[CharacterFile]
    ) -> list[CharacterFile]:
        """Characters not associated with any account."""
        associated = {a.character_id for a in self.associations}
        return [c for c in characters if c.character_id not in associated]


def _find_name(character_id: str, characters: Iterable[CharacterFile]) -> str:
    for character in characters:
        if character.character_id == character_id:
            return character.display_name
    return UNKNOWN_CHARACTER_NAME
