"""Remote character name lookup."""

from typing import Protocol

import requests

from profilesync.config import LookupConfig


class NameLookupError(Exception):
    """Raised when a character name cannot be resolved remotely."""


class CharacterNotFoundError(NameLookupError):
    """Raised when the lookup service does not know the character id."""


class NameLookup(Protocol):
    """Resolves a character id to its display name."""

    def lookup(self, character_id: str) -> str: ...


class EsiNameLookup:
    """Name lookup against the public ESI character endpoint.

    One GET per call. Failures are reported as NameLookupError and never
    retried here; the resolver remembers them.
    """

    def __init__(
        self,
        config: LookupConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or LookupConfig()
        self.session = session or requests.Session()

    def character_url(self, character_id: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/characters/{character_id}/"

    def lookup(self, character_id: str) -> str:
        url = self.character_url(character_id)
        try:
            response = self.session.get(
                url,
                params={"datasource": self.config.datasource},
                timeout=self.config.timeout,
            )
            if response.status_code == 404:
                raise CharacterNotFoundError(f"Character ID {character_id} not found (404).")
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise NameLookupError(
                f"Failed to fetch character name for ID {character_id}: {e}"
            ) from e
        except ValueError as e:
            raise NameLookupError(f"Invalid response for character ID {character_id}: {e}") from e

        name = data.get("name") if isinstance(data, dict) else None
        if not isinstance(name, str) or not name:
            raise NameLookupError(f"No name in response for character ID {character_id}")
        return name
