"""Data models for persisted state."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Association:
    """An account to character link, persisted in creation order."""

    account_id: str
    character_id: str
    character_name: str

    def to_json(self) -> dict:
        return {
            "userId": self.account_id,
            "charId": self.character_id,
            "charName": self.character_name,
        }

    @classmethod
    def from_json(cls, data: dict) -> "Association":
        return cls(
            account_id=str(data["userId"]),
            character_id=str(data["charId"]),
            character_name=str(data.get("charName", "Unknown")),
        )
