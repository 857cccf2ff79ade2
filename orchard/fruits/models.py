"""
Fruit models.

The owner is serialized as ``ownerId``; use ``to_public()`` for API output.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Fruit(BaseModel):
    """A fruit record owned by the user who created it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    color: str
    emoji: str
    owner_id: str = Field(alias="ownerId")

    def to_public(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# Fields a client must send (non-empty) to create or update a fruit
FRUIT_FIELDS = ("name", "color", "emoji")
