"""Wrappers that give characters and drafts an identity and an entity type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .types import Character, CharacterDraft


@dataclass
class CharacterEntity:
    """A character seen as a game entity; other attributes come from the character."""

    character: Character

    def entity_id(self) -> str:
        """Return the character's identifier."""
        return self.character.id

    def entity_type(self) -> str:
        """Return the entity type name."""
        return "character"

    def __getattr__(self, name: str) -> Any:
        if name == "character":
            raise AttributeError(name)
        return getattr(self.character, name)


@dataclass
class CharacterDraftEntity:
    """A character draft seen as a game entity; other attributes come from the draft."""

    draft: CharacterDraft

    def entity_id(self) -> str:
        """Return the draft's identifier."""
        return self.draft.id

    def entity_type(self) -> str:
        """Return the entity type name."""
        return "character_draft"

    def __getattr__(self, name: str) -> Any:
        if name == "draft":
            raise AttributeError(name)
        return getattr(self.draft, name)


def wrap_character(character: Character) -> CharacterEntity:
    """Wrap a character as an entity."""
    return CharacterEntity(character)


def wrap_character_draft(draft: CharacterDraft) -> CharacterDraftEntity:
    """Wrap a character draft as an entity."""
    return CharacterDraftEntity(draft)