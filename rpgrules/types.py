"""Data types shared by the rules engine: characters, reference data, requests and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Union, runtime_checkable

ABILITY_NAMES = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)


class EngineError(Exception):
    """Base class for errors raised by the rules engine and its data sources."""


class InvalidArgumentError(EngineError):
    """A request was missing data or held data that cannot be used."""


class NotFoundError(EngineError):
    """A requested record does not exist."""


class InternalError(EngineError):
    """A data source or dependency failed."""


class AbilityScoreMethod(str, Enum):
    """How a set of ability scores was generated."""

    STANDARD_ARRAY = "standard_array"
    POINT_BUY = "point_buy"
    MANUAL = "manual"


@dataclass
class AbilityScores:
    """The six ability scores of a character."""

    strength: int = 0
    dexterity: int = 0
    constitution: int = 0
    intelligence: int = 0
    wisdom: int = 0
    charisma: int = 0

    def as_dict(self) -> dict[str, int]:
        """Return the scores keyed by ability name, in the standard order."""
        return {name: getattr(self, name) for name in ABILITY_NAMES}


@dataclass
class CharacterDraft:
    """A character that is still being created."""

    id: str = ""
    name: str = ""
    race_id: str = ""
    subrace_id: str = ""
    class_id: str = ""
    background_id: str = ""
    ability_scores: Optional[AbilityScores] = None
    starting_skill_ids: list[str] = field(default_factory=list)


@dataclass
class Character:
    """A finished character."""

    id: str = ""
    name: str = ""
    level: int = 1
    race_id: str = ""
    class_id: str = ""


@dataclass
class Trait:
    """A named racial trait."""

    name: str = ""
    description: str = ""


@dataclass
class SubraceData:
    """Reference data for a subrace."""

    id: str = ""
    name: str = ""
    traits: list[Trait] = field(default_factory=list)
    ability_bonuses: dict[str, int] = field(default_factory=dict)


@dataclass
class RaceData:
    """Reference data for a race."""

    id: str = ""
    name: str = ""
    speed: int = 0
    traits: list[Trait] = field(default_factory=list)
    ability_bonuses: dict[str, int] = field(default_factory=dict)
    subraces: list[SubraceData] = field(default_factory=list)


@dataclass
class ClassData:
    """Reference data for a class."""

    id: str = ""
    name: str = ""
    hit_dice: str = ""
    primary_abilities: list[str] = field(default_factory=list)
    saving_throws: list[str] = field(default_factory=list)
    skills_count: int = 0
    available_skills: list[str] = field(default_factory=list)


@dataclass
class BackgroundData:
    """Reference data for a background."""

    id: str = ""
    name: str = ""
    skill_proficiencies: list[str] = field(default_factory=list)
    languages: int = 0
    equipment: list[str] = field(default_factory=list)


@runtime_checkable
class ExternalClient(Protocol):
    """Source of race, class and background reference data.

    Each method returns the record, None when the source has no such record,
    or raises an EngineError when the lookup fails.
    """

    def get_race_data(self, race_id: str) -> Optional[RaceData]:
        """Look up a race by its identifier."""

    def get_class_data(self, class_id: str) -> Optional[ClassData]:
        """Look up a class by its identifier."""

    def get_background_data(self, background_id: str) -> Optional[BackgroundData]:
        """Look up a background by its identifier."""


@dataclass
class ValidationError:
    """A problem that makes a choice invalid."""

    field: str = ""
    message: str = ""
    code: str = ""


@dataclass
class ValidationWarning:
    """A choice that is allowed but probably not what was wanted."""

    field: str = ""
    message: str = ""
    code: str = ""


@dataclass
class SkillChoice:
    """A skill that may be chosen or is granted."""

    skill_id: str = ""
    skill_name: str = ""
    description: str = ""
    ability: str = ""


@dataclass
class ValidateCharacterDraftInput:
    """The draft to validate."""

    draft: Optional[CharacterDraft] = None


@dataclass
class ValidateCharacterDraftOutput:
    """Result of validating a whole draft."""

    is_complete: bool = False
    is_valid: bool = False
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)
    missing_steps: list[str] = field(default_factory=list)


@dataclass
class CalculateCharacterStatsInput:
    """The draft whose derived statistics are wanted."""

    draft: Optional[CharacterDraft] = None


@dataclass
class CalculateCharacterStatsOutput:
    """Derived statistics of a character."""

    max_hp: int = 0
    armor_class: int = 0
    initiative: int = 0
    speed: int = 0
    proficiency_bonus: int = 0
    saving_throws: dict[str, int] = field(default_factory=dict)
    skills: dict[str, int] = field(default_factory=dict)


@dataclass
class ValidateRaceChoiceInput:
    """A race and optional subrace to validate."""

    race_id: str = ""
    subrace_id: str = ""


@dataclass
class ValidateRaceChoiceOutput:
    """Result of validating a race choice."""

    is_valid: bool = False
    errors: list[ValidationError] = field(default_factory=list)
    race_traits: list[str] = field(default_factory=list)
    ability_mods: dict[str, int] = field(default_factory=dict)


@dataclass
class ValidateClassChoiceInput:
    """A class to validate, with the scores it would be paired with."""

    class_id: str = ""
    ability_scores: Optional[AbilityScores] = None


@dataclass
class ValidateClassChoiceOutput:
    """Result of validating a class choice."""

    is_valid: bool = False
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)
    hit_dice: str = ""
    primary_ability: str = ""
    saving_throws: list[str] = field(default_factory=list)
    skill_choices_count: int = 0
    available_skills: list[str] = field(default_factory=list)


@dataclass
class ValidateAbilityScoresInput:
    """Ability scores and the method used to produce them."""

    ability_scores: Optional[AbilityScores] = None
    method: Union[AbilityScoreMethod, str, None] = None


@dataclass
class ValidateAbilityScoresOutput:
    """Result of validating ability scores."""

    is_valid: bool = False
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)


@dataclass
class ValidateSkillChoicesInput:
    """Selected skills, with the class and background they are chosen for."""

    class_id: str = ""
    background_id: str = ""
    selected_skill_ids: list[str] = field(default_factory=list)


@dataclass
class ValidateSkillChoicesOutput:
    """Result of validating skill choices."""

    is_valid: bool = False
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)


@dataclass
class GetAvailableSkillsInput:
    """The class and background whose skills are wanted."""

    class_id: str = ""
    background_id: str = ""


@dataclass
class GetAvailableSkillsOutput:
    """Skills offered by a class and granted by a background."""

    class_skills: list[SkillChoice] = field(default_factory=list)
    background_skills: list[SkillChoice] = field(default_factory=list)


@dataclass
class ValidateBackgroundChoiceInput:
    """A background to validate."""

    background_id: str = ""


@dataclass
class ValidateBackgroundChoiceOutput:
    """Result of validating a background choice."""

    is_valid: bool = False
    errors: list[ValidationError] = field(default_factory=list)
    skill_proficiencies: list[str] = field(default_factory=list)
    languages: int = 0
    equipment: list[str] = field(default_factory=list)