"""The rules engine interface and a permissive baseline implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .types import (
    CalculateCharacterStatsInput,
    CalculateCharacterStatsOutput,
    GetAvailableSkillsInput,
    GetAvailableSkillsOutput,
    ValidateAbilityScoresInput,
    ValidateAbilityScoresOutput,
    ValidateBackgroundChoiceInput,
    ValidateBackgroundChoiceOutput,
    ValidateCharacterDraftInput,
    ValidateCharacterDraftOutput,
    ValidateClassChoiceInput,
    ValidateClassChoiceOutput,
    ValidateRaceChoiceInput,
    ValidateRaceChoiceOutput,
    ValidateSkillChoicesInput,
    ValidateSkillChoicesOutput,
)


class Engine(ABC):
    """Game mechanics and rule calculations for character creation."""

    @abstractmethod
    def validate_character_draft(
        self, request: Optional[ValidateCharacterDraftInput]
    ) -> ValidateCharacterDraftOutput:
        """Check a draft for completeness and rule compliance."""

    @abstractmethod
    def calculate_character_stats(
        self, request: Optional[CalculateCharacterStatsInput]
    ) -> CalculateCharacterStatsOutput:
        """Work out the derived statistics of a draft."""

    @abstractmethod
    def validate_race_choice(
        self, request: Optional[ValidateRaceChoiceInput]
    ) -> ValidateRaceChoiceOutput:
        """Check a race and subrace selection."""

    @abstractmethod
    def validate_class_choice(
        self, request: Optional[ValidateClassChoiceInput]
    ) -> ValidateClassChoiceOutput:
        """Check a class selection."""

    @abstractmethod
    def validate_ability_scores(
        self, request: Optional[ValidateAbilityScoresInput]
    ) -> ValidateAbilityScoresOutput:
        """Check ability scores against their generation method."""

    @abstractmethod
    def validate_skill_choices(
        self, request: Optional[ValidateSkillChoicesInput]
    ) -> ValidateSkillChoicesOutput:
        """Check selected skills against class and background."""

    @abstractmethod
    def get_available_skills(
        self, request: Optional[GetAvailableSkillsInput]
    ) -> GetAvailableSkillsOutput:
        """List skills offered by a class and granted by a background."""

    @abstractmethod
    def validate_background_choice(
        self, request: Optional[ValidateBackgroundChoiceInput]
    ) -> ValidateBackgroundChoiceOutput:
        """Check a background selection."""

    @abstractmethod
    def calculate_proficiency_bonus(self, level: int) -> int:
        """Return the proficiency bonus for a character level."""

    @abstractmethod
    def calculate_ability_modifier(self, score: int) -> int:
        """Return the modifier for an ability score."""


class BasicEngine(Engine):
    """An engine that accepts every choice and returns level 1 defaults."""

    def calculate_ability_modifier(self, score: int) -> int:
        # Division truncates toward zero here, unlike the floored rule.
        diff = score - 10
        return diff // 2 if diff >= 0 else -((-diff) // 2)

    def calculate_proficiency_bonus(self, level: int) -> int:
        if level < 1:
            return 2
        return 2 + (level - 1) // 4

    def calculate_character_stats(self, request):
        return CalculateCharacterStatsOutput(
            max_hp=10,
            armor_class=10,
            initiative=0,
            speed=30,
            proficiency_bonus=2,
        )

    def validate_character_draft(self, request):
        return ValidateCharacterDraftOutput(is_valid=True, is_complete=False)

    def validate_race_choice(self, request):
        return ValidateRaceChoiceOutput(is_valid=True)

    def validate_class_choice(self, request):
        return ValidateClassChoiceOutput(is_valid=True)

    def validate_ability_scores(self, request):
        return ValidateAbilityScoresOutput(is_valid=True)

    def validate_skill_choices(self, request):
        return ValidateSkillChoicesOutput(is_valid=True)

    def get_available_skills(self, request):
        return GetAvailableSkillsOutput()

    def validate_background_choice(self, request):
        return ValidateBackgroundChoiceOutput(is_valid=True)