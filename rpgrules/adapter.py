"""Rules engine backed by an external source of race, class and background data."""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from .engine import Engine
from .rules import (
    ALL_SKILLS,
    calculate_ability_modifier,
    calculate_proficiency_bonus,
    extract_max_hit_die,
    format_skill_name,
    get_skill_ability,
    validate_manual_scores,
    validate_point_buy,
    validate_standard_array,
)
from .types import (
    AbilityScoreMethod,
    AbilityScores,
    BackgroundData,
    CalculateCharacterStatsInput,
    CalculateCharacterStatsOutput,
    CharacterDraft,
    ClassData,
    EngineError,
    ExternalClient,
    GetAvailableSkillsInput,
    GetAvailableSkillsOutput,
    InternalError,
    InvalidArgumentError,
    RaceData,
    SkillChoice,
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
    ValidationError,
    ValidationWarning,
)

_T = TypeVar("_T")

_METHOD_VALIDATORS: dict[
    AbilityScoreMethod, Callable[[AbilityScores], ValidateAbilityScoresOutput]
] = {
    AbilityScoreMethod.STANDARD_ARRAY: validate_standard_array,
    AbilityScoreMethod.POINT_BUY: validate_point_buy,
    AbilityScoreMethod.MANUAL: validate_manual_scores,
}


def _lookup(fetch: Callable[[str], Optional[_T]], key: str) -> Optional[_T]:
    """Fetch a record, returning None when the source fails or has no record."""
    try:
        return fetch(key)
    except Exception:
        return None


def _wrap(exc: Exception, message: str) -> EngineError:
    text = f"{message}: {exc}"
    if isinstance(exc, EngineError):
        return type(exc)(text)
    return InternalError(text)


def _error(field: str, message: str, code: str) -> ValidationError:
    return ValidationError(field=field, message=message, code=code)


class Adapter(Engine):
    """Engine that checks choices against reference data from an external client."""

    def __init__(
        self,
        event_bus: Any = None,
        dice_roller: Any = None,
        external_client: Optional[ExternalClient] = None,
    ) -> None:
        if event_bus is None:
            raise InvalidArgumentError("event bus is required")
        if dice_roller is None:
            raise InvalidArgumentError("dice roller is required")
        if external_client is None:
            raise InvalidArgumentError("external client is required")
        self.event_bus = event_bus
        self.dice_roller = dice_roller
        self.external_client = external_client

    def calculate_ability_modifier(self, score: int) -> int:
        return calculate_ability_modifier(score)

    def calculate_proficiency_bonus(self, level: int) -> int:
        return calculate_proficiency_bonus(level)

    def _saving_throws(
        self, scores: Optional[AbilityScores], proficient: list[str], bonus: int
    ) -> dict[str, int]:
        if scores is None:
            return {}
        proficient_set = set(proficient)
        return {
            ability: calculate_ability_modifier(score)
            + (bonus if ability in proficient_set else 0)
            for ability, score in scores.as_dict().items()
        }

    def _skill_bonuses(self, draft: Optional[CharacterDraft], bonus: int) -> dict[str, int]:
        if draft is None or draft.ability_scores is None:
            return {}
        proficient = set(draft.starting_skill_ids)
        if draft.background_id:
            background = _lookup(
                self.external_client.get_background_data, draft.background_id
            )
            if background is not None:
                proficient.update(background.skill_proficiencies)
        scores = draft.ability_scores.as_dict()
        result = {}
        for skill in ALL_SKILLS:
            ability = get_skill_ability(skill)
            modifier = calculate_ability_modifier(scores[ability]) if ability in scores else 0
            if skill in proficient:
                modifier += bonus
            result[skill] = modifier
        return result

    def validate_character_draft(
        self, request: Optional[ValidateCharacterDraftInput]
    ) -> ValidateCharacterDraftOutput:
        if request is None or request.draft is None:
            return ValidateCharacterDraftOutput(
                is_valid=False,
                is_complete=False,
                errors=[_error("draft", "Draft is required", "REQUIRED")],
            )

        draft = request.draft
        errors: list[ValidationError] = []
        warnings: list[ValidationWarning] = []
        missing_steps = [
            step
            for step, present in (
                ("name", draft.name),
                ("race", draft.race_id),
                ("class", draft.class_id),
                ("ability_scores", draft.ability_scores is not None),
            )
            if not present
        ]

        def check(field: str, label: str, run: Callable[[], Any]) -> None:
            try:
                result = run()
            except EngineError as exc:
                errors.append(
                    _error(field, f"Failed to validate {label}: {exc}", "VALIDATION_ERROR")
                )
                return
            if not result.is_valid:
                errors.extend(result.errors)

        if draft.race_id:
            check(
                "race",
                "race choice",
                lambda: self.validate_race_choice(
                    ValidateRaceChoiceInput(race_id=draft.race_id, subrace_id=draft.subrace_id)
                ),
            )
        if draft.class_id:
            check(
                "class",
                "class choice",
                lambda: self.validate_class_choice(
                    ValidateClassChoiceInput(
                        class_id=draft.class_id, ability_scores=draft.ability_scores
                    )
                ),
            )
        if draft.ability_scores is not None:
            check(
                "ability_scores",
                "ability scores",
                lambda: self.validate_ability_scores(
                    ValidateAbilityScoresInput(
                        ability_scores=draft.ability_scores,
                        method=AbilityScoreMethod.STANDARD_ARRAY,
                    )
                ),
            )
        if draft.class_id and draft.starting_skill_ids:
            check(
                "skills",
                "skill choices",
                lambda: self.validate_skill_choices(
                    ValidateSkillChoicesInput(
                        class_id=draft.class_id,
                        background_id=draft.background_id,
                        selected_skill_ids=list(draft.starting_skill_ids),
                    )
                ),
            )
        if draft.background_id:
            check(
                "background",
                "background choice",
                lambda: self.validate_background_choice(
                    ValidateBackgroundChoiceInput(background_id=draft.background_id)
                ),
            )

        return ValidateCharacterDraftOutput(
            is_complete=not missing_steps,
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            missing_steps=missing_steps,
        )

    def calculate_character_stats(
        self, request: Optional[CalculateCharacterStatsInput]
    ) -> CalculateCharacterStatsOutput:
        if request is None or request.draft is None:
            raise InvalidArgumentError("draft is required")
        draft = request.draft
        if not draft.class_id:
            raise InvalidArgumentError("class ID is required for stat calculation")
        if not draft.race_id:
            raise InvalidArgumentError("race ID is required for stat calculation")
        if draft.ability_scores is None:
            raise InvalidArgumentError("ability scores are required for stat calculation")

        try:
            class_data: Optional[ClassData] = self.external_client.get_class_data(draft.class_id)
        except Exception as exc:
            raise _wrap(exc, "failed to get class data") from exc
        if class_data is None:
            raise InvalidArgumentError(f"invalid class ID: {draft.class_id}")

        try:
            race_data: Optional[RaceData] = self.external_client.get_race_data(draft.race_id)
        except Exception as exc:
            raise _wrap(exc, "failed to get race data") from exc
        if race_data is None:
            raise InvalidArgumentError(f"invalid race ID: {draft.race_id}")

        scores = draft.ability_scores
        con_mod = calculate_ability_modifier(scores.constitution)
        dex_mod = calculate_ability_modifier(scores.dexterity)
        bonus = calculate_proficiency_bonus(1)

        return CalculateCharacterStatsOutput(
            max_hp=extract_max_hit_die(class_data.hit_dice) + con_mod,
            armor_class=10 + dex_mod,
            initiative=dex_mod,
            speed=race_data.speed,
            proficiency_bonus=bonus,
            saving_throws=self._saving_throws(scores, class_data.saving_throws, bonus),
            skills=self._skill_bonuses(draft, bonus),
        )

    def validate_race_choice(
        self, request: Optional[ValidateRaceChoiceInput]
    ) -> ValidateRaceChoiceOutput:
        if request is None:
            raise InvalidArgumentError("input is required")
        if not request.race_id:
            return ValidateRaceChoiceOutput(
                is_valid=False,
                errors=[_error("race_id", "Race ID is required", "REQUIRED")],
            )

        race = _lookup(self.external_client.get_race_data, request.race_id)
        if race is None:
            return ValidateRaceChoiceOutput(
                is_valid=False,
                errors=[
                    _error(
                        "race_id",
                        "Invalid race ID or external data unavailable",
                        "INVALID_RACE",
                    )
                ],
            )

        traits = [trait.name for trait in race.traits]
        ability_mods = dict(race.ability_bonuses)

        if request.subrace_id:
            subrace = next((s for s in race.subraces if s.id == request.subrace_id), None)
            if subrace is None:
                return ValidateRaceChoiceOutput(
                    is_valid=False,
                    errors=[
                        _error(
                            "subrace_id",
                            "Invalid subrace for selected race",
                            "INVALID_SUBRACE",
                        )
                    ],
                )
            traits.extend(trait.name for trait in subrace.traits)
            for ability, bonus in subrace.ability_bonuses.items():
                ability_mods[ability] = ability_mods.get(ability, 0) + bonus

        return ValidateRaceChoiceOutput(
            is_valid=True, race_traits=traits, ability_mods=ability_mods
        )

    def validate_class_choice(
        self, request: Optional[ValidateClassChoiceInput]
    ) -> ValidateClassChoiceOutput:
        if request is None:
            raise InvalidArgumentError("input is required")
        if not request.class_id:
            return ValidateClassChoiceOutput(
                is_valid=False,
                errors=[_error("class_id", "Class ID is required", "REQUIRED")],
            )

        class_data = _lookup(self.external_client.get_class_data, request.class_id)
        if class_data is None:
            return ValidateClassChoiceOutput(
                is_valid=False,
                errors=[
                    _error(
                        "class_id",
                        "Invalid class ID or external data unavailable",
                        "INVALID_CLASS",
                    )
                ],
            )

        # Single-class creation has no ability prerequisites.
        return ValidateClassChoiceOutput(
            is_valid=True,
            hit_dice=class_data.hit_dice,
            primary_ability=", ".join(class_data.primary_abilities),
            saving_throws=list(class_data.saving_throws),
            skill_choices_count=class_data.skills_count,
            available_skills=list(class_data.available_skills),
        )

    def validate_ability_scores(
        self, request: Optional[ValidateAbilityScoresInput]
    ) -> ValidateAbilityScoresOutput:
        if request is None:
            raise InvalidArgumentError("input is required")
        if request.ability_scores is None:
            return ValidateAbilityScoresOutput(
                is_valid=False,
                errors=[_error("ability_scores", "Ability scores are required", "REQUIRED")],
            )
        try:
            method = AbilityScoreMethod(request.method)
        except ValueError:
            return ValidateAbilityScoresOutput(
                is_valid=False,
                errors=[
                    _error(
                        "method",
                        "Invalid ability score generation method",
                        "INVALID_METHOD",
                    )
                ],
            )
        return _METHOD_VALIDATORS[method](request.ability_scores)

    def validate_skill_choices(
        self, request: Optional[ValidateSkillChoicesInput]
    ) -> ValidateSkillChoicesOutput:
        if request is None:
            raise InvalidArgumentError("input is required")
        if not request.class_id:
            return ValidateSkillChoicesOutput(
                is_valid=False,
                errors=[
                    _error("class_id", "Class ID is required for skill validation", "REQUIRED")
                ],
            )

        class_data = _lookup(self.external_client.get_class_data, request.class_id)
        if class_data is None:
            return ValidateSkillChoicesOutput(
                is_valid=False,
                errors=[
                    _error(
                        "class_id",
                        "Invalid class ID or external data unavailable",
                        "INVALID_CLASS",
                    )
                ],
            )

        errors: list[ValidationError] = []
        class_skills = set(class_data.available_skills)
        required = class_data.skills_count

        background_skills: list[str] = []
        if request.background_id:
            background: Optional[BackgroundData] = _lookup(
                self.external_client.get_background_data, request.background_id
            )
            if background is None:
                errors.append(
                    _error(
                        "background_id",
                        "Invalid background ID or external data unavailable",
                        "INVALID_BACKGROUND",
                    )
                )
            else:
                background_skills = list(background.skill_proficiencies)

        selected_from_class = 0
        seen: set[str] = set()
        for skill_id in request.selected_skill_ids:
            if skill_id in seen:
                errors.append(
                    _error(
                        "selected_skills",
                        f"Duplicate skill selection: {skill_id}",
                        "DUPLICATE_SKILL",
                    )
                )
                continue
            seen.add(skill_id)

            if skill_id in class_skills:
                selected_from_class += 1
            elif skill_id in background_skills:
                errors.append(
                    _error(
                        "selected_skills",
                        f"Skill {skill_id} is automatically granted by background, not a choice",
                        "BACKGROUND_SKILL_NOT_CHOICE",
                    )
                )
            else:
                errors.append(
                    _error(
                        "selected_skills",
                        f"Skill {skill_id} is not available for this class",
                        "INVALID_SKILL_CHOICE",
                    )
                )

        if selected_from_class != required:
            errors.append(
                _error(
                    "selected_skills",
                    f"Must select exactly {required} skills from class list, "
                    f"selected {selected_from_class}",
                    "INCORRECT_SKILL_COUNT",
                )
            )

        warnings: list[ValidationWarning] = []
        if background_skills and not errors:
            warnings = [
                ValidationWarning(
                    field="selected_skills",
                    message=f"Skill {selected} is also provided by background - "
                    "consider choosing a different skill to maximize proficiencies",
                    code="SKILL_OVERLAP",
                )
                for selected in request.selected_skill_ids
                for bg_skill in background_skills
                if selected == bg_skill
            ]

        return ValidateSkillChoicesOutput(is_valid=not errors, errors=errors, warnings=warnings)

    def get_available_skills(
        self, request: Optional[GetAvailableSkillsInput]
    ) -> GetAvailableSkillsOutput:
        if request is None:
            raise InvalidArgumentError("input is required")

        output = GetAvailableSkillsOutput()

        if request.class_id:
            class_data = _lookup(self.external_client.get_class_data, request.class_id)
            if class_data is None:
                return output
            output.class_skills = [
                SkillChoice(
                    skill_id=skill_id,
                    skill_name=format_skill_name(skill_id),
                    description=f"Proficiency in {format_skill_name(skill_id)}",
                    ability=get_skill_ability(skill_id),
                )
                for skill_id in class_data.available_skills
            ]

        if request.background_id:
            background = _lookup(
                self.external_client.get_background_data, request.background_id
            )
            if background is None:
                return output
            output.background_skills = [
                SkillChoice(
                    skill_id=skill_id,
                    skill_name=format_skill_name(skill_id),
                    description=f"Proficiency in {format_skill_name(skill_id)} (from background)",
                    ability=get_skill_ability(skill_id),
                )
                for skill_id in background.skill_proficiencies
            ]

        return output

    def validate_background_choice(
        self, request: Optional[ValidateBackgroundChoiceInput]
    ) -> ValidateBackgroundChoiceOutput:
        if request is None:
            return ValidateBackgroundChoiceOutput(
                is_valid=False, errors=[_error("input", "Input is required", "REQUIRED")]
            )
        if not request.background_id:
            return ValidateBackgroundChoiceOutput(
                is_valid=False,
                errors=[_error("background_id", "Background ID is required", "REQUIRED")],
            )

        try:
            background = self.external_client.get_background_data(request.background_id)
        except Exception:
            return ValidateBackgroundChoiceOutput(
                is_valid=False,
                errors=[
                    _error(
                        "background_id",
                        "Invalid background ID or external data unavailable",
                        "INVALID_BACKGROUND",
                    )
                ],
            )
        if background is None:
            return ValidateBackgroundChoiceOutput(
                is_valid=False,
                errors=[_error("background_id", "Background not found", "NOT_FOUND")],
            )

        return ValidateBackgroundChoiceOutput(
            is_valid=True,
            skill_proficiencies=list(background.skill_proficiencies),
            languages=background.languages,
            equipment=list(background.equipment),
        )