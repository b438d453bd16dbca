"""Core character-creation rules: modifiers, proficiency, hit dice, skills and score checks."""

from __future__ import annotations

from .types import (
    ABILITY_NAMES,
    AbilityScores,
    ValidateAbilityScoresOutput,
    ValidationError,
    ValidationWarning,
)

SKILL_ABILITIES: dict[str, str] = {
    "athletics": "strength",
    "acrobatics": "dexterity",
    "sleight_of_hand": "dexterity",
    "stealth": "dexterity",
    "arcana": "intelligence",
    "history": "intelligence",
    "investigation": "intelligence",
    "nature": "intelligence",
    "religion": "intelligence",
    "animal_handling": "wisdom",
    "insight": "wisdom",
    "medicine": "wisdom",
    "perception": "wisdom",
    "survival": "wisdom",
    "deception": "charisma",
    "intimidation": "charisma",
    "performance": "charisma",
    "persuasion": "charisma",
}

ALL_SKILLS: tuple[str, ...] = (
    "acrobatics",
    "animal_handling",
    "arcana",
    "athletics",
    "deception",
    "history",
    "insight",
    "intimidation",
    "investigation",
    "medicine",
    "nature",
    "perception",
    "performance",
    "persuasion",
    "religion",
    "sleight_of_hand",
    "stealth",
    "survival",
)

STANDARD_ARRAY: tuple[int, ...] = (15, 14, 13, 12, 10, 8)

POINT_BUY_BUDGET = 27
POINT_BUY_COSTS: dict[int, int] = {
    8: 0,
    9: 1,
    10: 2,
    11: 3,
    12: 4,
    13: 5,
    14: 7,
    15: 9,
}

_HIT_DIE_SIZES = {"6": 6, "8": 8, "10": 10, "12": 12}
_DEFAULT_HIT_DIE = 6


def calculate_ability_modifier(score: int) -> int:
    """Return the modifier for an ability score, rounding down."""
    return (score - 10) // 2


def calculate_proficiency_bonus(level: int) -> int:
    """Return the proficiency bonus for a level; zero for levels below 1."""
    if level <= 0:
        return 0
    return 2 + (level - 1) // 4


def extract_max_hit_die(hit_dice: str) -> int:
    """Return the largest face of a single hit die such as "1d8"; 6 if unrecognised."""
    if len(hit_dice) < 3 or not hit_dice.startswith("1d"):
        return _DEFAULT_HIT_DIE
    return _HIT_DIE_SIZES.get(hit_dice[2:], _DEFAULT_HIT_DIE)


def format_skill_name(skill_id: str) -> str:
    """Turn a snake_case or kebab-case skill identifier into a title-cased name."""
    parts: list[str] = []
    capitalize = True
    for char in skill_id:
        if char in "_-":
            parts.append(" ")
            capitalize = True
        elif capitalize and "a" <= char <= "z":
            parts.append(char.upper())
            capitalize = False
        else:
            parts.append(char)
            capitalize = char == " "
    return "".join(parts)


def get_skill_ability(skill_id: str) -> str:
    """Return the ability a skill is based on, or "unknown"."""
    return SKILL_ABILITIES.get(skill_id, "unknown")


def validate_standard_array(scores: AbilityScores) -> ValidateAbilityScoresOutput:
    """Check that the scores are a permutation of the standard array."""
    if sorted(scores.as_dict().values()) != sorted(STANDARD_ARRAY):
        return ValidateAbilityScoresOutput(
            is_valid=False,
            errors=[
                ValidationError(
                    field="ability_scores",
                    message="Ability scores must match the standard array: 15, 14, 13, 12, 10, 8",
                    code="INVALID_STANDARD_ARRAY",
                )
            ],
        )
    return ValidateAbilityScoresOutput(is_valid=True)


def validate_point_buy(scores: AbilityScores) -> ValidateAbilityScoresOutput:
    """Check scores against point-buy limits: each 8 to 15, at most 27 points."""
    errors: list[ValidationError] = []
    total_cost = 0
    for ability, score in scores.as_dict().items():
        cost = POINT_BUY_COSTS.get(score)
        if cost is None:
            errors.append(
                ValidationError(
                    field=ability,
                    message="Point buy scores must be between 8 and 15",
                    code="INVALID_POINT_BUY_RANGE",
                )
            )
            continue
        total_cost += cost

    if total_cost > POINT_BUY_BUDGET:
        errors.append(
            ValidationError(
                field="ability_scores",
                message="Point buy total exceeds 27 points",
                code="POINT_BUY_EXCEEDED",
            )
        )

    warnings: list[ValidationWarning] = []
    if total_cost < POINT_BUY_BUDGET and not errors:
        warnings.append(
            ValidationWarning(
                field="ability_scores",
                message="You have unspent point buy points",
                code="UNSPENT_POINTS",
            )
        )

    return ValidateAbilityScoresOutput(
        is_valid=not errors, errors=errors, warnings=warnings
    )


def validate_manual_scores(scores: AbilityScores) -> ValidateAbilityScoresOutput:
    """Check that every manually entered score lies between 3 and 18."""
    errors = [
        ValidationError(
            field=ability,
            message="Ability scores must be between 3 and 18",
            code="INVALID_ABILITY_SCORE_RANGE",
        )
        for ability in ABILITY_NAMES
        if not 3 <= getattr(scores, ability) <= 18
    ]
    return ValidateAbilityScoresOutput(is_valid=not errors, errors=errors)