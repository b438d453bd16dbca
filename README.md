# rpgrules

A small rules engine for fifth-edition character creation. It checks a
character draft step by step (race, class, ability scores, skills,
background) and calculates the derived stats of a level-one character:
hit points, armour class, initiative, speed, proficiency bonus, saving
throws and skill bonuses.

The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `rpgrules.types` holds the data classes: `AbilityScores` (with
  `as_dict()`), `CharacterDraft`, `Character`, the reference data
  `RaceData`, `SubraceData`, `Trait`, `ClassData` and `BackgroundData`,
  the request and result classes such as `ValidateSkillChoicesInput` and
  `ValidateSkillChoicesOutput`, `ValidationError`, `ValidationWarning`,
  `SkillChoice` and the `AbilityScoreMethod` enum (`STANDARD_ARRAY`,
  `POINT_BUY`, `MANUAL`). It also defines the `ExternalClient` protocol
  through which game data is looked up, and the exceptions `EngineError`,
  `InvalidArgumentError`, `NotFoundError` and `InternalError`.
- `rpgrules.rules` holds the rule functions:
  `calculate_ability_modifier` (rounds down, so 9 gives -1),
  `calculate_proficiency_bonus` (0 below level 1, then +2 rising by one
  every four levels), `extract_max_hit_die` (`"1d6"`, `"1d8"`,
  `"1d10"`, `"1d12"`; anything else counts as a d6),
  `format_skill_name` (`"sleight_of_hand"` becomes `"Sleight Of Hand"`),
  `get_skill_ability` (`"unknown"` for skills it does not know), and the
  ability score checks `validate_standard_array`, `validate_point_buy`
  (scores 8 to 15, at most 27 points, a warning when points are left over)
  and `validate_manual_scores` (scores 3 to 18).
- `rpgrules.engine` defines the abstract `Engine` interface and
  `BasicEngine`, a permissive engine that accepts every choice and
  returns fixed level-one stats. Its modifier truncates toward zero and
  its proficiency bonus is 2 for levels below 1.
- `rpgrules.adapter` provides `Adapter`, the full engine, which checks
  choices against race, class and background data fetched through an
  `ExternalClient`.
- `rpgrules.entities` wraps characters and drafts as entities with
  `entity_id()` and `entity_type()` (`"character"` or
  `"character_draft"`); other attributes are read from the wrapped
  object. Use `wrap_character` and `wrap_character_draft` to build them.

## Example

```python
from rpgrules.rules import calculate_ability_modifier, validate_point_buy
from rpgrules.types import AbilityScores

calculate_ability_modifier(8)   # -1

scores = AbilityScores(
    strength=15, dexterity=15, constitution=15,
    intelligence=8, wisdom=8, charisma=8,
)
result = validate_point_buy(scores)
result.is_valid                 # True: exactly 27 points spent
```

Game data comes from any object with `get_race_data`,
`get_class_data` and `get_background_data` methods. Each returns the
record, or `None` when there is none, or raises when the lookup fails.

```python
from rpgrules.adapter import Adapter
from rpgrules.types import (
    CalculateCharacterStatsInput, CharacterDraft, ClassData, RaceData,
)

class Catalogue:
    def get_race_data(self, race_id):
        return RaceData(id="human", name="Human", speed=30)

    def get_class_data(self, class_id):
        return ClassData(id="fighter", name="Fighter", hit_dice="1d10",
                         saving_throws=["strength", "constitution"])

    def get_background_data(self, background_id):
        return None

adapter = Adapter(event_bus=object(), dice_roller=object(),
                  external_client=Catalogue())
stats = adapter.calculate_character_stats(
    CalculateCharacterStatsInput(draft=CharacterDraft(
        class_id="fighter", race_id="human", ability_scores=scores,
    ))
)
stats.max_hp                      # 12
stats.armor_class                 # 12
stats.saving_throws["strength"]   # 4
```

The validation methods (`validate_race_choice`, `validate_class_choice`,
`validate_skill_choices`, `validate_background_choice`, and so on) report
problems as `ValidationError` entries in their result rather than
raising; a failed or empty lookup becomes an error such as
`INVALID_RACE` or `INVALID_CLASS`. They raise `InvalidArgumentError`
only when called with no request at all. `calculate_character_stats`
raises `InvalidArgumentError` when the draft lacks a class, race or
ability scores, or when the class or race is not found, and re-raises a
failed lookup with the message `failed to get class data: ...` or
`failed to get race data: ...`.

## What the package does not do

- It holds no game data. Races, classes and backgrounds must come from
  an `ExternalClient` that you supply.
- `Adapter` requires an event bus and a dice roller to be given, but
  does not use either: nothing is published and no dice are rolled.
- There is no server, no command-line program and no storage of drafts
  or characters; the package only validates and calculates.
- Stats are calculated for level one only, with no armour worn.