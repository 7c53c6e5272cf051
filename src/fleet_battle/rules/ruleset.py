"""Combat constants and the formation coefficient table."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from fleet_battle.domain.types import FORMATION_COUNT, Formation


class RulesError(ValueError):
    """Error loading or validating rules."""


# FORMATION_COEF[us][them]: attack multiplier for our effective formation
# against theirs.
FORMATION_COEF: tuple[tuple[int, ...], ...] = (
    (3, 1, 1, 1, 1, 1, 1, 1),
    (5, 4, 3, 5, 4, 2, 2, 4),
    (5, 3, 2, 3, 4, 2, 1, 3),
    (5, 3, 3, 4, 4, 4, 3, 5),
    (5, 4, 2, 4, 5, 4, 5, 5),
    (5, 4, 3, 3, 3, 3, 2, 2),
    (5, 2, 3, 3, 3, 1, 1, 3),
    (5, 4, 4, 2, 5, 5, 3, 5),
)


@dataclass(frozen=True)
class BattleRules:
    """Every tunable number the combat engine reads.

    Defaults reproduce the game. ``BattleRules.load`` reads a JSON object of
    overrides for balance experiments.
    """

    attack_force_min: int = 100
    attack_force_max: int = 1600
    attack_force_unit: int = 100
    formation_collapse_threshold: int = 3
    damage_divisor_per_fleet: int = 12
    damage_cap: int = 100
    yang_counter_formation: int = 5
    yang_enemy_bonus: int = 10
    # Fleets at or below this after damage are wiped out.
    fleet_mercy_max: int = 8
    # The garrison is wiped out only strictly below this.
    guard_mercy_below: int = 8
    formation_coef: tuple[tuple[int, ...], ...] = FORMATION_COEF

    def __post_init__(self) -> None:
        _validate(self)

    def attack_coef(self, us: Formation, them: Formation) -> int:
        return self.formation_coef[us.value][them.value]

    def clamp_attack_force(self, attack_force: int) -> int:
        return min(max(attack_force, self.attack_force_min), self.attack_force_max)

    @staticmethod
    def load(path: Path) -> "BattleRules":
        """Load rule overrides from a JSON file."""
        data = _load_json(path)
        known = {f.name for f in fields(BattleRules)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise RulesError(f"{path}: unknown rule keys: {', '.join(unknown)}")

        overrides: dict[str, Any] = {}
        for key, value in data.items():
            if key == "formation_coef":
                overrides[key] = _load_coef_table(path, value)
            else:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise RulesError(f"{path}: {key} must be an integer")
                overrides[key] = value
        try:
            return BattleRules(**overrides)
        except RulesError as exc:
            raise RulesError(f"{path}: {exc}") from exc


def _load_json(path: Path) -> dict[str, Any]:
    """Load JSON file."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise RulesError(f"Rules file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise RulesError(f"Invalid JSON in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise RulesError(f"Rules file is not valid UTF-8: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise RulesError(f"{path}: rules must be a JSON object")
    return data


def _load_coef_table(path: Path, value: Any) -> tuple[tuple[int, ...], ...]:
    if not isinstance(value, list):
        raise RulesError(f"{path}: formation_coef must be an array of rows")
    rows: list[tuple[int, ...]] = []
    for row in value:
        if not isinstance(row, list):
            raise RulesError(f"{path}: formation_coef rows must be arrays")
        for cell in row:
            if isinstance(cell, bool) or not isinstance(cell, int):
                raise RulesError(f"{path}: formation_coef entries must be integers")
        rows.append(tuple(row))
    return tuple(rows)


def _validate(rules: BattleRules) -> None:
    if rules.attack_force_min < 1:
        raise RulesError("attack_force_min must be positive")
    if rules.attack_force_max < rules.attack_force_min:
        raise RulesError("attack_force_max must not be below attack_force_min")
    if rules.attack_force_unit < 1:
        raise RulesError("attack_force_unit must be positive")
    if rules.formation_collapse_threshold < 0:
        raise RulesError("formation_collapse_threshold must not be negative")
    if rules.damage_divisor_per_fleet < 1:
        raise RulesError("damage_divisor_per_fleet must be positive")
    if not 0 <= rules.damage_cap <= 100:
        raise RulesError("damage_cap must be within 0..100")
    if not Formation.MIN_VALUE <= rules.yang_counter_formation <= Formation.MAX_VALUE:
        raise RulesError("yang_counter_formation must be a formation index")
    if rules.yang_enemy_bonus < 0:
        raise RulesError("yang_enemy_bonus must not be negative")
    if not 0 <= rules.fleet_mercy_max <= 100:
        raise RulesError("fleet_mercy_max must be within 0..100")
    if not 0 <= rules.guard_mercy_below <= 100:
        raise RulesError("guard_mercy_below must be within 0..100")
    table = rules.formation_coef
    if len(table) != FORMATION_COUNT or any(len(row) != FORMATION_COUNT for row in table):
        raise RulesError(f"formation_coef must be {FORMATION_COUNT}x{FORMATION_COUNT}")
    if any(cell < 1 for row in table for cell in row):
        raise RulesError("formation_coef entries must be positive")


DEFAULT_RULES = BattleRules()
