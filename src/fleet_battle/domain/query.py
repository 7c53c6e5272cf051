"""Battle query: the editable inputs of one combat round."""

from __future__ import annotations

from dataclasses import dataclass, field

from fleet_battle.domain.types import (
    ALLY_FLEET_COUNT,
    ENEMY_FLEET_COUNT,
    FORMATION_1,
    FleetForce,
    Formation,
    slot_index,
)


def _default_ally_forces() -> list[FleetForce]:
    forces = [FleetForce.zero()] * ALLY_FLEET_COUNT
    forces[0] = FleetForce.MAX
    return forces


def _check_length(name: str, values: list, expected: int) -> None:
    if len(values) != expected:
        raise ValueError(f"{name} must hold exactly {expected} entries, got {len(values)}")


@dataclass()
class QueryAlly:
    fleet_forces: list[FleetForce] = field(default_factory=_default_ally_forces)
    fleet_is_tireds: list[bool] = field(default_factory=lambda: [False] * ALLY_FLEET_COUNT)
    formation: Formation = FORMATION_1

    def __post_init__(self) -> None:
        _check_length("fleet_forces", self.fleet_forces, ALLY_FLEET_COUNT)
        _check_length("fleet_is_tireds", self.fleet_is_tireds, ALLY_FLEET_COUNT)

    def fleet_count(self) -> int:
        """Number of fleets still holding troops."""
        return sum(1 for force in self.fleet_forces if not force.is_zero())

    def attack_force(self) -> int:
        """Total force able to attack, fatigued fleets excluded. Not clamped."""
        return sum(
            force.value
            for force, is_tired in zip(self.fleet_forces, self.fleet_is_tireds)
            if not is_tired
        )

    def is_valid(self) -> bool:
        return any(not force.is_zero() for force in self.fleet_forces)


@dataclass()
class QueryEnemy:
    fleet_forces: list[FleetForce] = field(
        default_factory=lambda: [FleetForce.zero()] * ENEMY_FLEET_COUNT
    )
    guard_force: FleetForce = FleetForce.MAX
    formation: Formation = FORMATION_1
    has_yang: bool = False

    def __post_init__(self) -> None:
        _check_length("fleet_forces", self.fleet_forces, ENEMY_FLEET_COUNT)

    def fleet_count(self) -> int:
        """Number of fleets still holding troops, the garrison included."""
        active = sum(1 for force in self.fleet_forces if not force.is_zero())
        guard = 0 if self.guard_force.is_zero() else 1
        return active + guard

    def attack_force(self) -> int:
        """Total force able to attack, the garrison included. Not clamped."""
        return sum(force.value for force in self.fleet_forces) + self.guard_force.value

    def is_valid(self) -> bool:
        return not self.guard_force.is_zero() or any(
            not force.is_zero() for force in self.fleet_forces
        )


@dataclass()
class Query:
    """Inputs for one combat round.

    The sequences inside are fixed-length and only ever written by index, so
    the slot counts never drift from ``ALLY_FLEET_COUNT`` and
    ``ENEMY_FLEET_COUNT``.
    """

    ally: QueryAlly = field(default_factory=QueryAlly)
    enemy: QueryEnemy = field(default_factory=QueryEnemy)

    def ally_fleet_force(self, idx: int) -> FleetForce:
        return self.ally.fleet_forces[slot_index(idx, ALLY_FLEET_COUNT)]

    def set_ally_fleet_force(self, idx: int, fleet_force: FleetForce) -> None:
        self.ally.fleet_forces[slot_index(idx, ALLY_FLEET_COUNT)] = fleet_force

    def ally_fleet_is_tired(self, idx: int) -> bool:
        return self.ally.fleet_is_tireds[slot_index(idx, ALLY_FLEET_COUNT)]

    def set_ally_fleet_is_tired(self, idx: int, is_tired: bool) -> None:
        self.ally.fleet_is_tireds[slot_index(idx, ALLY_FLEET_COUNT)] = bool(is_tired)

    def ally_formation(self) -> Formation:
        return self.ally.formation

    def set_ally_formation(self, formation: Formation) -> None:
        self.ally.formation = formation

    def enemy_fleet_force(self, idx: int) -> FleetForce:
        return self.enemy.fleet_forces[slot_index(idx, ENEMY_FLEET_COUNT)]

    def set_enemy_fleet_force(self, idx: int, fleet_force: FleetForce) -> None:
        self.enemy.fleet_forces[slot_index(idx, ENEMY_FLEET_COUNT)] = fleet_force

    def enemy_guard_force(self) -> FleetForce:
        return self.enemy.guard_force

    def set_enemy_guard_force(self, fleet_force: FleetForce) -> None:
        self.enemy.guard_force = fleet_force

    def enemy_formation(self) -> Formation:
        return self.enemy.formation

    def set_enemy_formation(self, formation: Formation) -> None:
        self.enemy.formation = formation

    def enemy_has_yang(self) -> bool:
        return self.enemy.has_yang

    def set_enemy_has_yang(self, has_yang: bool) -> None:
        self.enemy.has_yang = bool(has_yang)

    def is_valid(self) -> bool:
        return self.ally.is_valid() and self.enemy.is_valid()

