"""Battle report data."""

from __future__ import annotations

from dataclasses import dataclass

from fleet_battle.domain.types import (
    ALLY_FLEET_COUNT,
    ENEMY_FLEET_COUNT,
    FleetForce,
    Formation,
    slot_index,
)


@dataclass(frozen=True)
class ReportAlly:
    formation: Formation
    damage_per_fleet: int
    fleet_forces: tuple[FleetForce, ...]


@dataclass(frozen=True)
class ReportEnemy:
    formation: Formation
    damage_per_fleet: int
    fleet_forces: tuple[FleetForce, ...]
    guard_force: FleetForce


@dataclass(frozen=True)
class Report:
    """Outcome of one combat round. Holds no reference to the query."""

    ally: ReportAlly
    enemy: ReportEnemy

    def ally_formation(self) -> Formation:
        return self.ally.formation

    def ally_damage_per_fleet(self) -> int:
        return self.ally.damage_per_fleet

    def ally_fleet_force(self, idx: int) -> FleetForce:
        return self.ally.fleet_forces[slot_index(idx, ALLY_FLEET_COUNT)]

    def enemy_formation(self) -> Formation:
        return self.enemy.formation

    def enemy_damage_per_fleet(self) -> int:
        return self.enemy.damage_per_fleet

    def enemy_fleet_force(self, idx: int) -> FleetForce:
        return self.enemy.fleet_forces[slot_index(idx, ENEMY_FLEET_COUNT)]

    def enemy_guard_force(self) -> FleetForce:
        return self.enemy.guard_force
