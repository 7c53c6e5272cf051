from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from fleet_battle.domain.query import Query, QueryAlly, QueryEnemy
from fleet_battle.domain.reports import Report, ReportAlly, ReportEnemy
from fleet_battle.domain.types import FORMATION_0, FleetForce, Formation
from fleet_battle.rules.ruleset import DEFAULT_RULES, BattleRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttackBreakdown:
    ally_raw: int
    enemy_raw: int
    ally_final: int
    enemy_final: int
    yang_applied: bool


def simulate(query: Query, rules: BattleRules = DEFAULT_RULES) -> Report | None:
    """Resolve one combat round. Returns None when the query is not valid."""
    if not query.is_valid():
        logger.info("Query rejected: both sides need at least one fleet with troops.")
        return None

    ally_formation = ally_effective_formation(query.ally, rules)
    enemy_formation = enemy_effective_formation(query.enemy, rules)

    attacks = calc_attacks(query, rules)

    ally_damage = calc_damage_per_fleet(attacks.enemy_final, query.ally.fleet_count(), rules)
    enemy_damage = calc_damage_per_fleet(attacks.ally_final, query.enemy.fleet_count(), rules)
    logger.debug(
        "Attack ally=%d->%d enemy=%d->%d yang=%s; damage ally=%d enemy=%d",
        attacks.ally_raw,
        attacks.ally_final,
        attacks.enemy_raw,
        attacks.enemy_final,
        attacks.yang_applied,
        ally_damage,
        enemy_damage,
    )

    return Report(
        ally=ReportAlly(
            formation=ally_formation,
            damage_per_fleet=ally_damage,
            fleet_forces=damage_fleets(query.ally.fleet_forces, ally_damage, rules),
        ),
        enemy=ReportEnemy(
            formation=enemy_formation,
            damage_per_fleet=enemy_damage,
            fleet_forces=damage_fleets(query.enemy.fleet_forces, enemy_damage, rules),
            guard_force=damage_guard(query.enemy.guard_force, enemy_damage, rules),
        ),
    )


def calc_attacks(query: Query, rules: BattleRules = DEFAULT_RULES) -> AttackBreakdown:
    """Attack power of both sides, before and after the Yang modifier."""
    ally_formation = ally_effective_formation(query.ally, rules)
    enemy_formation = enemy_effective_formation(query.enemy, rules)

    ally_raw = calc_attack_raw(
        rules.clamp_attack_force(query.ally.attack_force()), ally_formation, enemy_formation, rules
    )
    enemy_raw = calc_attack_raw(
        rules.clamp_attack_force(query.enemy.attack_force()), enemy_formation, ally_formation, rules
    )

    # The counter formation is checked against the chosen stance, not the
    # collapsed one.
    yang_applied = (
        query.enemy.has_yang and query.ally.formation.value != rules.yang_counter_formation
    )
    if yang_applied:
        ally_final = ally_raw // 2 + 1
        enemy_final = enemy_raw + rules.yang_enemy_bonus
    else:
        ally_final = ally_raw
        enemy_final = enemy_raw

    return AttackBreakdown(
        ally_raw=ally_raw,
        enemy_raw=enemy_raw,
        ally_final=ally_final,
        enemy_final=enemy_final,
        yang_applied=yang_applied,
    )


def calc_attack_raw(
    attack_force: int,
    formation_us: Formation,
    formation_them: Formation,
    rules: BattleRules = DEFAULT_RULES,
) -> int:
    return attack_force // rules.attack_force_unit * rules.attack_coef(formation_us, formation_them)


def ally_effective_formation(ally: QueryAlly, rules: BattleRules = DEFAULT_RULES) -> Formation:
    return modify_formation(ally.fleet_count(), ally.attack_force(), ally.formation, rules)


def enemy_effective_formation(enemy: QueryEnemy, rules: BattleRules = DEFAULT_RULES) -> Formation:
    return modify_formation(enemy.fleet_count(), enemy.attack_force(), enemy.formation, rules)


def modify_formation(
    fleet_count: int,
    attack_force: int,
    formation: Formation,
    rules: BattleRules = DEFAULT_RULES,
) -> Formation:
    """Collapse to formation 0 when the force per fleet has run too thin."""
    if fleet_count <= 0:
        return FORMATION_0
    numer = min(attack_force, rules.attack_force_max)
    denom = 10 * fleet_count
    if numer // denom <= rules.formation_collapse_threshold:
        return FORMATION_0
    return formation


def calc_damage_per_fleet(
    attack_them: int, fleet_count_us: int, rules: BattleRules = DEFAULT_RULES
) -> int:
    if fleet_count_us <= 0:
        # Nothing left to absorb the blow; every slot is already zero.
        return rules.damage_cap
    damage = 100 * attack_them // (rules.damage_divisor_per_fleet * fleet_count_us)
    return min(damage, rules.damage_cap)


def damage_fleets(
    fleet_forces: Iterable[FleetForce], damage_per_fleet: int, rules: BattleRules = DEFAULT_RULES
) -> tuple[FleetForce, ...]:
    return tuple(
        _apply_damage(force, damage_per_fleet, wiped=lambda x: x <= rules.fleet_mercy_max)
        for force in fleet_forces
    )


def damage_guard(
    guard_force: FleetForce, damage_per_fleet: int, rules: BattleRules = DEFAULT_RULES
) -> FleetForce:
    return _apply_damage(guard_force, damage_per_fleet, wiped=lambda x: x < rules.guard_mercy_below)


def _apply_damage(force: FleetForce, damage: int, *, wiped: Callable[[int], bool]) -> FleetForce:
    assert damage >= 0, f"negative damage {damage}"
    remaining = max(0, force.value - damage)
    if wiped(remaining):
        remaining = 0
    assert FleetForce.MIN_VALUE <= remaining <= force.value, f"damaged force {remaining} out of range"
    return FleetForce(remaining)
