from __future__ import annotations

import pytest

from fleet_battle.domain.query import Query, QueryAlly, QueryEnemy
from fleet_battle.domain.types import ALLY_FLEET_COUNT, ENEMY_FLEET_COUNT, FleetForce, Formation
from tests.helpers.factories import make_query


def test_default_query() -> None:
    query = Query()

    assert query.ally_fleet_force(0) == FleetForce.MAX
    for idx in range(1, ALLY_FLEET_COUNT):
        assert query.ally_fleet_force(idx).is_zero()
    assert not any(query.ally_fleet_is_tired(idx) for idx in range(ALLY_FLEET_COUNT))
    assert query.ally_formation() == Formation(1)

    for idx in range(ENEMY_FLEET_COUNT):
        assert query.enemy_fleet_force(idx).is_zero()
    assert query.enemy_guard_force() == FleetForce.MAX
    assert query.enemy_formation() == Formation(1)
    assert query.enemy_has_yang() is False
    assert query.is_valid()


def test_default_queries_do_not_share_lists() -> None:
    first = Query()
    second = Query()
    first.set_ally_fleet_force(3, FleetForce(50))
    first.set_ally_fleet_is_tired(3, True)

    assert second.ally_fleet_force(3).is_zero()
    assert second.ally_fleet_is_tired(3) is False


def test_setters_round_trip() -> None:
    query = Query()
    query.set_ally_fleet_force(10, FleetForce(33))
    query.set_ally_fleet_is_tired(10, True)
    query.set_ally_formation(Formation(6))
    query.set_enemy_fleet_force(14, FleetForce(77))
    query.set_enemy_guard_force(FleetForce(12))
    query.set_enemy_formation(Formation(0))
    query.set_enemy_has_yang(True)

    assert query.ally_fleet_force(10) == FleetForce(33)
    assert query.ally_fleet_is_tired(10) is True
    assert query.ally_formation() == Formation(6)
    assert query.enemy_fleet_force(14) == FleetForce(77)
    assert query.enemy_guard_force() == FleetForce(12)
    assert query.enemy_formation() == Formation(0)
    assert query.enemy_has_yang() is True


def test_accessors_reject_bad_indices() -> None:
    query = Query()
    with pytest.raises(IndexError):
        query.ally_fleet_force(ALLY_FLEET_COUNT)
    with pytest.raises(IndexError):
        query.set_ally_fleet_is_tired(-1, True)
    with pytest.raises(IndexError):
        query.enemy_fleet_force(ENEMY_FLEET_COUNT)
    with pytest.raises(IndexError):
        query.set_enemy_fleet_force(-1, FleetForce(1))


def test_side_lengths_are_fixed() -> None:
    with pytest.raises(ValueError):
        QueryAlly(fleet_forces=[FleetForce(1)] * (ALLY_FLEET_COUNT + 1))
    with pytest.raises(ValueError):
        QueryAlly(fleet_is_tireds=[False] * (ALLY_FLEET_COUNT - 1))
    with pytest.raises(ValueError):
        QueryEnemy(fleet_forces=[FleetForce(1)] * (ENEMY_FLEET_COUNT - 1))


def test_fleet_counts_and_attack_force() -> None:
    query = make_query(ally=(100, 50, 0, 20), tired=(1,), enemy=(30, 0, 40), guard=10)

    assert query.ally.fleet_count() == 3
    assert query.ally.attack_force() == 120
    assert query.enemy.fleet_count() == 3
    assert query.enemy.attack_force() == 80


def test_tired_fleet_still_counts_as_active() -> None:
    query = make_query(ally=(60,), tired=(0,))
    assert query.ally.fleet_count() == 1
    assert query.ally.attack_force() == 0
    assert query.is_valid()


def test_zero_guard_is_not_counted() -> None:
    query = make_query(enemy=(30,), guard=0)
    assert query.enemy.fleet_count() == 1
    assert query.enemy.attack_force() == 30


def test_validity_rules() -> None:
    assert not make_query(ally=()).is_valid()
    assert not make_query(ally=(100,), enemy=(), guard=0).is_valid()
    assert make_query(ally=(1,), enemy=(), guard=1).is_valid()
    assert make_query(ally=(1,), enemy=(0, 0, 5), guard=0).is_valid()
