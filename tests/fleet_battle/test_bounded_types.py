from __future__ import annotations

import pytest

from fleet_battle.domain.types import (
    FORMATION_COUNT,
    FleetForce,
    Formation,
    ParseError,
    RangeError,
    slot_index,
)


def test_fleet_force_bounds() -> None:
    assert FleetForce.MIN.value == 0
    assert FleetForce.MAX.value == 100
    assert FleetForce(0).is_zero()
    assert not FleetForce(1).is_zero()
    assert FleetForce.zero() == FleetForce(0)


@pytest.mark.parametrize("value", [-1, 101, 1000])
def test_fleet_force_rejects_out_of_range(value: int) -> None:
    with pytest.raises(RangeError, match="force value is out of range"):
        FleetForce(value)


@pytest.mark.parametrize("value", [-1, 8, 100])
def test_formation_rejects_out_of_range(value: int) -> None:
    with pytest.raises(RangeError, match="formation value is out of range"):
        Formation(value)


def test_bounded_types_reject_non_int() -> None:
    with pytest.raises(TypeError):
        FleetForce(True)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Formation(1.5)  # type: ignore[arg-type]


def test_parse_accepts_whitespace() -> None:
    assert FleetForce.parse(" 42 ") == FleetForce(42)
    assert Formation.parse("7\n") == Formation(7)


@pytest.mark.parametrize("text", ["", "abc", "12a", "4.5", "5_0", "５０", "-0", "1e2"])
def test_parse_rejects_non_numeric_text(text: str) -> None:
    with pytest.raises(ParseError, match="not a number"):
        FleetForce.parse(text)
    with pytest.raises(ParseError, match="not a number"):
        Formation.parse(text)


def test_parse_rejects_out_of_range_numbers() -> None:
    with pytest.raises(RangeError):
        FleetForce.parse("101")
    with pytest.raises(RangeError):
        Formation.parse("8")


def test_errors_are_value_errors() -> None:
    assert issubclass(RangeError, ValueError)
    assert issubclass(ParseError, ValueError)


def test_formation_listing_and_display() -> None:
    formations = Formation.all()
    assert len(formations) == FORMATION_COUNT == 8
    assert [f.value for f in formations] == list(range(8))
    assert str(Formation(3)) == "3"
    assert str(FleetForce(55)) == "55"
    assert int(FleetForce(55)) == 55


def test_fleet_forces_order_by_value() -> None:
    assert FleetForce(10) < FleetForce(20)
    assert max(FleetForce(3), FleetForce(9)) == FleetForce(9)


def test_slot_index_rejects_negative_and_overflow() -> None:
    assert slot_index(0, 11) == 0
    assert slot_index(10, 11) == 10
    with pytest.raises(IndexError):
        slot_index(-1, 11)
    with pytest.raises(IndexError):
        slot_index(11, 11)
