"""Bounded integer types and fleet slot counts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

ALLY_FLEET_COUNT = 11
ENEMY_FLEET_COUNT = 15


class RangeError(ValueError):
    """A bounded value was constructed outside its allowed range."""


class ParseError(ValueError):
    """Text input could not be read as an integer."""


_DIGITS = re.compile(r"\+?[0-9]+")


def _parse_int(text: str, what: str) -> int:
    stripped = text.strip()
    if not _DIGITS.fullmatch(stripped):
        raise ParseError(f"{what} value is not a number: {text!r}")
    return int(stripped)


@dataclass(frozen=True, order=True)
class FleetForce:
    """Troop strength of one fleet, 0-100. Zero means the fleet is gone."""

    value: int

    MIN_VALUE: ClassVar[int] = 0
    MAX_VALUE: ClassVar[int] = 100
    MIN: ClassVar["FleetForce"]
    MAX: ClassVar["FleetForce"]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"force value must be int, got {type(self.value).__name__}")
        if not self.MIN_VALUE <= self.value <= self.MAX_VALUE:
            raise RangeError(f"force value is out of range: {self.value}")

    @classmethod
    def zero(cls) -> "FleetForce":
        return cls(0)

    @classmethod
    def parse(cls, text: str) -> "FleetForce":
        return cls(_parse_int(text, "force"))

    def is_zero(self) -> bool:
        return self.value == 0

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


FleetForce.MIN = FleetForce(FleetForce.MIN_VALUE)
FleetForce.MAX = FleetForce(FleetForce.MAX_VALUE)


@dataclass(frozen=True)
class Formation:
    """Tactical stance, 0-7. Formation 0 is the collapsed stance."""

    value: int

    MIN_VALUE: ClassVar[int] = 0
    MAX_VALUE: ClassVar[int] = 7
    MIN: ClassVar["Formation"]
    MAX: ClassVar["Formation"]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"formation value must be int, got {type(self.value).__name__}")
        if not self.MIN_VALUE <= self.value <= self.MAX_VALUE:
            raise RangeError(f"formation value is out of range: {self.value}")

    @classmethod
    def parse(cls, text: str) -> "Formation":
        return cls(_parse_int(text, "formation"))

    @classmethod
    def all(cls) -> list["Formation"]:
        return [cls(i) for i in range(cls.MIN_VALUE, cls.MAX_VALUE + 1)]

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


Formation.MIN = Formation(Formation.MIN_VALUE)
Formation.MAX = Formation(Formation.MAX_VALUE)

FORMATION_COUNT = Formation.MAX_VALUE - Formation.MIN_VALUE + 1

FORMATION_0 = Formation(0)
FORMATION_1 = Formation(1)
FORMATION_5 = Formation(5)


def slot_index(idx: int, count: int) -> int:
    """Check a fleet slot index; negative indices would wrap around silently."""
    if not 0 <= idx < count:
        raise IndexError(f"fleet index {idx} out of range 0..{count - 1}")
    return idx
