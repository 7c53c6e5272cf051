from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from fleet_battle.domain.types import ALLY_FLEET_COUNT, ENEMY_FLEET_COUNT, FleetForce, Formation

FormValue = Union[StrictInt, str]


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_by_name=True)


def _force_value(value: FormValue) -> int:
    if isinstance(value, str):
        return FleetForce.parse(value).value
    return FleetForce(value).value


def _formation_value(value: FormValue) -> int:
    if isinstance(value, str):
        return Formation.parse(value).value
    return Formation(value).value


class AllyForm(CamelModel):
    fleet_forces: List[FormValue] = Field(
        default_factory=lambda: [FleetForce.MAX_VALUE] + [0] * (ALLY_FLEET_COUNT - 1),
        alias="fleetForces",
        min_length=ALLY_FLEET_COUNT,
        max_length=ALLY_FLEET_COUNT,
    )
    fleet_is_tireds: List[bool] = Field(
        default_factory=lambda: [False] * ALLY_FLEET_COUNT,
        alias="fleetIsTireds",
        min_length=ALLY_FLEET_COUNT,
        max_length=ALLY_FLEET_COUNT,
    )
    formation: FormValue = 1

    @field_validator("fleet_forces")
    @classmethod
    def _parse_forces(cls, values: List[FormValue]) -> List[int]:
        return [_force_value(v) for v in values]

    @field_validator("formation")
    @classmethod
    def _parse_formation(cls, value: FormValue) -> int:
        return _formation_value(value)


class EnemyForm(CamelModel):
    fleet_forces: List[FormValue] = Field(
        default_factory=lambda: [0] * ENEMY_FLEET_COUNT,
        alias="fleetForces",
        min_length=ENEMY_FLEET_COUNT,
        max_length=ENEMY_FLEET_COUNT,
    )
    guard_force: FormValue = Field(FleetForce.MAX_VALUE, alias="guardForce")
    formation: FormValue = 1
    has_yang: bool = Field(False, alias="hasYang")

    @field_validator("fleet_forces")
    @classmethod
    def _parse_forces(cls, values: List[FormValue]) -> List[int]:
        return [_force_value(v) for v in values]

    @field_validator("guard_force")
    @classmethod
    def _parse_guard(cls, value: FormValue) -> int:
        return _force_value(value)

    @field_validator("formation")
    @classmethod
    def _parse_formation(cls, value: FormValue) -> int:
        return _formation_value(value)


class QueryForm(CamelModel):
    ally: AllyForm = Field(default_factory=AllyForm)
    enemy: EnemyForm = Field(default_factory=EnemyForm)


class AllyResult(CamelModel):
    formation: int = Field(..., ge=0, le=7)
    damage_per_fleet: int = Field(..., alias="damagePerFleet", ge=0)
    fleet_forces: List[int] = Field(..., alias="fleetForces")


class EnemyResult(CamelModel):
    formation: int = Field(..., ge=0, le=7)
    damage_per_fleet: int = Field(..., alias="damagePerFleet", ge=0)
    fleet_forces: List[int] = Field(..., alias="fleetForces")
    guard_force: int = Field(..., alias="guardForce", ge=0, le=100)


class ReportResponse(CamelModel):
    ally: AllyResult
    enemy: EnemyResult


class SimulationResponse(CamelModel):
    valid: bool
    report: Optional[ReportResponse] = None
    query: Optional[QueryForm] = None
