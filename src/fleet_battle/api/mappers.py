from __future__ import annotations

from fleet_battle.api import schemas
from fleet_battle.domain.query import Query, QueryAlly, QueryEnemy
from fleet_battle.domain.reports import Report
from fleet_battle.domain.types import FleetForce, Formation


def build_query(form: schemas.QueryForm) -> Query:
    """Turn an already validated form into a domain query."""
    return Query(
        ally=QueryAlly(
            fleet_forces=[FleetForce(int(v)) for v in form.ally.fleet_forces],
            fleet_is_tireds=list(form.ally.fleet_is_tireds),
            formation=Formation(int(form.ally.formation)),
        ),
        enemy=QueryEnemy(
            fleet_forces=[FleetForce(int(v)) for v in form.enemy.fleet_forces],
            guard_force=FleetForce(int(form.enemy.guard_force)),
            formation=Formation(int(form.enemy.formation)),
            has_yang=form.enemy.has_yang,
        ),
    )


def build_query_form(query: Query) -> schemas.QueryForm:
    return schemas.QueryForm(
        ally=schemas.AllyForm(
            fleet_forces=[f.value for f in query.ally.fleet_forces],
            fleet_is_tireds=list(query.ally.fleet_is_tireds),
            formation=query.ally.formation.value,
        ),
        enemy=schemas.EnemyForm(
            fleet_forces=[f.value for f in query.enemy.fleet_forces],
            guard_force=query.enemy.guard_force.value,
            formation=query.enemy.formation.value,
            has_yang=query.enemy.has_yang,
        ),
    )


def build_simulation_response(report: Report | None, query: Query | None = None) -> schemas.SimulationResponse:
    """Wrap a report, echoing the query it was computed from when given."""
    query_form = build_query_form(query) if query is not None else None
    if report is None:
        return schemas.SimulationResponse(valid=False, report=None, query=query_form)
    return schemas.SimulationResponse(valid=True, report=_report(report), query=query_form)


def _report(report: Report) -> schemas.ReportResponse:
    return schemas.ReportResponse(
        ally=schemas.AllyResult(
            formation=report.ally.formation.value,
            damage_per_fleet=report.ally.damage_per_fleet,
            fleet_forces=[f.value for f in report.ally.fleet_forces],
        ),
        enemy=schemas.EnemyResult(
            formation=report.enemy.formation.value,
            damage_per_fleet=report.enemy.damage_per_fleet,
            fleet_forces=[f.value for f in report.enemy.fleet_forces],
            guard_force=report.enemy.guard_force.value,
        ),
    )
