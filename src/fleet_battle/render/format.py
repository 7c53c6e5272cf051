from __future__ import annotations

from typing import Sequence

from fleet_battle.domain.query import Query
from fleet_battle.domain.reports import Report
from fleet_battle.domain.types import FleetForce

CELL_WIDTH = 4
DEAD_MARK = "-"


def fmt_force(force: FleetForce) -> str:
    """Destroyed fleets render as a dash so survivors stand out."""
    return DEAD_MARK if force.is_zero() else str(force)


def yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def row(label: str, cells: Sequence[str], label_width: int = 8) -> str:
    return label.ljust(label_width) + "".join(cell.rjust(CELL_WIDTH) for cell in cells)


def slot_header(count: int) -> str:
    return row("slot", [str(i + 1) for i in range(count)])


def render_query(query: Query) -> list[str]:
    ally = query.ally
    enemy = query.enemy
    return [
        "== Before battle ==",
        f"Ally   formation {ally.formation}",
        slot_header(len(ally.fleet_forces)),
        row("force", [fmt_force(f) for f in ally.fleet_forces]),
        row("tired", ["*" if t else "" for t in ally.fleet_is_tireds]),
        f"Enemy  formation {enemy.formation}  yang {yes_no(enemy.has_yang)}  guard {fmt_force(enemy.guard_force)}",
        slot_header(len(enemy.fleet_forces)),
        row("force", [fmt_force(f) for f in enemy.fleet_forces]),
    ]


def render_report(report: Report) -> list[str]:
    ally = report.ally
    enemy = report.enemy
    return [
        "== After battle ==",
        f"Ally   formation {ally.formation}  damage/fleet {ally.damage_per_fleet}",
        slot_header(len(ally.fleet_forces)),
        row("force", [fmt_force(f) for f in ally.fleet_forces]),
        (
            f"Enemy  formation {enemy.formation}  damage/fleet {enemy.damage_per_fleet}"
            f"  guard {fmt_force(enemy.guard_force)}"
        ),
        slot_header(len(enemy.fleet_forces)),
        row("force", [fmt_force(f) for f in enemy.fleet_forces]),
    ]


def render_battle(query: Query, report: Report | None) -> str:
    lines = render_query(query)
    lines.append("")
    if report is None:
        lines.append("No result: each side needs at least one fleet with troops.")
    else:
        lines.extend(render_report(report))
    return "\n".join(lines)
