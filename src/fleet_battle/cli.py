from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path

from pydantic import ValidationError

from fleet_battle.api import mappers, schemas
from fleet_battle.domain.query import Query
from fleet_battle.domain.types import (
    ALLY_FLEET_COUNT,
    ENEMY_FLEET_COUNT,
    FleetForce,
    Formation,
    ParseError,
    RangeError,
)
from fleet_battle.render.format import render_battle
from fleet_battle.rules.ruleset import DEFAULT_RULES, BattleRules, RulesError
from fleet_battle.systems.combat import simulate

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RESULT = 1
EXIT_INPUT_ERROR = 2


def parse_forces(text: str, count: int) -> list[FleetForce]:
    """Comma-separated forces; blank fields and missing trailing slots are empty."""
    parts = text.split(",")
    while parts and not parts[-1].strip():
        parts.pop()
    if len(parts) > count:
        raise RangeError(f"at most {count} fleets allowed, got {len(parts)}")
    forces = [FleetForce.parse(part) if part.strip() else FleetForce.zero() for part in parts]
    return forces + [FleetForce.zero()] * (count - len(forces))


def parse_slots(text: str, count: int) -> list[int]:
    """Comma-separated 1-based slot numbers, returned 0-based."""
    slots: list[int] = []
    for part in text.split(","):
        if not part.strip():
            continue
        if not re.fullmatch(r"\+?[0-9]+", part.strip()):
            raise ParseError(f"slot number is not a number: {part!r}")
        number = int(part.strip())
        if not 1 <= number <= count:
            raise RangeError(f"slot number is out of range: {number}")
        slots.append(number - 1)
    return slots


def build_query_from_args(args: argparse.Namespace) -> Query:
    query = Query()
    if args.ally is not None:
        for idx, force in enumerate(parse_forces(args.ally, ALLY_FLEET_COUNT)):
            query.set_ally_fleet_force(idx, force)
    if args.tired is not None:
        for idx in parse_slots(args.tired, ALLY_FLEET_COUNT):
            query.set_ally_fleet_is_tired(idx, True)
    if args.ally_formation is not None:
        query.set_ally_formation(Formation.parse(args.ally_formation))
    if args.enemy is not None:
        for idx, force in enumerate(parse_forces(args.enemy, ENEMY_FLEET_COUNT)):
            query.set_enemy_fleet_force(idx, force)
    if args.guard is not None:
        query.set_enemy_guard_force(FleetForce.parse(args.guard))
    if args.enemy_formation is not None:
        query.set_enemy_formation(Formation.parse(args.enemy_formation))
    if args.yang:
        query.set_enemy_has_yang(True)
    return query


def load_query_form(source: str) -> Query:
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    return mappers.build_query(schemas.QueryForm.model_validate_json(text))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fleet-battle",
        description="Resolve one combat round between an allied and an enemy fleet group.",
    )
    parser.add_argument("--ally", default=None, help="Ally fleet forces, comma separated (up to 11).")
    parser.add_argument("--tired", default=None, help="Fatigued ally slots, 1-based, comma separated.")
    parser.add_argument("--ally-formation", default=None, help="Ally formation 0-7 (default: 1).")
    parser.add_argument("--enemy", default=None, help="Enemy fleet forces, comma separated (up to 15).")
    parser.add_argument("--guard", default=None, help="Enemy garrison force (default: 100).")
    parser.add_argument("--enemy-formation", default=None, help="Enemy formation 0-7 (default: 1).")
    parser.add_argument("--yang", action="store_true", help="Enemy fields the Yang modifier.")
    parser.add_argument(
        "--query",
        default=None,
        help="Read the query from a JSON form document ('-' for stdin) instead of the flags above.",
    )
    parser.add_argument("--rules", default=None, help="JSON file with rule overrides.")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: %(default)s).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        rules = DEFAULT_RULES
        if args.rules is not None:
            rules = BattleRules.load(Path(args.rules))
            logger.info("Loaded rule overrides from %s", args.rules)
        if args.query is not None:
            query = load_query_form(args.query)
        else:
            query = build_query_from_args(args)
    except (ParseError, RangeError, RulesError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except ValidationError as exc:
        print(f"error: invalid query form\n{exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read query: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    report = simulate(query, rules)

    if args.json:
        response = mappers.build_simulation_response(report, query)
        print(response.model_dump_json(by_alias=True, indent=2))
    else:
        print(render_battle(query, report))

    return EXIT_OK if report is not None else EXIT_NO_RESULT


if __name__ == "__main__":
    raise SystemExit(main())
