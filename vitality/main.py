"""
Main entry point for the vitality tracker.

Loads a creature record (or creates a training dummy), optionally a custom
damage catalog, and opens the interactive console. The record is written
back on exit when it was loaded from a file.
"""

import argparse
import logging
from pathlib import Path

from vitality.character.creature import Creature, CreatureRecord
from vitality.character.serialization import load_creature, save_creature
from vitality.core.catalog import default_catalog, load_catalog
from vitality.core.logging import log_error, log_info, setup_logging
from vitality.core.utils import crule
from vitality.ui.cli_interface import run_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vitality",
        description="Track hit points, affinities and combat history of a creature.",
    )
    parser.add_argument("creature", nargs="?", type=Path, help="creature JSON file")
    parser.add_argument("--catalog", type=Path, help="damage catalog JSON file")
    parser.add_argument("--hp", type=int, default=100, help="HP of the training dummy")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    try:
        catalog = load_catalog(args.catalog) if args.catalog else default_catalog()
        if args.creature and args.creature.exists():
            record = load_creature(args.creature)
        else:
            record = CreatureRecord(name="Training Dummy", total_hp=args.hp)
    except ValueError as e:
        log_error(str(e), {"creature": args.creature, "catalog": args.catalog})
        return 1
    log_info(f"Loaded {record.name}", {"hp": f"{record.current_hp}/{record.total_hp}"})

    creature = Creature(record, catalog=catalog)
    crule("Vitality Tracker", style="bold green")
    run_session(creature)

    if args.creature:
        save_creature(creature.sync_record(), args.creature)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
