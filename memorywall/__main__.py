"""
memorywall.__main__ — Dev utilities for ``python -m memorywall``
=================================================================

Wiring:
1. Load .env (DATABASE_URL).
2. Create the SQLAlchemy engine and ensure tables exist.
3. Run the requested sub-command against a RecordStore.

Sub-commands::

    python -m memorywall seed              # load reference data (once)
    python -m memorywall reset             # wipe everything and reseed
    python -m memorywall inspect posts     # dump one collection as JSON

Development use only.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from memorywall.constants import ALL_KEYS
from memorywall.database.engine import create_db_engine, init_db
from memorywall.database.seed import reset_store, seed_reference_data
from memorywall.database.store import RecordStore

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("memorywall")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="memorywall", description="MemoryWall dev utilities")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("seed", help="Load the reference dataset into a fresh medium")
    sub.add_parser("reset", help="Wipe every collection and reseed")
    inspect = sub.add_parser("inspect", help="Print one collection as JSON")
    inspect.add_argument("collection", choices=ALL_KEYS)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Environment variables.
    load_dotenv()

    # 2. Database.
    engine = create_db_engine()
    init_db(engine)
    store = RecordStore(engine)

    # 3. Command.
    if args.command == "seed":
        if not seed_reference_data(store):
            logger.info("Nothing to do — medium already seeded.")
    elif args.command == "reset":
        reset_store(store)
    elif args.command == "inspect":
        value = store.get(args.collection)
        json.dump(value, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
