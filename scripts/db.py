"""Database maintenance: create tables, load demo employees, show tables.

Usage: python scripts/db.py {init,seed,status} [--env testing]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.punchboard.punchboard.database.bootstrap import apply_schema, apply_seed_sql, list_tables

SQL_DIR = REPO_ROOT / "database"


def _target(db_config: dict) -> str:
    return f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"


def run(command: str, db_config: dict) -> str:
    if command == "init":
        apply_schema(db_config, schema_path=SQL_DIR / "schema.sql")
    elif command == "seed":
        apply_seed_sql(db_config, seed_path=SQL_DIR / "seed.sql")
    elif command != "status":
        raise ValueError(f"Unknown command: {command}")

    tables = list_tables(db_config)
    return f"{command}: {_target(db_config)} tables={', '.join(tables) or '-'}"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("command", choices=["init", "seed", "status"])
    parser.add_argument("--env", help="Overrides APP_ENV for this run")
    args = parser.parse_args(argv)

    if args.env:
        os.environ["APP_ENV"] = args.env
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module())
    print(run(args.command, dict(settings.DB_CONFIG)))


if __name__ == "__main__":
    main()
