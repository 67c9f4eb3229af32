# src/inkpress/scripts/migrate.py
"""Bring the configured database up to the latest schema."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from inkpress.core.settings import settings
from inkpress.db.session import create_tables

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def alembic_config() -> Config:
    """Return an Alembic config pointed at the project's migrations."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    return cfg


def run_upgrade_head() -> None:
    """Apply every pending migration."""
    command.upgrade(alembic_config(), "head")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create or migrate the Inkpress database.")
    parser.add_argument(
        "--create-all",
        action="store_true",
        help="Create tables straight from the models instead of running migrations.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    if args.create_all:
        create_tables()
        logger.info("Created tables for %s", settings.effective_database_url)
    else:
        run_upgrade_head()
        logger.info("Database is at head")


if __name__ == "__main__":
    main()
