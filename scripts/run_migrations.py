#!/usr/bin/env python3
"""Upgrade the Quill schema.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to ``head``. The database comes from ``DATABASE__URL``
(see ``quill.config.Settings``).
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from quill.config import Settings
from quill.util.logging import setup_logging
from quill.util.observability import configure_logfire

ROOT = Path(__file__).resolve().parent.parent


def alembic_config() -> Config:
    """Alembic config that works from any working directory."""
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    return cfg


def main(argv: list[str]) -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)
    revision = argv[0] if argv else "head"

    with logfire.span(
        "migrations.upgrade",
        revision=revision,
        environment=settings.environment,
    ):
        try:
            command.upgrade(alembic_config(), revision)
        except Exception as e:
            logfire.error(
                "Schema upgrade failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Schema upgraded", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
