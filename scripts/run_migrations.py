#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking."""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from quill.config import Settings
from quill.util.observability import configure_logfire


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "revision", nargs="?", default="head", help="Target revision (default: head)"
    )
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", revision=args.revision)

        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, args.revision)

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container doesn't start with a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
