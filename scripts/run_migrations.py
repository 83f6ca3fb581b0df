#!/usr/bin/env python3
"""Apply Alembic migrations to the configured database.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a specific revision
"""

import sys
import logfire
from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory

from cluster.config import Settings
from cluster.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Migrate to the requested revision, reporting failures to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    target = argv[0] if argv else "head"
    heads = ScriptDirectory.from_config(alembic_cfg).get_heads()

    with logfire.span("migrations.run", target=target, heads=heads):
        try:
            command.upgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container does not start with a broken schema
            raise

    logfire.info("Database migrations completed", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
