"""
Alembic migration environment for the coach-match schema.

The database URL always comes from :mod:`app.core.config`, never from the
ini file, so migrations and the API talk to the same database.
"""

from alembic import context
from sqlalchemy import create_engine, pool
from sqlmodel import SQLModel

import app.db.base  # noqa: F401  (registers members, coaches, skills, member_coach, requests)
from app.core.config import settings
from app.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger("alembic.env")

target_metadata = SQLModel.metadata
database_url = settings.SQLALCHEMY_DATABASE_URI


def _configure_options() -> dict:
    # SQLite cannot ALTER most constraints in place
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": database_url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout without connecting."""
    logger.info("Generating offline migration SQL")
    context.configure(url=database_url, literal_binds=True, dialect_opts={"paramstyle": "named"},
                      **_configure_options())

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a single non-pooled connection."""
    connectable = create_engine(database_url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_options())

        with context.begin_transaction():
            logger.info("Running migrations against %s", connectable.url.render_as_string(hide_password=True))
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
