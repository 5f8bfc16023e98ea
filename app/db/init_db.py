"""
Database initialization.

Creates all tables directly, for local setups without Alembic.
"""

from sqlmodel import SQLModel

from app.core.logging import get_logger
from app.db.session import engine

logger = get_logger(__name__)


def init_db() -> None:
    """Create every table registered on ``SQLModel.metadata``."""
    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created successfully")


if __name__ == "__main__":
    init_db()
