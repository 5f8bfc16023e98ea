"""
Database initialization script.

Creates all tables without going through Alembic (local development).

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.logging import configure_logging, get_logger
from app.db.init_db import init_db

logger = get_logger("scripts.init_db")

if __name__ == "__main__":
    configure_logging()
    try:
        init_db()
    except Exception:
        logger.exception("Database initialization failed")
        sys.exit(1)
    logger.info("Database initialized")
    sys.exit(0)
