"""Startup script for production deployment.

On a fresh database (no tables), creates all tables from models, loads the
built-in coaches and stamps Alembic to head. On an existing database, runs
Alembic migrations and refreshes the coaches.
"""

import logging
import subprocess
import sys

from sqlalchemy import inspect

from athletic_balance.core.config import get_settings
from athletic_balance.core.logging import configure_logging
from athletic_balance.db.init_db import initialize_database, seed_coaches
from athletic_balance.db.session import SessionLocal, engine

logger = logging.getLogger("start")


def main():
    configure_logging(get_settings())
    tables = inspect(engine).get_table_names()

    if "users" not in tables:
        logger.info("Fresh database detected, creating all tables")
        initialize_database()
        logger.info("Tables created. Stamping Alembic to head")
        subprocess.check_call([sys.executable, "-m", "alembic", "stamp", "head"])
    else:
        logger.info("Existing database, running migrations")
        subprocess.check_call([sys.executable, "-m", "alembic", "upgrade", "head"])
        db = SessionLocal()
        try:
            seed_coaches(db)
        finally:
            db.close()
    logger.info("Startup complete")


if __name__ == "__main__":
    main()
