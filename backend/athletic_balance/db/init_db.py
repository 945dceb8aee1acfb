"""Create the schema and load the built-in coaches.

Run with ``python -m athletic_balance.db.init_db``.
"""
import logging

from sqlalchemy.engine import Engine

import athletic_balance.models  # noqa: F401
from athletic_balance.coaches.registry import list_coaches
from athletic_balance.core.config import get_settings
from athletic_balance.core.errors import AppError
from athletic_balance.core.logging import configure_logging
from athletic_balance.db.base import Base
from athletic_balance.db.query import TableClient
from athletic_balance.db.session import SessionLocal, engine as default_engine

logger = logging.getLogger(__name__)


def seed_coaches(db) -> int:
    client = TableClient(db)
    for coach in list_coaches():
        result = (
            client.table("coaches")
            .upsert(
                {
                    "id": coach.slug,
                    "name": coach.name,
                    "emoji": coach.emoji,
                    "tagline": coach.tagline,
                    "system_prompt": coach.system_prompt,
                }
            )
            .execute()
        )
        if not result.ok:
            raise AppError(f"Failed to seed coach {coach.slug}: {result.error}")
    return len(list_coaches())


def initialize_database(engine: Engine = default_engine, session_factory=SessionLocal) -> None:
    Base.metadata.create_all(bind=engine)
    db = session_factory()
    try:
        count = seed_coaches(db)
    finally:
        db.close()
    logger.info("Database initialized with %d coaches", count)


if __name__ == "__main__":
    configure_logging(get_settings())
    initialize_database()
