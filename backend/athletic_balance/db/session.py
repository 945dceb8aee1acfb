import logging
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker

from athletic_balance.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()
database_url = settings.sqlalchemy_database_url
is_sqlite = database_url.startswith("sqlite")


def engine_options(settings, database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": max(settings.db_pool_min, 1),
        "max_overflow": max(settings.db_pool_max - settings.db_pool_min, 0),
        "pool_recycle": settings.db_pool_idle_timeout_seconds,
        "pool_pre_ping": True,
    }


engine_kwargs = engine_options(settings, database_url)
logger.debug("Database connection: %s", "SQLite" if is_sqlite else database_url.split(":", 1)[0])
engine = create_engine(database_url, **engine_kwargs)

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
