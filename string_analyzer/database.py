from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# DATABASE URL
# ------------------------------------------------------------------------------

# Private in-memory SQLite database; nothing survives a restart.
DATABASE_URL = "sqlite://"

Base = declarative_base()


# ------------------------------------------------------------------------------
# DATABASE ENGINE & SESSION
# ------------------------------------------------------------------------------
def create_memory_engine() -> Engine:
    """
    Create an engine bound to a fresh in-memory database.

    StaticPool keeps a single connection alive, otherwise each new
    connection would open a different, empty in-memory database.
    """
    try:
        engine = create_engine(
            DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    except Exception as e:
        logger.error(f"Failed to create SQLAlchemy engine: {e}")
        raise
    return engine


def init_db(engine: Engine) -> sessionmaker:
    """Create tables on the engine and return a session factory for it."""
    from string_analyzer import models  # noqa: F401  ensure models are registered
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
