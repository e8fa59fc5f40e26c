"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger("petmeal.database")

# Create SQLAlchemy Base
Base = declarative_base()


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections get foreign key enforcement."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, echo=echo, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # meals.food_id is ON DELETE RESTRICT; SQLite ignores that unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Create engine
engine = build_engine(settings.database_url, echo=settings.db_echo)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def init_database(bind: Engine = None):
    """Initialize database schema"""
    # Import models so they register on Base.metadata
    from domain.models import food, meal, session  # noqa: F401

    with (bind or engine).begin() as conn:
        Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
