# app/database.py
import logging
from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from .core.config import DATABASE_URL, SQL_ECHO, AUTO_CREATE_TABLES

logger = logging.getLogger(__name__)

logger.debug("Using DATABASE_URL: %s", DATABASE_URL)


def enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    """
    aiosqlite startet Transaktionen selbst erst vor dem ersten DML-Statement,
    damit funktionieren SAVEPOINTs (begin_nested) nicht zuverlässig. Hier
    übernimmt SQLAlchemy das BEGIN.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


# echo=True gibt alle SQL-Statements aus. In Produktion auf False lassen.
engine = create_async_engine(DATABASE_URL, echo=SQL_ECHO)
if engine.dialect.name == "sqlite":
    enable_sqlite_savepoints(engine)

AsyncSessionFactory = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC-Zeit, wie sie in allen DateTime-Spalten gespeichert wird."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


async def get_db_session() -> AsyncSession:
    async with AsyncSessionFactory() as session:
        try:
            yield session
            await session.commit()  # Commit am Ende, wenn alles gut ging
        except Exception:
            await session.rollback()  # Rollback bei Fehlern
            raise
        finally:
            await session.close()


async def create_db_and_tables():
    """
    Das Schema wird normalerweise von Alembic verwaltet. Für lokale
    SQLite-Setups kann es mit AUTO_CREATE_TABLES direkt erzeugt werden.
    """
    if not AUTO_CREATE_TABLES:
        logger.info("AUTO_CREATE_TABLES deaktiviert, Schema wird von Alembic verwaltet.")
        return

    from . import models  # noqa: F401  registriert die Tabellen an Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Datenbanktabellen erstellt bzw. vorhanden.")
