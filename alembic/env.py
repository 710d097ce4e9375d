# alembic/env.py
import logging
import os
import sys
from logging.config import fileConfig

from sqlalchemy import create_engine

from alembic import context

# Projekt-Root in den Pfad, damit 'app.models' und 'app.core.config' gefunden werden.
# Das 'alembic'-Verzeichnis liegt eine Ebene unter dem Projekt-Root.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from app.core.config import DATABASE_URL  # noqa: E402  lädt auch die .env
from app.database import Base  # noqa: E402
from app import models  # noqa: E402,F401  registriert die Tabellen

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

target_metadata = Base.metadata


def sync_url(url: str) -> str:
    """Alembic arbeitet synchron: Async-Treiber aus der URL entfernen."""
    for async_driver in ("+asyncpg", "+aiosqlite"):
        if async_driver in url:
            return url.replace(async_driver, "")
    return url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Calls to context.execute() here emit the given string to the
    script output.
    """
    offline_url = sync_url(DATABASE_URL)
    logger.info("Offline migrations using %s", offline_url)
    context.configure(
        url=offline_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode against a synchronous engine."""
    online_url = sync_url(DATABASE_URL)
    logger.info("Online migrations using %s", online_url)
    connectable = create_engine(online_url)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite kann Constraints nur per Tabellen-Neuaufbau ändern
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
