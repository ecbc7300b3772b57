"""Alembic environment for the Q&A schema (async SQLAlchemy).

Supports offline (SQL script) and online (live async connection) modes.
On PostgreSQL the ids come from native sequences declared on the models,
so the ``id_sequences`` fallback table is left out of the migrations.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

from app.config import settings
from app.database import Base

# Import all models so Alembic can detect them via Base.metadata.
import app.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Credentials live in Settings (.env / environment), not in alembic.ini.
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

target_metadata = Base.metadata

_NATIVE_SEQUENCES = make_url(settings.DATABASE_URL).get_backend_name() == "postgresql"


def include_object(obj, name, type_, reflected, compare_to):
    """Skip the table-backed sequence storage where native sequences exist."""
    if type_ == "table" and name == "id_sequences" and _NATIVE_SEQUENCES:
        return False
    return True


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting to the database."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        include_object=include_object,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = create_async_engine(settings.DATABASE_URL, pool_pre_ping=True)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
