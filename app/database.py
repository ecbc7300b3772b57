from contextlib import contextmanager

from sqlalchemy import event
from sqlalchemy.exc import (
    DataError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.exceptions import ConstraintViolation, StoreUnavailable
from app.middleware import install_query_counter


def _sql_state(orig) -> str | None:
    # asyncpg exposes ``sqlstate``, psycopg ``pgcode``; sqlite has neither.
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


@contextmanager
def translate_errors():
    """
    Re-raise driver failures inside the block as service failures:
    integrity and out-of-range data errors become ``ConstraintViolation``
    (keeping the driver's diagnostic) and connectivity errors become
    ``StoreUnavailable``.
    """
    try:
        yield
    except IntegrityError as exc:
        raise ConstraintViolation(str(exc.orig), _sql_state(exc.orig)) from exc
    except DataError as exc:
        raise ConstraintViolation(str(exc.orig), _sql_state(exc.orig)) from exc
    except OverflowError as exc:
        # sqlite3 refuses to bind integers wider than 64 bits before any SQL runs.
        raise ConstraintViolation(str(exc)) from exc
    except (OperationalError, InterfaceError, DisconnectionError, OSError) as exc:
        raise StoreUnavailable(str(exc)) from exc


def configure_sqlite(engine: AsyncEngine) -> None:
    """
    Make a SQLite engine behave like the production store.

    - ``PRAGMA foreign_keys=ON`` so dangling references are rejected.
    - The driver's implicit BEGIN is disabled and emitted by SQLAlchemy
      instead, which is what makes SAVEPOINT (``begin_nested``) work.

    No-op for any other dialect.
    """
    if engine.dialect.name != "sqlite":
        return
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

configure_sqlite(engine)
install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
