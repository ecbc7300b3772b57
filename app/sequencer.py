"""
Identifier sequencer: named monotonic counters that feed entity ids.

Two backends share one interface:

- ``PostgresSequencer`` reads and rewinds native sequences.  ``nextval``
  and ``setval`` are not transactional, so a consumed value stays
  consumed even when the surrounding INSERT is rolled back; that is the
  gap ``reset_value`` exists to close.
- ``TableSequencer`` keeps one row per sequence in ``id_sequences`` for
  databases without native sequences (SQLite in tests and local runs).

``reset_value`` is a compensating operation only.  Every operation is a
single statement, so readers never observe a partial reset.
"""
import logging
import re
from abc import ABC, abstractmethod

from sqlalchemy import insert, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import translate_errors
from app.models import IdSequence

logger = logging.getLogger(__name__)

_SEQUENCE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Sequencer(ABC):
    """Interface shared by the sequence backends."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    @abstractmethod
    async def current_value(self, name: str) -> int:
        """Return the last value consumed from *name* (0 if none yet)."""

    @abstractmethod
    async def reset_value(self, name: str, value: int) -> None:
        """Rewind *name* so that the next consumption yields ``value + 1``."""

    @abstractmethod
    async def next_value(self, name: str) -> int:
        """Consume and return the next value of *name*."""


class PostgresSequencer(Sequencer):
    @staticmethod
    def _checked(name: str) -> str:
        # The name is interpolated into ``FROM``; bind parameters cannot be used there.
        if not _SEQUENCE_NAME_RE.match(name):
            raise ValueError(f"Invalid sequence name: {name!r}")
        return name

    async def current_value(self, name: str) -> int:
        # A fresh sequence reports last_value = start with is_called = false.
        q = text(
            "SELECT CASE WHEN is_called THEN last_value ELSE last_value - 1 END "
            f"FROM {self._checked(name)}"
        )
        with translate_errors():
            return (await self._db.execute(q)).scalar_one()

    async def reset_value(self, name: str, value: int) -> None:
        self._checked(name)
        if value >= 1:
            q = text("SELECT setval(:name, :value, true)").bindparams(name=name, value=value)
        else:
            # Nothing consumed yet; setval cannot go below MINVALUE.
            q = text("SELECT setval(:name, 1, false)").bindparams(name=name)
        with translate_errors():
            await self._db.execute(q)
        logger.debug("Sequence %s reset to %d", name, value)

    async def next_value(self, name: str) -> int:
        q = text("SELECT nextval(:name)").bindparams(name=self._checked(name))
        with translate_errors():
            return (await self._db.execute(q)).scalar_one()


class TableSequencer(Sequencer):
    async def current_value(self, name: str) -> int:
        q = select(IdSequence.last_value).where(IdSequence.name == name)
        with translate_errors():
            value = (await self._db.execute(q)).scalar_one_or_none()
        return value or 0

    async def reset_value(self, name: str, value: int) -> None:
        await self._write(name, value)
        logger.debug("Sequence %s reset to %d", name, value)

    async def next_value(self, name: str) -> int:
        bump = (
            update(IdSequence)
            .where(IdSequence.name == name)
            .values(last_value=IdSequence.last_value + 1)
            .execution_options(synchronize_session=False)
        )
        with translate_errors():
            result = await self._db.execute(bump)
            if result.rowcount == 0:
                await self._db.execute(insert(IdSequence).values(name=name, last_value=1))
                return 1
        return await self.current_value(name)

    async def _write(self, name: str, value: int) -> None:
        stmt = (
            update(IdSequence)
            .where(IdSequence.name == name)
            .values(last_value=value)
            .execution_options(synchronize_session=False)
        )
        with translate_errors():
            result = await self._db.execute(stmt)
            if result.rowcount == 0:
                await self._db.execute(insert(IdSequence).values(name=name, last_value=value))


def sequencer_for(db: AsyncSession) -> Sequencer:
    """Pick the sequence backend matching the session's database."""
    if db.get_bind().dialect.name == "postgresql":
        return PostgresSequencer(db)
    return TableSequencer(db)
