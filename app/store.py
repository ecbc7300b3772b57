"""
Entity store: per-model persistence over an ``AsyncSession``.

The store assigns identifiers on insert by consuming the model's named
sequence, and flushes every write inside a SAVEPOINT so that a rejected
write leaves the request transaction usable (the lifecycle service still
has to rewind the sequence afterwards).  Driver errors leave the store as
``ConstraintViolation`` / ``StoreUnavailable``.

Like the rest of the service layer, the store flushes but never commits;
``get_db`` owns the transaction boundary.
"""
from typing import Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base, translate_errors
from app.models import ID_MAX
from app.sequencer import Sequencer

K = TypeVar("K", bound=Base)


class EntityStore(Generic[K]):
    def __init__(self, db: AsyncSession, model: type[K], sequencer: Sequencer) -> None:
        self.db = db
        self.model = model
        self.sequencer = sequencer

    @property
    def sequence_name(self) -> str:
        return self.model.__sequence_name__

    async def find_by_id(self, entity_id: int) -> K | None:
        # Ids outside the column range were never issued; asking the driver
        # would fail on the bind rather than return nothing.
        if not 1 <= entity_id <= ID_MAX:
            return None
        with translate_errors():
            return await self.db.get(self.model, entity_id)

    async def find_all(self) -> list[K]:
        # No ORDER BY: rows come back in the database's native order.
        with translate_errors():
            result = await self.db.execute(select(self.model))
            return list(result.scalars().all())

    async def save(self, entity: K) -> K:
        """
        Insert *entity* when its id is unset, otherwise overwrite the row
        with that id.  Returns the persistent instance.
        """
        with translate_errors():
            if entity.id is None:
                entity.id = await self.sequencer.next_value(self.sequence_name)
                async with self.db.begin_nested():
                    self.db.add(entity)
                return entity

            async with self.db.begin_nested():
                entity = await self.db.merge(entity)
            return entity

    async def delete_by_id(self, entity_id: int) -> None:
        stmt = (
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session="fetch")
        )
        with translate_errors():
            async with self.db.begin_nested():
                await self.db.execute(stmt)
