"""
Entity lifecycle service: get / list / create / update / delete, written
once and parameterised over the ORM model.

Design notes
------------
- ``get`` raises ``NotFound``; nothing else in the service returns None
  for a missing row.
- ``update`` and ``delete`` are wrapped in ``requires_existing``, which runs
  ``get`` first.  A missing id therefore fails with ``NotFound`` before the
  store's mutating call is reached, and update can never insert a new row.
- ``create`` reads the model's sequence before saving.  If the save fails
  the sequence is rewound to that value and the original failure is
  re-raised.  A failing rewind is logged and counted, never raised.
- The rewind is best effort.  A concurrent create that consumed a value
  between the read and the rewind can have that value handed out again on
  the next create; serialising creates is not attempted.
"""
import functools
import logging
from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.exceptions import NotFound
from app.sequencer import sequencer_for
from app.store import EntityStore

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Base)


class _CompensationStats:
    def __init__(self) -> None:
        self.resets: int = 0
        self.failures: int = 0


# Module-level counters surfaced by the metrics endpoint.
compensation_stats = _CompensationStats()


def requires_existing(method):
    """Run ``self.get(entity_id)`` before *method*, propagating ``NotFound``."""

    @functools.wraps(method)
    async def wrapper(self, entity_id: int, *args, **kwargs):
        await self.get(entity_id)
        return await method(self, entity_id, *args, **kwargs)

    return wrapper


class EntityService(Generic[K]):
    """
    Lifecycle operations for one entity kind.

    Subclasses set ``model`` (the ORM class, which names its sequence via
    ``__sequence_name__``) and ``kind`` (the name used in ``NotFound``).
    """

    model: type[K]
    kind: str

    def __init__(self, store: EntityStore[K]) -> None:
        self.store = store

    @classmethod
    def for_session(cls, db: AsyncSession) -> "EntityService[K]":
        return cls(EntityStore(db, cls.model, sequencer_for(db)))

    async def get(self, entity_id: int) -> K:
        entity = await self.store.find_by_id(entity_id)
        if entity is None:
            raise NotFound(self.kind, entity_id)
        return entity

    async def list(self) -> list[K]:
        return await self.store.find_all()

    async def create(self, candidate: K) -> K:
        sequence = self.store.sequence_name
        before = await self.store.sequencer.current_value(sequence)

        # The store assigns the identifier.
        candidate.id = None
        try:
            entity = await self.store.save(candidate)
        except Exception as exc:
            logger.warning(
                "Create %s failed (%s); resetting %s to %d",
                self.kind, exc, sequence, before,
            )
            await self._rewind(sequence, before)
            raise

        logger.debug("Created %s id=%s", self.kind, entity.id)
        return entity

    @requires_existing
    async def update(self, entity_id: int, candidate: K) -> K:
        candidate.id = entity_id
        entity = await self.store.save(candidate)
        logger.debug("Updated %s id=%s", self.kind, entity_id)
        return entity

    @requires_existing
    async def delete(self, entity_id: int) -> None:
        await self.store.delete_by_id(entity_id)
        logger.debug("Deleted %s id=%s", self.kind, entity_id)

    async def _rewind(self, sequence: str, value: int) -> None:
        try:
            await self.store.sequencer.reset_value(sequence, value)
        except Exception:
            compensation_stats.failures += 1
            logger.error(
                "Could not reset sequence %s to %d after failed %s create",
                sequence, value, self.kind, exc_info=True,
            )
        else:
            compensation_stats.resets += 1
