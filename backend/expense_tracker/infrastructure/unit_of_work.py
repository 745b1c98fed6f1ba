"""Unit of Work - commits one request's staged changes as a single transaction.

Invariants:
    - save_changes() is the only place a request commits
    - Before commit: new entities get created_at = updated_at = now; modified entities
      get updated_at = now (one timestamp per commit)
    - Deleted entities are not stamped
    - Storage failures propagate; the session manager rolls back and maps them to DatabaseError
"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.domain_types import utc_now
from expense_tracker.db.base import AuditTimestampsMixin

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """Flushes and commits the request-scoped session after stamping audit timestamps."""

    def __init__(
        self, db: AsyncSession, clock: Callable[[], datetime] = utc_now,
    ):
        self._db = db
        self._clock = clock

    async def save_changes(self) -> None:
        now = self._clock()
        created = updated = 0
        for entity in self._db.new:
            if isinstance(entity, AuditTimestampsMixin):
                entity.mark_created(now)
                created += 1
        for entity in self._db.dirty:
            if isinstance(entity, AuditTimestampsMixin):
                entity.mark_updated(now)
                updated += 1
        await self._db.commit()
        logger.debug(
            f"Committed unit of work: {created} created, {updated} updated",
        )
