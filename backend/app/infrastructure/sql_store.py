"""SQL Store Base: one AsyncSession per store, all-or-nothing transaction() scope.

Invariants:
    - transaction() commits once on normal exit and rolls back on ANY exception
    - SQLAlchemy exceptions leave transaction() as DatabaseError (core/errors.py)
    - Store methods only flush; nothing is committed outside transaction()

Design Decisions:
    - Store bound to the request's AsyncSession (from get_db): routes and tests can share
      a session with the store without a second connection
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DatabaseError

logger = logging.getLogger(__name__)


class SqlStore:
    """Base for SQLAlchemy-backed stores."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[None, None]:
        """Atomic unit of work: commit on success, rollback on failure."""
        try:
            yield
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Transaction rolled back (integrity): {e}")
            raise DatabaseError("Integrity constraint violated", "commit") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Transaction rolled back: {e}")
            raise DatabaseError("Database operation failed", "transaction") from e
        except BaseException:
            await self.db.rollback()
            raise
