"""
TravelMap Backend - Service Base Class
=======================================

What:  Statement execution shared by every resource service.
How:   `_fetch_all()` executes one row-returning statement (SELECT, or a
       mutation with RETURNING) and materialises the rows; `_execute()` runs a
       mutation whose result is not needed. Both convert SQLAlchemy failures
       into DatabaseError carrying the driver's message.

Every endpoint issues exactly one statement, so each mutation is its own
single-statement transaction; rollback and connection release are handled by
`Database.session()` around the whole request.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from app.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def driver_message(exc: SQLAlchemyError) -> str:
    """The database server's own error text, without SQLAlchemy's statement dump."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class BaseService:
    """
    Parent of TravelPointService, TravelRouteService and TeamMemberService.

    Services are stateless; the session is passed into every call.
    """

    def _database_error(self, exc: SQLAlchemyError, operation: str) -> DatabaseError:
        message = driver_message(exc)
        logger.error("Database error during %s: %s", operation, message)
        return DatabaseError(
            message=message,
            context={"operation": operation, "error_type": type(exc).__name__},
        )

    async def _fetch_all(
        self,
        db: AsyncSession,
        statement: Executable,
        operation: str,
        commit: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Execute `statement` and return its rows as plain dicts.

        Args:
            db:         Request-scoped async session
            statement:  SELECT, or INSERT/UPDATE with RETURNING
            operation:  Name used in logs and error context
            commit:     Commit after reading the rows (mutations)

        Raises:
            DatabaseError: carrying the driver's message verbatim
        """
        try:
            result = await db.execute(statement)
            rows = [dict(row) for row in result.mappings().all()]
            if commit:
                await db.commit()
            return rows
        except SQLAlchemyError as e:
            raise self._database_error(e, operation)

    async def _execute(self, db: AsyncSession, statement: Executable, operation: str) -> None:
        """Execute and commit a mutation without RETURNING."""
        try:
            await db.execute(statement)
            await db.commit()
        except SQLAlchemyError as e:
            raise self._database_error(e, operation)
