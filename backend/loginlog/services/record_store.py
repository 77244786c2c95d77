"""
Record store for captured login attempts.

Append-only: records are inserted, listed newest first, and removed only by a
bulk purge. There is no update and no single-record delete.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from loginlog.core.exceptions import RecordValidationError, StoreUnavailableError
from loginlog.models.login_attempt import SENSITIVE_FIELDS, LoginAttempt

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50

SORT_ORDERS = ("desc", "asc")

# Driver connect failures surface as OSError rather than DBAPI errors
STORE_ERRORS = (SQLAlchemyError, OSError)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value == ""


class LoginAttemptStore:
    """
    Durable storage for LoginAttempt records.

    Constructed once per process from the session factory and handed to
    whatever needs it. Every operation runs in its own session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(
        self,
        email: str,
        password: str,
        hashed_password: str,
        *,
        timestamp: datetime | None = None,
        user_agent: str | None = None,
        ip: str | None = None,
        success: bool = True,
    ) -> LoginAttempt:
        """
        Persist a new record.

        Args:
            email: Submitted email, stored verbatim
            password: Submitted password, stored verbatim
            hashed_password: One-way hash of ``password``
            timestamp: Moment of the attempt, defaults to now
            user_agent: Client User-Agent header
            ip: Client address
            success: Submission accepted flag

        Returns:
            The stored LoginAttempt with ``id`` and ``timestamp`` populated

        Raises:
            RecordValidationError: A required field is missing or empty
            StoreUnavailableError: The database could not complete the insert
        """
        required = {"email": email, "password": password, "hashedPassword": hashed_password}
        missing = [name for name, value in required.items() if _is_blank(value)]
        if missing:
            raise RecordValidationError(missing)

        attempt = LoginAttempt(
            email=email,
            password=password,
            hashed_password=hashed_password,
            user_agent=user_agent,
            ip=ip,
            success=success,
        )
        if timestamp is not None:
            attempt.timestamp = timestamp

        async with self._session_factory() as session:
            try:
                session.add(attempt)
                await session.commit()
            except STORE_ERRORS as e:
                logger.error(f"Failed to insert login attempt: {e}")
                raise StoreUnavailableError(type(e).__name__) from e

        return attempt

    async def list(
        self,
        limit: int = DEFAULT_LIST_LIMIT,
        exclude_fields: Iterable[str] = SENSITIVE_FIELDS,
        order: str = "desc",
    ) -> list[dict[str, Any]]:
        """
        Return up to ``limit`` records ordered by timestamp.

        ``password`` and ``hashedPassword`` are always stripped, in addition
        to any field named in ``exclude_fields``.

        Raises:
            ValueError: ``limit`` is not a positive integer or ``order`` is unknown
            StoreUnavailableError: The database could not be queried
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError("limit must be a positive integer")
        if order not in SORT_ORDERS:
            raise ValueError(f"order must be one of {', '.join(SORT_ORDERS)}")

        excluded = SENSITIVE_FIELDS | set(exclude_fields)
        ordering = LoginAttempt.timestamp.desc() if order == "desc" else LoginAttempt.timestamp.asc()

        async with self._session_factory() as session:
            try:
                result = await session.execute(select(LoginAttempt).order_by(ordering).limit(limit))
                attempts = result.scalars().all()
            except STORE_ERRORS as e:
                logger.error(f"Failed to list login attempts: {e}")
                raise StoreUnavailableError(type(e).__name__) from e

        return [attempt.to_dict(exclude=excluded) for attempt in attempts]

    async def purge(self) -> int:
        """
        Delete every record in a single statement.

        Returns:
            Number of records removed (0 on an empty store)

        Raises:
            StoreUnavailableError: The database could not complete the delete
        """
        async with self._session_factory() as session:
            try:
                result = await session.execute(delete(LoginAttempt))
                await session.commit()
            except STORE_ERRORS as e:
                logger.error(f"Failed to purge login attempts: {e}")
                raise StoreUnavailableError(type(e).__name__) from e

        deleted = result.rowcount or 0
        logger.info(f"Purged {deleted} login attempts")
        return deleted

    async def count(self) -> int:
        async with self._session_factory() as session:
            try:
                result = await session.execute(select(func.count()).select_from(LoginAttempt))
            except STORE_ERRORS as e:
                raise StoreUnavailableError(type(e).__name__) from e
        return result.scalar() or 0

    async def ping(self) -> bool:
        """Check database connectivity."""
        async with self._session_factory() as session:
            try:
                await session.execute(text("SELECT 1"))
            except STORE_ERRORS as e:
                logger.error(f"Database health check failed: {e}")
                return False
        return True
