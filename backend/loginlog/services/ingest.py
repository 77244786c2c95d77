"""
Ingest service.

Turns a submitted email/password pair into a stored LoginAttempt and an
acknowledgement. No credential check happens here: every well-formed
submission is recorded with ``success=True``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import Request

from loginlog.core.config import settings
from loginlog.core.exceptions import (
    InvalidSubmissionError,
    PersistenceFailureError,
    RecordValidationError,
    StoreUnavailableError,
)
from loginlog.core.security import hash_password_async
from loginlog.services.record_store import LoginAttemptStore
from loginlog.utils.request import get_client_ip, get_user_agent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientContext:
    """Best-effort metadata about the submitting client."""

    user_agent: str | None = None
    ip: str | None = None

    @classmethod
    def from_request(cls, request: Request, trust_proxy_headers: bool | None = None) -> "ClientContext":
        if trust_proxy_headers is None:
            trust_proxy_headers = settings.TRUST_PROXY_HEADERS
        return cls(
            user_agent=get_user_agent(request),
            ip=get_client_ip(request, trust_proxy_headers=trust_proxy_headers),
        )


@dataclass(frozen=True)
class Acknowledgement:
    """What the caller gets back for an accepted submission."""

    email: str
    timestamp: datetime
    id: UUID

    def to_dict(self) -> dict[str, Any]:
        return {"email": self.email, "timestamp": self.timestamp, "id": self.id}


def _present(value: Any) -> bool:
    return isinstance(value, str) and value != ""


class IngestService:
    """Validates, enriches, and records login submissions."""

    def __init__(self, store: LoginAttemptStore, rounds: int | None = None):
        self.store = store
        self.rounds = rounds or settings.BCRYPT_ROUNDS

    async def submit(
        self,
        email: Any,
        password: Any,
        client_context: ClientContext | None = None,
    ) -> Acknowledgement:
        """
        Record a submission.

        Args:
            email: Submitted email
            password: Submitted password
            client_context: User agent and IP of the submitter

        Returns:
            Acknowledgement with the stored record's email, timestamp and id

        Raises:
            InvalidSubmissionError: email or password missing or empty
            PersistenceFailureError: the record could not be stored
        """
        if not _present(email) or not _present(password):
            raise InvalidSubmissionError()

        context = client_context or ClientContext()

        try:
            hashed_password = await hash_password_async(password, self.rounds)
        except Exception as e:
            logger.exception("Password hashing failed")
            raise PersistenceFailureError("hashing failed") from e

        try:
            attempt = await self.store.insert(
                email=email,
                password=password,
                hashed_password=hashed_password,
                user_agent=context.user_agent,
                ip=context.ip,
                success=True,
            )
        except RecordValidationError as e:
            raise InvalidSubmissionError() from e
        except StoreUnavailableError as e:
            logger.error(f"Login attempt not saved: {e.reason}")
            raise PersistenceFailureError(e.reason) from e
        except Exception as e:
            logger.exception("Unexpected error while saving login attempt")
            raise PersistenceFailureError(type(e).__name__) from e

        logger.info(
            "New login attempt saved",
            extra={"email": attempt.email, "timestamp": attempt.timestamp.isoformat(), "ip": attempt.ip},
        )

        return Acknowledgement(email=attempt.email, timestamp=attempt.timestamp, id=attempt.id)
