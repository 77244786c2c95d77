from typing import Annotated

from fastapi import Depends, Request

from loginlog.core.config import settings
from loginlog.services.ingest import IngestService
from loginlog.services.record_store import LoginAttemptStore


def get_record_store(request: Request) -> LoginAttemptStore:
    """Return the store created during application startup."""
    return request.app.state.record_store


def get_ingest_service(
    store: Annotated[LoginAttemptStore, Depends(get_record_store)],
) -> IngestService:
    return IngestService(store, rounds=settings.BCRYPT_ROUNDS)
