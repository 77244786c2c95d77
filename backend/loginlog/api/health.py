"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from loginlog.api.deps import get_record_store
from loginlog.core.config import APP_VERSION
from loginlog.services.record_store import LoginAttemptStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(store: Annotated[LoginAttemptStore, Depends(get_record_store)]):
    """Health check endpoint for container orchestration.

    Returns 200 when the database answers, 503 otherwise.
    """
    database_ok = await store.ping()
    checks = {
        "status": "healthy" if database_ok else "unhealthy",
        "database": database_ok,
        "version": APP_VERSION,
    }
    return JSONResponse(content=checks, status_code=200 if database_ok else 503)
