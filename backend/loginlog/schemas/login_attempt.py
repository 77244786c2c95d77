"""
Schemas for the login capture API.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LoginAcknowledgement(BaseModel):
    """Returned for an accepted submission. Never carries the password or its hash."""

    email: str
    timestamp: datetime
    id: UUID


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    data: LoginAcknowledgement


class LoginAttemptEntry(BaseModel):
    """Single stored attempt as exposed by the list endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    email: str
    timestamp: datetime
    user_agent: str | None = Field(default=None, alias="userAgent")
    ip: str | None = None
    success: bool


class LoginAttemptListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[LoginAttemptEntry]


class LoginAttemptPurgeResponse(BaseModel):
    success: bool = True
    message: str
