from loginlog.schemas.login_attempt import (
    LoginAcknowledgement,
    LoginAttemptEntry,
    LoginAttemptListResponse,
    LoginAttemptPurgeResponse,
    LoginResponse,
)

__all__ = [
    "LoginAcknowledgement",
    "LoginAttemptEntry",
    "LoginAttemptListResponse",
    "LoginAttemptPurgeResponse",
    "LoginResponse",
]
