"""Custom exceptions for the login attempt store and ingest service."""


class LoginLogError(Exception):
    """Base class for domain errors."""


class RecordValidationError(LoginLogError):
    """Raised by the record store when a required field is missing or empty."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")


class StoreUnavailableError(LoginLogError):
    """Raised when the persistence medium cannot complete an operation."""

    def __init__(self, reason: str = "unknown"):
        self.reason = reason
        super().__init__(f"Store unavailable: {reason}")


class InvalidSubmissionError(LoginLogError):
    """Raised when a submission lacks an email or password."""

    def __init__(self, message: str = "Email and password are required"):
        self.message = message
        super().__init__(message)


class PersistenceFailureError(LoginLogError):
    """Raised when a valid submission could not be recorded."""

    def __init__(self, reason: str = "unknown"):
        self.reason = reason
        super().__init__(f"Persistence failure: {reason}")
