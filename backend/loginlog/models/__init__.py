from loginlog.models.login_attempt import LoginAttempt

__all__ = [
    "LoginAttempt",
]
