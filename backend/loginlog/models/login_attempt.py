"""
Captured login submissions.

One row per accepted submission. Rows are never updated; the table is only
ever cleared as a whole.

The plaintext password is stored next to its hash. That is the behaviour this
capture log exists to provide and it makes the table as sensitive as a
credential dump: restrict database access accordingly.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from loginlog.db.base import Base, UTCDateTime, UUIDMixin, utcnow

# Attribute name -> external (JSON) field name
EXTERNAL_FIELD_NAMES = {
    "id": "id",
    "email": "email",
    "password": "password",
    "hashed_password": "hashedPassword",
    "timestamp": "timestamp",
    "user_agent": "userAgent",
    "ip": "ip",
    "success": "success",
}

# Never returned by list queries
SENSITIVE_FIELDS = frozenset({"password", "hashedPassword"})


class LoginAttempt(Base, UUIDMixin):
    """A single captured credential submission."""

    __tablename__ = "login_attempts"

    email: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    hashed_password: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip: Mapped[str | None] = mapped_column(Text, nullable=True)
    success: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index("idx_login_attempts_timestamp_desc", timestamp.desc()),
    )

    def to_dict(self, exclude: frozenset[str] | set[str] = frozenset()) -> dict[str, Any]:
        """Serialize with external field names, dropping any name in ``exclude``."""
        return {
            external: getattr(self, attr)
            for attr, external in EXTERNAL_FIELD_NAMES.items()
            if external not in exclude
        }

    def __repr__(self) -> str:
        return f"<LoginAttempt {self.email} at {self.timestamp}>"
