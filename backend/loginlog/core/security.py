"""
Password hashing.

Submitted passwords are hashed with bcrypt at a configurable cost factor.
"""

import asyncio

from passlib.hash import bcrypt

from loginlog.core.config import settings


def get_password_hash(password: str, rounds: int | None = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plaintext password
        rounds: bcrypt cost factor, defaults to BCRYPT_ROUNDS

    Returns:
        Salted bcrypt hash ("$2b$<cost>$...")
    """
    return bcrypt.using(rounds=rounds or settings.BCRYPT_ROUNDS).hash(password)


async def hash_password_async(password: str, rounds: int | None = None) -> str:
    """Hash a password in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(get_password_hash, password, rounds)


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.verify(password, hashed)


def get_hash_rounds(hashed: str) -> int:
    """Return the cost factor encoded in a bcrypt hash."""
    return bcrypt.from_string(hashed).rounds
