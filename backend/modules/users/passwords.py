"""
Password hashing and verification.

Uses bcrypt with automatic salting and a configurable work factor.
Hashing is CPU-bound, so the async variants push it onto a worker
thread and leave the event loop free for other requests.
"""

import asyncio
from functools import lru_cache
from typing import Optional

import bcrypt

from shared.config import get_settings

from .exceptions import PasswordTooLongError

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise PasswordTooLongError(MAX_PASSWORD_BYTES)
    return encoded


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plaintext password
        rounds: Work factor, defaults to the BCRYPT_ROUNDS setting

    Returns:
        The encoded bcrypt hash (salt included)

    Raises:
        PasswordTooLongError: If the password is longer than 72 bytes
    """
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (PasswordTooLongError, ValueError, TypeError):
        return False


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return bcrypt.hashpw(b"turnstile-dummy-password", bcrypt.gensalt(rounds=rounds)).decode()


def verify_dummy_password(password: str) -> bool:
    """
    Spend the same bcrypt work as a real verification, against nothing.

    Used when no account matched so a failed login takes the same time
    whether or not the username exists. Always returns False.
    """
    verify_password(password, _dummy_hash(get_settings().bcrypt_rounds))
    return False


async def hash_password_async(password: str) -> str:
    """Hash a password without blocking the event loop."""
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    """Verify a password without blocking the event loop."""
    return await asyncio.to_thread(verify_password, password, password_hash)


async def verify_dummy_password_async(password: str) -> bool:
    """Dummy verification without blocking the event loop."""
    return await asyncio.to_thread(verify_dummy_password, password)
