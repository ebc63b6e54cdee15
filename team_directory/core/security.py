# team_directory/core/security.py
from typing import Optional

import bcrypt

from team_directory.core.config import settings

# bcrypt only reads the first 72 bytes; recent releases raise on longer input
MAX_PASSWORD_BYTES = 72


def _encode(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(plain_password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password with bcrypt using a fresh random salt.
    The salt and cost factor are embedded in the returned string.
    """
    if not plain_password:
        raise ValueError("Password is empty")
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(plain_password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
