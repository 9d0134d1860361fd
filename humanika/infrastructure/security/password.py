"""Password hashing with bcrypt.

Passwords are SHA-256 digested (base64) before bcrypt so inputs longer than
bcrypt's 72-byte limit are not truncated.
"""

import base64
import hashlib

import bcrypt


def _digest(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Return the bcrypt hash (utf-8 string) for password."""
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Return True if password matches hashed_password; False for malformed hashes."""
    try:
        return bool(bcrypt.checkpw(_digest(password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False
