"""Password hashing for gateway accounts.

Calls the ``bcrypt`` library (>=4.0) directly. passlib is not used; it is
unmaintained and breaks against bcrypt 4.
"""

import bcrypt


def hash_password(plain: str) -> str:
    """Hash an account password with a fresh salt; returns the utf-8 hash string."""
    hashed_bytes: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt())
    return hashed_bytes.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """True when plain matches the stored bcrypt hash."""
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
