"""
PartCat Backend — Password Hashing
====================================

What:  Hash and verify account secrets with bcrypt.
Why:   The users table stores a salted hash, never the secret itself.
How:   bcrypt.hashpw with a per-hash random salt; the cost factor comes from
       settings.bcrypt_rounds so tests can run with the minimum (4).

Both functions are CPU-bound by design of bcrypt. Async callers run them
through starlette's run_in_threadpool so the event loop keeps serving.
"""

from functools import lru_cache

import bcrypt

from partcat.config import settings

# bcrypt only reads this many bytes; recent releases reject longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Return a bcrypt hash (utf-8 text) of `password`."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Check `password` against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch rather than an error.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """Hash compared against when the email is unknown, so every failure costs one bcrypt check."""
    return hash_password("partcat-placeholder-secret")
