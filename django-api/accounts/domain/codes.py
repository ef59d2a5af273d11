"""Generation and hashing of one-time sign-in codes.

Only the SHA-256 hex digest of a code is ever stored.
"""

import hashlib
import hmac
import secrets

CODE_LENGTH = 6


def generate_code() -> str:
    """Return a uniformly random 6-digit decimal code."""
    return f"{secrets.randbelow(10**CODE_LENGTH):0{CODE_LENGTH}d}"


def hash_code(code: str) -> str:
    return hashlib.sha256(code.encode("utf-8")).hexdigest()


def code_matches(stored_hash: str, submitted_code: str) -> bool:
    """Constant-time comparison of a submitted code against a stored hash."""
    return hmac.compare_digest(stored_hash, hash_code(submitted_code))
