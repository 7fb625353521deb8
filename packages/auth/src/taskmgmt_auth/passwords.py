"""Password hashing and policy.

Hashes are bcrypt with a per-password salt embedded in the hash string, so
nothing but the hash is ever stored.
"""

from __future__ import annotations

import bcrypt

MIN_PASSWORD_LENGTH = 8
BCRYPT_MAX_BYTES = 72


def check_password_policy(password: str) -> list[str]:
    """Return the policy rules `password` fails. Empty means acceptable."""
    problems = []
    if len(password) < MIN_PASSWORD_LENGTH:
        problems.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        problems.append(f"Password must be at most {BCRYPT_MAX_BYTES} bytes.")
    if not any(c.islower() for c in password):
        problems.append("Password must contain a lowercase letter.")
    if not any(c.isupper() for c in password):
        problems.append("Password must contain an uppercase letter.")
    if not any(c.isdigit() for c in password):
        problems.append("Password must contain a digit.")
    return problems


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password for storage."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("ascii")


def check_password(password: str, password_hash: str) -> bool:
    """Verify a password against its stored hash."""
    candidate = password.encode("utf-8")
    # bcrypt rejects inputs over its limit; such a password was never stored.
    matches = bcrypt.checkpw(candidate[:BCRYPT_MAX_BYTES], password_hash.encode("ascii"))
    return matches and len(candidate) <= BCRYPT_MAX_BYTES
