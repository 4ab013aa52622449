import re
from functools import lru_cache
from dataclasses import dataclass, field
from typing import List

import bcrypt

from app.core.settings import settings

SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'
COMMON_PATTERNS = ("password", "123456", "qwerty", "abc123", "password123")

_SPECIAL_RE = re.compile(f"[{re.escape(SPECIAL_CHARS)}]")


@dataclass(frozen=True)
class PasswordStrength:
    is_valid: bool
    score: int
    feedback: List[str] = field(default_factory=list)


def score_password(password: str) -> PasswordStrength:
    """
    Score a password from 0 to 5.

    One point each for length >= 8, an uppercase letter, a lowercase letter,
    a digit and a special character; one point off when it contains a common
    pattern. Valid means score >= 4 and length >= 8.
    """
    feedback: List[str] = []
    score = 0

    if len(password) < 8:
        feedback.append("Password must be at least 8 characters long")
    else:
        score += 1

    if not re.search(r"[A-Z]", password):
        feedback.append("Add uppercase letters")
    else:
        score += 1

    if not re.search(r"[a-z]", password):
        feedback.append("Add lowercase letters")
    else:
        score += 1

    if not re.search(r"\d", password):
        feedback.append("Add numbers")
    else:
        score += 1

    if not _SPECIAL_RE.search(password):
        feedback.append("Add special characters")
    else:
        score += 1

    lowered = password.lower()
    if any(p in lowered for p in COMMON_PATTERNS):
        feedback.append("Avoid common password patterns")
        score -= 1

    return PasswordStrength(
        is_valid=score >= 4 and len(password) >= 8,
        score=max(0, min(5, score)),
        feedback=feedback or ["Strong password!"],
    )


# bcrypt solo usa los primeros 72 bytes
def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_secret(password), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_secret(password), hashed.encode("utf-8"))
    except ValueError:
        # hash malformado
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """Hash compared against when the email is unknown, so login cost does not reveal accounts."""
    return hash_password("dummy-password-for-timing")
