import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt as jose_jwt

from app.core.logger import logger
from app.core.settings import settings


def _secret() -> str:
    return settings.JWT_SECRET.get_secret_value()


def create_access_token(
    *,
    user_id: str,
    email: str,
    role: str = "user",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed session token carrying {sub/userId, email, role}.

    Args:
        user_id: Owner of the session.
        email: Email as stored at issue time.
        role: Role claim used by capability checks.
        expires_delta: Override for the configured lifetime.
    """
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRES_MINUTES))
    claims: Dict[str, Any] = {
        "sub": user_id,
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jose_jwt.encode(claims, _secret(), algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a session token.

    Raises:
        ValueError: malformed, expired, badly signed or missing subject.
    """
    if not token or token.count(".") != 2:
        raise ValueError("token malformado")
    try:
        claims = jose_jwt.decode(token, _secret(), algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise ValueError("token expirado")
    except JWTError as e:
        logger.debug("[JWT] decode failed: %s", e)
        raise ValueError("token invalido")

    exp = claims.get("exp")
    if isinstance(exp, (int, float)) and time.time() > float(exp):
        raise ValueError("token expirado")
    if not claims.get("sub"):
        raise ValueError("sub faltante")
    return claims
