from typing import Optional, Dict, Any, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import Unauthenticated
from app.core.logger import logger
from app.core.security.deps import auth_deps

if TYPE_CHECKING:
    from app.v1_0.entities import UserDTO
    from app.v1_0.services import AuthService


async def require_claims(authorization: Optional[str]) -> Dict[str, Any]:
    if not authorization:
        raise Unauthenticated("Authorization header missing or invalid")
    if not authorization.startswith("Bearer "):
        raise Unauthenticated("Authorization header missing or invalid")
    try:
        return await auth_deps.claims(authorization)
    except ValueError as e:
        logger.warning(f"[Auth] verify_token failed: {e}")
        raise Unauthenticated("Invalid or expired token")


async def ensure_current_user(
    db: AsyncSession,
    authorization: Optional[str],
    auth_service: "AuthService",
) -> "UserDTO":
    claims = await require_claims(authorization)
    user_id = claims.get("userId") or claims.get("sub")
    if not user_id:
        raise Unauthenticated("Invalid or expired token")
    return await auth_service.me(db, user_id=str(user_id))
