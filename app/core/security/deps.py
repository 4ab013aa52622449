from dataclasses import dataclass
from typing import Any, Dict

from fastapi import Header

from app.core.errors import Forbidden, Unauthenticated
from app.core.logger import logger
from app.core.security.jwt import verify_token


@dataclass(frozen=True)
class AuthContext:
    user_id: str
    email: str | None
    role: str


class AuthDeps:
    async def claims(self, authorization: str | None) -> Dict[str, Any]:
        if not authorization or not authorization.startswith("Bearer "):
            raise ValueError("token faltante")
        token = authorization.split(" ", 1)[1].strip()
        return verify_token(token)

    async def context(self, authorization: str | None) -> AuthContext:
        claims = await self.claims(authorization)
        return AuthContext(
            user_id=str(claims.get("userId") or claims["sub"]),
            email=claims.get("email"),
            role=str(claims.get("role") or "user"),
        )

    def require_role(self, *roles: str):
        want = set(roles)

        async def _check(authorization: str | None = Header(None)) -> AuthContext:
            ctx = await get_auth_context(authorization)
            if want and ctx.role not in want:
                logger.warning(
                    "[Auth] forbidden user=%s role=%s need=%s", ctx.user_id, ctx.role, sorted(want)
                )
                raise Forbidden()
            return ctx

        return _check


auth_deps = AuthDeps()


async def get_auth_context(authorization: str | None = Header(None)) -> AuthContext:
    """FastAPI dependency: bearer header -> AuthContext, 401 otherwise."""
    if not authorization:
        raise Unauthenticated("Authorization required")
    try:
        return await auth_deps.context(authorization)
    except ValueError as e:
        logger.warning("[Auth] verify_token failed: %s", e)
        raise Unauthenticated("Invalid or expired token")


require_admin = auth_deps.require_role("admin")
