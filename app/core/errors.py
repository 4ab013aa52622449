"""
Domain errors for the investment API.

Every error is an ``HTTPException`` so services can raise it directly and the
routers' ``except HTTPException: raise`` blocks let it through untouched.
``register_error_handlers`` renders all of them as ``{"error": ...}`` bodies.
"""
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logger import logger


class Unauthenticated(HTTPException):
    def __init__(self, message: str = "Authorization required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)


class InvalidCredentials(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )


class InvalidOrExpiredCode(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired reset code",
        )


class WeakPassword(HTTPException):
    def __init__(self, feedback: List[str], score: int) -> None:
        self.feedback = list(feedback)
        self.score = score
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Password does not meet requirements",
                "feedback": self.feedback,
                "score": score,
            },
        )


class DuplicateEmail(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )


class UserNotFound(HTTPException):
    def __init__(self, message: str = "User not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


class ProductNotFound(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")


class BelowMinimum(HTTPException):
    def __init__(self, minimum: Decimal) -> None:
        self.minimum = minimum
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Minimum investment amount is ₹{minimum}",
        )


class AboveMaximum(HTTPException):
    def __init__(self, maximum: Decimal) -> None:
        self.maximum = maximum
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Maximum investment amount is ₹{maximum}",
        )


class NotificationFailed(HTTPException):
    def __init__(self, message: str = "Failed to send password reset email") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _remember(request: Request, message: Any) -> None:
    # lo lee el middleware de transaction logs
    request.state.error_message = str(message)


def _body(detail: Any) -> Dict[str, Any]:
    if isinstance(detail, dict):
        return detail
    return {"error": str(detail) if detail is not None else "Error"}


def _field_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for e in errors:
        loc = [str(p) for p in e.get("loc", ()) if p != "body"]
        out.append({"field": ".".join(loc), "message": e.get("msg", "invalid value")})
    return out


def register_error_handlers(app: FastAPI) -> None:
    """Render domain errors, request validation errors and crashes uniformly."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        body = _body(exc.detail)
        _remember(request, body.get("error"))
        return JSONResponse(
            status_code=exc.status_code,
            content=body,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = _field_errors(exc.errors())
        _remember(request, "Validation error")
        logger.warning("[Errors] request validation failed: %s", details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "details": details},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        _remember(request, "Internal server error")
        logger.error("[Errors] unhandled %s: %s", type(exc).__name__, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
