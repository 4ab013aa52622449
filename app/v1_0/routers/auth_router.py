from fastapi import APIRouter, HTTPException, Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger
from app.core.security.deps import AuthContext, get_auth_context
from app.core.security._auth_helpers import ensure_current_user

from app.v1_0.schemas import (
    SignupIn,
    LoginIn,
    ForgotPasswordIn,
    ResetPasswordIn,
    ProfileUpdateIn,
)
from app.v1_0.entities import AuthDTO, SignupDTO, MeDTO, ProfileDTO, MessageDTO
from app.v1_0.services import AuthService, PasswordResetService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=SignupDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
@inject
async def signup(
    request: SignupIn,
    db: AsyncSession = Depends(get_db),
    auth_service: AuthService = Depends(
        Provide[ApplicationContainer.api_container.auth_service]
    ),
) -> SignupDTO:
    logger.info("[AuthRouter] signup email=%s", request.email)
    try:
        return await auth_service.signup(db, request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[AuthRouter] signup error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/login",
    response_model=AuthDTO,
    summary="Login with email and password",
)
@inject
async def login(
    request: LoginIn,
    db: AsyncSession = Depends(get_db),
    auth_service: AuthService = Depends(
        Provide[ApplicationContainer.api_container.auth_service]
    ),
) -> AuthDTO:
    logger.info("[AuthRouter] login email=%s", request.email)
    try:
        return await auth_service.login(db, request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[AuthRouter] login error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/me",
    response_model=MeDTO,
    summary="Current user profile",
)
@inject
async def me(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
    auth_service: AuthService = Depends(
        Provide[ApplicationContainer.api_container.auth_service]
    ),
) -> MeDTO:
    try:
        user = await ensure_current_user(db, authorization, auth_service)
        return MeDTO(user=user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[AuthRouter] me error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put(
    "/profile",
    response_model=ProfileDTO,
    summary="Update name and risk appetite",
)
@inject
async def update_profile(
    request: ProfileUpdateIn,
    db: AsyncSession = Depends(get_db),
    auth_ctx: AuthContext = Depends(get_auth_context),
    auth_service: AuthService = Depends(
        Provide[ApplicationContainer.api_container.auth_service]
    ),
) -> ProfileDTO:
    logger.info("[AuthRouter] update_profile user=%s", auth_ctx.user_id)
    try:
        return await auth_service.update_profile(db, user_id=auth_ctx.user_id, payload=request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[AuthRouter] update_profile error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/forgot-password",
    response_model=MessageDTO,
    summary="Send a 6-digit reset code by email",
)
@inject
async def forgot_password(
    request: ForgotPasswordIn,
    db: AsyncSession = Depends(get_db),
    reset_service: PasswordResetService = Depends(
        Provide[ApplicationContainer.api_container.password_reset_service]
    ),
) -> MessageDTO:
    logger.info("[AuthRouter] forgot_password email=%s", request.email)
    try:
        return await reset_service.forgot_password(db, email=request.email)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[AuthRouter] forgot_password error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/reset-password",
    response_model=MessageDTO,
    summary="Reset password with an emailed code",
)
@inject
async def reset_password(
    request: ResetPasswordIn,
    db: AsyncSession = Depends(get_db),
    reset_service: PasswordResetService = Depends(
        Provide[ApplicationContainer.api_container.password_reset_service]
    ),
) -> MessageDTO:
    logger.info("[AuthRouter] reset_password email=%s", request.email)
    try:
        return await reset_service.reset_password(db, request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[AuthRouter] reset_password error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
