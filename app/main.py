from contextlib import asynccontextmanager
from inspect import isawaitable
from typing import cast

from fastapi import FastAPI, APIRouter, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import settings
from app.core.logger import logger
from app.core.errors import register_error_handlers
from app.core.security.jwt import verify_token
from app.v1_0.v1_router import v1_router
from app.app_containers import ApplicationContainer
from app.storage.database import create_schema, dispose_engine
API_PREFIX = settings.API_PREFIX or ""

# no se registran llamadas a docs/health
_UNLOGGED = ("/docs", "/redoc", "/openapi.json", "/health")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = cast(ApplicationContainer, app.state.container)
    ret = container.init_resources()
    if isawaitable(ret):
        await ret
    if settings.DB_CREATE_ALL:
        await create_schema()
    logger.info(f"{settings.APP_NAME} starting in {settings.APP_ENV}")
    try:
        yield
    finally:
        logger.info(f"{settings.APP_NAME} shutdown")
        shut = getattr(container, "shutdown_resources", None)
        if callable(shut):
            r = shut()
            if isawaitable(r):
                await r
        await dispose_engine()


def _identity(authorization: str | None) -> tuple[str | None, str | None]:
    if not authorization or not authorization.startswith("Bearer "):
        return None, None
    try:
        claims = verify_token(authorization.split(" ", 1)[1].strip())
    except ValueError:
        return None, None
    return str(claims.get("userId") or claims.get("sub")), claims.get("email")


def _should_log(path: str) -> bool:
    if not path.startswith(API_PREFIX):
        return False
    rest = path[len(API_PREFIX):]
    return not any(rest.startswith(p) for p in _UNLOGGED)


def create_app() -> FastAPI:
    container = ApplicationContainer()
    container.wire()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        openapi_url=f"{API_PREFIX}/openapi.json",
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        lifespan=lifespan,
    )

    app.state.container = container
    register_error_handlers(app)

    @app.middleware("http")
    async def transaction_log(request: Request, call_next):
        """Records each API call outcome; never alters the response."""
        if not _should_log(request.url.path):
            return await call_next(request)

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception:
            # el handler de 500 corre despues de este middleware
            request.state.error_message = "Internal server error"
            raise
        finally:
            user_id, email = _identity(request.headers.get("authorization"))
            error = getattr(request.state, "error_message", None) if status_code >= 400 else None
            session_factory = container.db_session()
            service = container.api_container.transaction_log_service()
            async with session_factory() as db:
                await service.record(
                    db,
                    endpoint=request.url.path,
                    http_method=request.method,
                    status_code=status_code,
                    user_id=user_id,
                    email=email,
                    error_message=error,
                )

    origins = settings.CORS_ORIGINS_LIST
    allow_credentials = True

    if "*" in origins:
        # wildcard + credenciales no legal en CORS
        allow_credentials = False

    logger.info("CORS origins=%s allow_credentials=%s", origins, allow_credentials)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    base_router = APIRouter(prefix=API_PREFIX)
    base_router.include_router(v1_router)

    @base_router.get("/", tags=["health"])
    async def ready():
        return {
            "message": "ready",
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "env": settings.APP_ENV,
            "prefix": API_PREFIX,
        }

    app.include_router(base_router)

    return app


app = create_app()
