from collections.abc import AsyncGenerator
from typing import Any, Dict
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from app.core.settings import settings


def build_engine(raw: str) -> AsyncEngine:
    u = make_url(raw)

    if u.get_backend_name() != "postgresql":
        # sqlite+aiosqlite (local/tests) u otro driver async ya completo
        return create_async_engine(raw, echo=bool(getattr(settings, "DEBUG", False)))

    # URL limpio sin query y con driver asyncpg
    clean_url: URL = URL.create(
        drivername="postgresql+asyncpg",
        username=u.username,
        password=u.password,
        host=u.host,
        port=u.port,
        database=u.database,
    )
    connect_args: Dict[str, Any] = {"statement_cache_size": 0}
    if u.query.get("sslmode") in ("require", "verify-ca", "verify-full"):
        connect_args["ssl"] = True

    return create_async_engine(
        clean_url.render_as_string(hide_password=False),
        echo=bool(getattr(settings, "DEBUG", False)),
        poolclass=NullPool,
        pool_pre_ping=True,
        execution_options={"isolation_level": "READ COMMITTED"},
        connect_args=connect_args,
    )


engine = build_engine(settings.DATABASE_URL.get_secret_value())

async_session = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    session: AsyncSession = async_session()
    try:
        yield session
    finally:
        await session.close()

async def dispose_engine() -> None:
    await engine.dispose()

async def create_schema() -> None:
    """Crea tablas faltantes (dev/local); en prod el esquema va por migraciones."""
    from app.v1_0.models import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
