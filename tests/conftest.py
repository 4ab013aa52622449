"""
Shared fixtures: in-memory SQLite per test, a recording notification sink
and an httpx client bound to a freshly built app.
"""
import os

# settings se construye al importar app.*
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "test"
os.environ["RESEND_API_KEY"] = ""

from decimal import Decimal
from typing import Any, List, Optional, Tuple

import httpx
import pytest
from dependency_injector import providers
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.security.jwt import create_access_token
from app.main import create_app
from app.storage.database.db_connector import get_db
from app.v1_0.models import Base, InvestmentProduct, User
from app.core.security.passwords import hash_password

STRONG_PASSWORD = "Str0ng!Pass"


class RecordingNotifier:
    """Stands in for NotificationService; records instead of mailing."""

    def __init__(self) -> None:
        self.reset_codes: List[Tuple[str, str]] = []
        self.welcomes: List[str] = []
        self.fail_reset = False

    async def send_reset_code(self, email: str, code: str, user_name: Optional[str] = None) -> bool:
        self.reset_codes.append((email, code))
        return not self.fail_reset

    def schedule_welcome(self, email: str, user_name: str) -> None:
        self.welcomes.append(email)

    def last_code(self, email: str) -> str:
        return [c for e, c in self.reset_codes if e == email][-1]


@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def app(session_factory, notifier):
    application = create_app()
    container = application.state.container
    container.db_session.override(providers.Object(session_factory))
    container.api_container.notification_service.override(providers.Object(notifier))

    async def _get_db():
        async with session_factory() as s:
            yield s

    application.dependency_overrides[get_db] = _get_db
    yield application
    container.api_container.notification_service.reset_override()
    container.db_session.reset_override()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict:
    token = create_access_token(user_id="00000000-0000-0000-0000-00000000a0a0", email="admin@grip.test", role="admin")
    return bearer(token)


async def signup(client: httpx.AsyncClient, email: str = "asha@example.com", **extra: Any) -> httpx.Response:
    body = {"firstName": "Asha", "lastName": "Rao", "email": email, "password": STRONG_PASSWORD}
    body.update(extra)
    return await client.post("/api/auth/signup", json=body)


async def make_user(db: AsyncSession, email: str = "ravi@example.com", **fields: Any) -> User:
    u = User(
        first_name=fields.pop("first_name", "Ravi"),
        email=email,
        password_hash=hash_password(fields.pop("password", STRONG_PASSWORD)),
        **fields,
    )
    db.add(u)
    await db.commit()
    return u


async def make_product(db: AsyncSession, **fields: Any) -> InvestmentProduct:
    data = {
        "name": "Premium Bond Series A",
        "investment_type": "bond",
        "tenure_months": 24,
        "annual_yield": Decimal("8.50"),
        "risk_level": "low",
        "min_investment": Decimal("1000.00"),
        "max_investment": None,
    }
    data.update(fields)
    p = InvestmentProduct(**data)
    db.add(p)
    await db.commit()
    return p
