"""Shared fixtures: in-memory SQLite database, seeded currencies, API client.

SQLite has no NUMERIC type, so SQLAlchemy stores Numeric columns there as
floats and rounds them back to the column scale on read. API tests only use
amounts that survive that round trip; exact arithmetic on wider values
is covered in test_currency_engine.py.
"""
import os
from datetime import date

# Settings are cached on first import, so the environment must be set first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BOT_API_KEY", "")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from customs_fx.auth.jwt import create_access_token, get_password_hash
from customs_fx.database import Base, get_db
from customs_fx.engine.rates import RateResult
from customs_fx.main import app
from customs_fx.models import Currency, Role, User
from customs_fx.models.transaction import RateSource
from customs_fx.services.bot_client import get_rate_client

CURRENCIES = [
    ("THB", "ไทย : บาท", "THAILAND : BAHT", "฿"),
    ("USD", "สหรัฐอเมริกา : ดอลลาร์", "USA : US DOLLAR", "$"),
    ("EUR", "ยูโรโซน : ยูโร", "EUROZONE : EURO", "€"),
    ("JPY", "ญี่ปุ่น : เยน", "JAPAN : YEN", "¥"),
]


class FakeRateClient:
    """Stands in for the BOT client; rates keyed by (currency, iso date)."""

    def __init__(self) -> None:
        self.rates: dict[tuple[str, str], str] = {}
        self.calls: list[tuple[str, date]] = []

    async def fetch_rate(self, currency: str, on: date) -> RateResult | None:
        self.calls.append((currency, on))
        value = self.rates.get((currency, on.isoformat()))
        if value is None:
            return None
        return RateResult(currency_id=currency, period=on.isoformat(), buying_transfer=value, source=RateSource.BOT)


@pytest_asyncio.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as db:
        for code, name_th, name_en, symbol in CURRENCIES:
            db.add(Currency(code=code, name_th=name_th, name_en=name_en, symbol=symbol))
        await db.commit()
    yield maker
    await engine.dispose()


@pytest.fixture
def rate_client():
    return FakeRateClient()


@pytest_asyncio.fixture
async def client(session_maker, rate_client):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rate_client] = lambda: rate_client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def make_user(session_maker):
    """Create a user directly in the database; returns (user, auth headers)."""

    async def _make(email: str, role: Role = Role.USER, name: str = "Tester", password: str = "password123"):
        async with session_maker() as db:
            user = User(name=name, email=email, hashed_password=get_password_hash(password), role=role)
            db.add(user)
            await db.commit()
            await db.refresh(user)
        token = create_access_token(user.id, role.value)
        return user, {"Authorization": f"Bearer {token}"}

    return _make


@pytest_asyncio.fixture
async def alice(make_user):
    return await make_user("alice@example.com", name="Alice")


@pytest_asyncio.fixture
async def bob(make_user):
    return await make_user("bob@example.com", name="Bob")


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user("admin@example.com", role=Role.ADMIN, name="Admin")


def transaction_payload(**overrides) -> dict:
    payload = {
        "declaration_number": "A001-1234-5678",
        "declaration_date": "2025-01-15",
        "invoice_number": "INV-0001",
        "invoice_date": "2025-01-10",
        "currency_code": "USD",
        "foreign_amount": "100",
        "exchange_rate": "35.5",
        "rate_date": "2025-01-14",
        "rate_source": "BOT",
        "notes": None,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload():
    return transaction_payload
