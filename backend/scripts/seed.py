"""Seed currencies and the initial admin user."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from customs_fx.auth.jwt import get_password_hash
from customs_fx.database import async_session_maker, init_db
from customs_fx.logging_config import setup_logging
from customs_fx.models.currency import Currency
from customs_fx.models.user import Role, User

CURRENCIES = [
    ("CNY", "จีน : หยวน เรนมินบิ", "CHINA : YUAN RENMINBI", "¥"),
    ("USD", "สหรัฐอเมริกา : ดอลลาร์", "USA : US DOLLAR", "$"),
    ("THB", "ไทย : บาท", "THAILAND : BAHT", "฿"),
    ("EUR", "ยูโรโซน : ยูโร", "EUROZONE : EURO", "€"),
    ("JPY", "ญี่ปุ่น : เยน", "JAPAN : YEN", "¥"),
    ("GBP", "อังกฤษ : ปอนด์", "GREAT BRITAIN : POUND", "£"),
    ("KRW", "เกาหลีใต้ : วอน", "SOUTH KOREA : WON", "₩"),
]

ADMIN_EMAIL = "admin@currency.local"
ADMIN_PASSWORD = "admin1234"

logger = setup_logging()


async def seed_currencies(db: AsyncSession) -> None:
    for code, name_th, name_en, symbol in CURRENCIES:
        currency = await db.get(Currency, code)
        if currency is None:
            db.add(Currency(code=code, name_th=name_th, name_en=name_en, symbol=symbol))
        else:
            currency.name_th = name_th
            currency.name_en = name_en
            currency.symbol = symbol
    await db.commit()


async def seed_admin(db: AsyncSession) -> bool:
    r = await db.execute(select(User).where(User.email == ADMIN_EMAIL))
    if r.scalar_one_or_none():
        return False
    db.add(User(
        name="Admin",
        email=ADMIN_EMAIL,
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role=Role.ADMIN,
    ))
    await db.commit()
    return True


async def seed():
    await init_db()
    async with async_session_maker() as db:
        await seed_currencies(db)
        logger.info("Seeded %d currencies", len(CURRENCIES))
        if await seed_admin(db):
            logger.info("Seeded admin user (%s / %s)", ADMIN_EMAIL, ADMIN_PASSWORD)
        else:
            logger.info("Admin user already exists")


if __name__ == "__main__":
    asyncio.run(seed())
