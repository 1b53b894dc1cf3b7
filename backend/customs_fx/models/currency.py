"""Currency reference data."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from customs_fx.database import Base


class Currency(Base):
    """ISO currency with Thai and English display names. Seeded, read-only at runtime."""

    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(String(3), primary_key=True)
    name_th: Mapped[str] = mapped_column(String(100), nullable=False)
    name_en: Mapped[str] = mapped_column(String(100), nullable=False)
    symbol: Mapped[str] = mapped_column(String(8), nullable=False)
