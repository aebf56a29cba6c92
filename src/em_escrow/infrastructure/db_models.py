"""SQLAlchemy ORM model for the purchases table.

Used for schema creation in tests only — persistence.py uses raw text() SQL.
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.em_common.database import Base


class PurchaseORM(Base):
    __tablename__ = "purchases"

    product_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("products.id"),
        primary_key=True,
    )
    buyer: Mapped[str] = mapped_column(String(64), primary_key=True)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    canceled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reported: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
