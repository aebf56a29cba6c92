"""SQLAlchemy ORM model for the products table.

Used for schema creation in tests only — persistence.py uses raw text() SQL.
Alembic migration 002_create_products_and_purchases.py is the authoritative DDL source.
"""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.em_common.database import Base


class ProductORM(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_gt_0"),
        CheckConstraint("inventory >= 0", name="ck_products_inventory_gte_0"),
        CheckConstraint("total_sold >= 0", name="ck_products_total_sold_gte_0"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    seller: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    seller_name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    inventory: Mapped[int] = mapped_column(Integer, nullable=False)
    total_sold: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    initial_inventory: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
