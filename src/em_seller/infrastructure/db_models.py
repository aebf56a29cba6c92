"""SQLAlchemy ORM models for the seller registry tables.

Used for schema creation in tests only — persistence.py uses raw text() SQL.
Alembic migration 001_create_sellers.py is the authoritative DDL source.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.em_common.database import Base


class SellerORM(Base):
    __tablename__ = "sellers"
    __table_args__ = (
        CheckConstraint("confirmed_purchases >= 0", name="ck_sellers_confirmed_gte_0"),
        CheckConstraint("canceled_purchases >= 0", name="ck_sellers_canceled_gte_0"),
        CheckConstraint("reported_purchases >= 0", name="ck_sellers_reported_gte_0"),
        CheckConstraint("rating <= confirmed_purchases", name="ck_sellers_rating_lte_confirmed"),
    )

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    profile_uri: Mapped[str] = mapped_column(Text, nullable=False)
    confirmed_purchases: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    canceled_purchases: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    reported_purchases: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    rating: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())


class SellerContactORM(Base):
    __tablename__ = "seller_contacts"

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)


class BlockedSellerORM(Base):
    __tablename__ = "blocked_sellers"

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    blocked_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
