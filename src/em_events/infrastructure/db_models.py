"""SQLAlchemy ORM model for the escrow_events outbox.

Used for schema creation in tests only — outbox.py uses raw text() SQL.
Alembic migration 004_create_escrow_events.py is the authoritative DDL source.
"""

from datetime import datetime

from sqlalchemy import BigInteger, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.em_common.database import Base


class EscrowEventORM(Base):
    __tablename__ = "escrow_events"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    event_type: Mapped[str] = mapped_column(String(40), nullable=False)
    subject: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
