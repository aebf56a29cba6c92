"""SQLAlchemy ORM model for the fee_treasury singleton table.

Used for schema creation in tests only — fee_collector.py uses raw text() SQL.
"""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from src.em_common.database import Base


class FeeTreasuryORM(Base):
    __tablename__ = "fee_treasury"
    __table_args__ = (
        CheckConstraint("id = 1", name="ck_fee_treasury_singleton"),
        CheckConstraint("accrued >= 0", name="ck_fee_treasury_accrued_gte_0"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    accrued: Mapped[int] = mapped_column(BigInteger, nullable=False, server_default="0")
    total_accrued: Mapped[int] = mapped_column(BigInteger, nullable=False, server_default="0")
    total_withdrawn: Mapped[int] = mapped_column(BigInteger, nullable=False, server_default="0")
    updated_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
