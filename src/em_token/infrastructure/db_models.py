"""SQLAlchemy ORM models for the token ledger tables.

Used for schema creation in tests only — sql_token.py uses raw text() SQL.
Alembic migration 003_create_token_ledger.py is the authoritative DDL source.
"""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.em_common.database import Base


class TokenBalanceORM(Base):
    __tablename__ = "token_balances"
    __table_args__ = (CheckConstraint("balance >= 0", name="ck_token_balances_gte_0"),)

    holder: Mapped[str] = mapped_column(String(64), primary_key=True)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class TokenAllowanceORM(Base):
    __tablename__ = "token_allowances"
    __table_args__ = (CheckConstraint("amount >= 0", name="ck_token_allowances_gte_0"),)

    owner: Mapped[str] = mapped_column(String(64), primary_key=True)
    spender: Mapped[str] = mapped_column(String(64), primary_key=True)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class TokenLedgerEntryORM(Base):
    __tablename__ = "token_ledger_entries"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    holder: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    entry_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    balance_after: Mapped[int] = mapped_column(BigInteger, nullable=False)
    counterparty: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())
