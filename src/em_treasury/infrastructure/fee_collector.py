"""Fee accrual and withdrawal bookkeeping on the fee_treasury singleton row.

The row (id = 1) is created lazily by the first accrual. Both statements
are relative updates, so an accrual committed between a withdrawal's read
and its write is kept.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.errors import InternalError
from src.em_treasury.domain.models import FeeTreasury

TREASURY_ROW_ID = 1

_ACCRUE_SQL = text("""
    INSERT INTO fee_treasury (id, accrued, total_accrued, total_withdrawn)
    VALUES (:id, :amount, :amount, 0)
    ON CONFLICT (id) DO UPDATE
    SET accrued       = fee_treasury.accrued + excluded.accrued,
        total_accrued = fee_treasury.total_accrued + excluded.total_accrued,
        updated_at    = CURRENT_TIMESTAMP
""")

_GET_SQL = text(
    "SELECT accrued, total_accrued, total_withdrawn FROM fee_treasury WHERE id = :id"
)

_WITHDRAW_SQL = text("""
    UPDATE fee_treasury
    SET accrued         = accrued - :amount,
        total_withdrawn = total_withdrawn + :amount,
        updated_at      = CURRENT_TIMESTAMP
    WHERE id = :id AND accrued >= :amount
    RETURNING accrued
""")


async def accrue_fee(db: AsyncSession, amount: int, reference: str) -> None:
    """Add amount to accrued and total_accrued. Zero amounts are skipped."""
    if amount < 0:
        raise InternalError(f"Negative fee accrual {amount} for {reference}")
    if amount == 0:
        return
    await db.execute(_ACCRUE_SQL, {"id": TREASURY_ROW_ID, "amount": amount})


async def get_treasury(db: AsyncSession) -> FeeTreasury:
    row = (await db.execute(_GET_SQL, {"id": TREASURY_ROW_ID})).fetchone()
    if row is None:
        return FeeTreasury()
    return FeeTreasury(
        accrued=row.accrued,
        total_accrued=row.total_accrued,
        total_withdrawn=row.total_withdrawn,
    )


async def record_withdrawal(db: AsyncSession, amount: int) -> None:
    if amount == 0:
        return
    row = (await db.execute(_WITHDRAW_SQL, {"id": TREASURY_ROW_ID, "amount": amount})).fetchone()
    if row is None:
        raise InternalError(f"Fee treasury holds less than {amount}")
