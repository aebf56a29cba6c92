"""PurchaseRepository — concrete implementation of PurchaseRepositoryProtocol.

Every state transition is a conditional UPDATE ... RETURNING guarded by the
state it leaves. Zero rows returned means the caller's earlier check raced
with another writer and is reported as InternalError.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.errors import InternalError
from src.em_escrow.domain.models import Purchase

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_PURCHASE_COLUMNS = "product_id, buyer, is_paid, is_sold, canceled, reported"

_GET_SQL = text(f"""
    SELECT {_PURCHASE_COLUMNS} FROM purchases
    WHERE product_id = :product_id AND buyer = :buyer
""")

# First purchase inserts the pair; a repurchase after cancel flips is_paid back.
_MARK_PAID_SQL = text(f"""
    INSERT INTO purchases (product_id, buyer, is_paid, is_sold, canceled, reported)
    VALUES (:product_id, :buyer, TRUE, FALSE, FALSE, FALSE)
    ON CONFLICT (product_id, buyer) DO UPDATE
    SET is_paid = TRUE, is_sold = FALSE, updated_at = CURRENT_TIMESTAMP
    WHERE purchases.is_paid = FALSE
    RETURNING {_PURCHASE_COLUMNS}
""")

_MARK_SOLD_SQL = text(f"""
    UPDATE purchases
    SET is_sold = TRUE, updated_at = CURRENT_TIMESTAMP
    WHERE product_id = :product_id AND buyer = :buyer
      AND is_paid = TRUE AND is_sold = FALSE
    RETURNING {_PURCHASE_COLUMNS}
""")

_MARK_CANCELED_SQL = text(f"""
    UPDATE purchases
    SET is_paid = FALSE, canceled = TRUE, updated_at = CURRENT_TIMESTAMP
    WHERE product_id = :product_id AND buyer = :buyer
      AND is_paid = TRUE AND is_sold = FALSE
    RETURNING {_PURCHASE_COLUMNS}
""")

_MARK_REPORTED_SQL = text(f"""
    UPDATE purchases
    SET reported = TRUE, updated_at = CURRENT_TIMESTAMP
    WHERE product_id = :product_id AND buyer = :buyer
      AND canceled = TRUE AND reported = FALSE
    RETURNING {_PURCHASE_COLUMNS}
""")


def _row_to_purchase(row: object) -> Purchase:
    return Purchase(
        product_id=row.product_id,  # type: ignore[attr-defined]
        buyer=row.buyer,  # type: ignore[attr-defined]
        is_paid=bool(row.is_paid),  # type: ignore[attr-defined]
        is_sold=bool(row.is_sold),  # type: ignore[attr-defined]
        canceled=bool(row.canceled),  # type: ignore[attr-defined]
        reported=bool(row.reported),  # type: ignore[attr-defined]
    )


class PurchaseRepository:
    async def get_purchase(
        self, db: AsyncSession, product_id: int, buyer: str
    ) -> Purchase | None:
        row = (
            await db.execute(_GET_SQL, {"product_id": product_id, "buyer": buyer})
        ).fetchone()
        return _row_to_purchase(row) if row else None

    async def mark_paid(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase:
        return await self._transition(db, _MARK_PAID_SQL, product_id, buyer, "paid")

    async def mark_sold(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase:
        return await self._transition(db, _MARK_SOLD_SQL, product_id, buyer, "sold")

    async def mark_canceled(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase:
        return await self._transition(db, _MARK_CANCELED_SQL, product_id, buyer, "canceled")

    async def mark_reported(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase:
        return await self._transition(db, _MARK_REPORTED_SQL, product_id, buyer, "reported")

    async def _transition(
        self, db: AsyncSession, sql: object, product_id: int, buyer: str, target: str
    ) -> Purchase:
        row = (
            await db.execute(sql, {"product_id": product_id, "buyer": buyer})  # type: ignore[arg-type]
        ).fetchone()
        if row is None:
            raise InternalError(
                f"Purchase ({product_id}, {buyer}) cannot move to {target}"
            )
        return _row_to_purchase(row)
