"""Ledger-wide invariant checks.

escrow coverage     custody balance covers every held payment plus uncollected fees
treasury balance    accrued == total_accrued - total_withdrawn, accrued >= 0
inventory           per product: inventory + total_sold + escrowed units == initial_inventory
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_token.domain.protocol import TokenLedgerProtocol
from src.em_treasury.infrastructure.fee_collector import get_treasury

logger = logging.getLogger(__name__)

_ESCROWED_VALUE_SQL = text("""
    SELECT COALESCE(SUM(p.price), 0)
    FROM purchases pu
    JOIN products p ON p.id = pu.product_id
    WHERE pu.is_paid = TRUE AND pu.is_sold = FALSE
""")

_PRODUCT_UNITS_SQL = text("""
    SELECT p.id, p.inventory, p.total_sold, p.initial_inventory,
           (SELECT COUNT(*) FROM purchases pu
            WHERE pu.product_id = p.id AND pu.is_paid = TRUE AND pu.is_sold = FALSE
           ) AS escrowed
    FROM products p
    ORDER BY p.id
""")


async def verify_escrow_coverage(
    db: AsyncSession, token: TokenLedgerProtocol, custody: str
) -> list[str]:
    escrowed = int((await db.execute(_ESCROWED_VALUE_SQL)).scalar_one())
    accrued = (await get_treasury(db)).accrued
    custody_balance = await token.balance_of(db, custody)
    if custody_balance < escrowed + accrued:
        return [
            f"escrow coverage violated: custody_balance({custody_balance}) < "
            f"escrowed({escrowed}) + accrued_fees({accrued})"
        ]
    return []


async def verify_treasury(db: AsyncSession) -> list[str]:
    t = await get_treasury(db)
    violations: list[str] = []
    if t.accrued != t.total_accrued - t.total_withdrawn:
        violations.append(
            f"treasury balance violated: accrued({t.accrued}) != "
            f"total_accrued({t.total_accrued}) - total_withdrawn({t.total_withdrawn})"
        )
    if t.accrued < 0:
        violations.append(f"treasury balance violated: accrued({t.accrued}) < 0")
    return violations


async def verify_inventory(db: AsyncSession) -> list[str]:
    violations: list[str] = []
    for row in (await db.execute(_PRODUCT_UNITS_SQL)).fetchall():
        if row.inventory + row.total_sold + row.escrowed != row.initial_inventory:
            violations.append(
                f"inventory violated for product {row.id}: inventory({row.inventory}) + "
                f"total_sold({row.total_sold}) + escrowed({row.escrowed}) "
                f"!= initial_inventory({row.initial_inventory})"
            )
    return violations


async def verify_all_invariants(
    db: AsyncSession, token: TokenLedgerProtocol, custody: str
) -> list[str]:
    """Run every check. Returns violation strings; each is also logged at ERROR."""
    violations = (
        await verify_escrow_coverage(db, token, custody)
        + await verify_treasury(db)
        + await verify_inventory(db)
    )
    for msg in violations:
        logger.error(msg)
    return violations
