"""SqlTokenLedger — TokenLedgerProtocol backed by tables in the escrow database.

All balance-mutating operations use conditional UPDATE ... RETURNING.
A result of 0 rows means the transfer cannot be honoured (insufficient
balance or allowance) and the call returns False without writing.

Transaction ownership: the CALLER commits or rolls back. Because writes go
through the caller's session, a multi-leg escrow operation that fails on a
later leg rolls back the earlier legs as well.
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.enums import TokenEntryType
from src.em_token.domain.models import TokenLedgerEntry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_GET_BALANCE_SQL = text("SELECT balance FROM token_balances WHERE holder = :holder")

_DEBIT_SQL = text("""
    UPDATE token_balances
    SET balance = balance - :amount
    WHERE holder = :holder AND balance >= :amount
    RETURNING balance
""")

_CREDIT_SQL = text("""
    INSERT INTO token_balances (holder, balance)
    VALUES (:holder, :amount)
    ON CONFLICT (holder) DO UPDATE
        SET balance = token_balances.balance + excluded.balance
    RETURNING balance
""")

_GET_ALLOWANCE_SQL = text("""
    SELECT amount FROM token_allowances
    WHERE owner = :owner AND spender = :spender
""")

_SET_ALLOWANCE_SQL = text("""
    INSERT INTO token_allowances (owner, spender, amount)
    VALUES (:owner, :spender, :amount)
    ON CONFLICT (owner, spender) DO UPDATE
        SET amount = excluded.amount
""")

_SPEND_ALLOWANCE_SQL = text("""
    UPDATE token_allowances
    SET amount = amount - :amount
    WHERE owner = :owner AND spender = :spender AND amount >= :amount
    RETURNING amount
""")

_INSERT_ENTRY_SQL = text("""
    INSERT INTO token_ledger_entries
        (holder, entry_type, amount, balance_after, counterparty)
    VALUES (:holder, :entry_type, :amount, :balance_after, :counterparty)
""")

_LIST_ENTRIES_SQL = text("""
    SELECT id, holder, entry_type, amount, balance_after, counterparty
    FROM token_ledger_entries
    WHERE holder = :holder
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_entry(row: object) -> TokenLedgerEntry:
    return TokenLedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        holder=row.holder,  # type: ignore[attr-defined]
        entry_type=row.entry_type,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        balance_after=row.balance_after,  # type: ignore[attr-defined]
        counterparty=row.counterparty,  # type: ignore[attr-defined]
    )


class SqlTokenLedger:
    """Concrete token ledger: balances, allowances and an append-only journal."""

    async def balance_of(self, db: AsyncSession, holder: str) -> int:
        result = await db.execute(_GET_BALANCE_SQL, {"holder": holder})
        balance = result.scalar_one_or_none()
        return int(balance) if balance is not None else 0

    async def allowance(self, db: AsyncSession, owner: str, spender: str) -> int:
        result = await db.execute(_GET_ALLOWANCE_SQL, {"owner": owner, "spender": spender})
        amount = result.scalar_one_or_none()
        return int(amount) if amount is not None else 0

    async def approve(
        self, db: AsyncSession, owner: str, spender: str, amount: int
    ) -> bool:
        if amount < 0:
            return False
        await db.execute(
            _SET_ALLOWANCE_SQL, {"owner": owner, "spender": spender, "amount": amount}
        )
        return True

    async def transfer(
        self, db: AsyncSession, sender: str, recipient: str, amount: int
    ) -> bool:
        if amount < 0:
            return False
        if amount == 0:
            return True
        debited = (
            await db.execute(_DEBIT_SQL, {"holder": sender, "amount": amount})
        ).fetchone()
        if debited is None:
            logger.debug("Transfer rejected: %s has less than %d", sender, amount)
            return False
        credited = (
            await db.execute(_CREDIT_SQL, {"holder": recipient, "amount": amount})
        ).fetchone()
        await self._journal(db, sender, TokenEntryType.TRANSFER_OUT, -amount, debited.balance, recipient)
        await self._journal(db, recipient, TokenEntryType.TRANSFER_IN, amount, credited.balance, sender)
        return True

    async def transfer_from(
        self, db: AsyncSession, spender: str, owner: str, recipient: str, amount: int
    ) -> bool:
        if amount < 0:
            return False
        if amount == 0:
            return True
        if await self.allowance(db, owner, spender) < amount:
            logger.debug("TransferFrom rejected: %s allowance for %s below %d", owner, spender, amount)
            return False
        if not await self.transfer(db, owner, recipient, amount):
            return False
        spent = (
            await db.execute(
                _SPEND_ALLOWANCE_SQL, {"owner": owner, "spender": spender, "amount": amount}
            )
        ).fetchone()
        if spent is None:
            # Allowance changed concurrently: undo the move before reporting failure
            await self.transfer(db, recipient, owner, amount)
            return False
        return True

    async def mint(self, db: AsyncSession, holder: str, amount: int) -> int:
        """Credit new tokens to holder. Returns the new balance."""
        if amount <= 0:
            raise ValueError(f"Mint amount must be positive, got {amount}")
        credited = (
            await db.execute(_CREDIT_SQL, {"holder": holder, "amount": amount})
        ).fetchone()
        await self._journal(db, holder, TokenEntryType.MINT, amount, credited.balance, None)
        return int(credited.balance)

    async def list_entries(
        self, db: AsyncSession, holder: str, cursor_id: int | None, limit: int
    ) -> list[TokenLedgerEntry]:
        rows = (
            await db.execute(
                _LIST_ENTRIES_SQL, {"holder": holder, "cursor_id": cursor_id, "limit": limit}
            )
        ).fetchall()
        return [_row_to_entry(row) for row in rows]

    async def _journal(
        self,
        db: AsyncSession,
        holder: str,
        entry_type: TokenEntryType,
        amount: int,
        balance_after: int,
        counterparty: str | None,
    ) -> None:
        await db.execute(
            _INSERT_ENTRY_SQL,
            {
                "holder": holder,
                "entry_type": entry_type.value,
                "amount": amount,
                "balance_after": balance_after,
                "counterparty": counterparty,
            },
        )
