"""Token ledger Protocol: the value-transfer dependency of the escrow core.

Every call takes the caller's AsyncSession so a ledger that lives in the same
database takes part in the escrow transaction. A remote ledger may ignore it.
A False return is the only failure signal; there are no partial transfers.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession


class TokenLedgerProtocol(Protocol):
    async def transfer(
        self, db: AsyncSession, sender: str, recipient: str, amount: int
    ) -> bool: ...

    async def transfer_from(
        self, db: AsyncSession, spender: str, owner: str, recipient: str, amount: int
    ) -> bool: ...

    async def approve(
        self, db: AsyncSession, owner: str, spender: str, amount: int
    ) -> bool: ...

    async def balance_of(self, db: AsyncSession, holder: str) -> int: ...
