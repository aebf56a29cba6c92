"""TokenService — balance queries, custody approval and test-token minting."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.em_access.access_control import AccessControl, AdminCapability, access_control
from src.em_common.database import transactional
from src.em_common.errors import FieldValidationError
from src.em_common.validation import require_positive
from src.em_token.domain.models import TokenLedgerEntry
from src.em_token.infrastructure.sql_token import SqlTokenLedger

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(
        self,
        ledger: SqlTokenLedger | None = None,
        access: AccessControl | None = None,
        custody: str | None = None,
    ) -> None:
        self._ledger = ledger or SqlTokenLedger()
        self._access = access or access_control
        self._custody = custody or settings.ESCROW_CUSTODY_ADDRESS

    @property
    def custody(self) -> str:
        return self._custody

    async def get_balance(self, db: AsyncSession, holder: str) -> tuple[int, int]:
        """Return (balance, allowance granted to escrow custody)."""
        balance = await self._ledger.balance_of(db, holder)
        allowance = await self._ledger.allowance(db, holder, self._custody)
        return balance, allowance

    async def approve_custody(self, db: AsyncSession, owner: str, amount: int) -> int:
        """Let escrow custody pull up to amount from owner on purchase."""
        async with transactional(db):
            if not await self._ledger.approve(db, owner, self._custody, amount):
                raise FieldValidationError("amount", f"must be >= 0, got {amount}")
        logger.info("Custody allowance set: %s -> %d", owner, amount)
        return amount

    async def list_entries(
        self, db: AsyncSession, holder: str, cursor_id: int | None, limit: int
    ) -> list[TokenLedgerEntry]:
        return await self._ledger.list_entries(db, holder, cursor_id, limit)

    async def mint(
        self, db: AsyncSession, capability: AdminCapability, holder: str, amount: int
    ) -> int:
        self._access.verify(capability)
        require_positive("amount", amount)
        async with transactional(db):
            balance = await self._ledger.mint(db, holder, amount)
        logger.info("Minted by %s: %d -> %s (balance=%d)", capability.holder, amount, holder, balance)
        return balance
