"""Admin application service — owner-only operations behind one facade."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.em_access.access_control import AccessControl, AdminCapability, access_control
from src.em_admin.application.invariants import verify_all_invariants
from src.em_seller.application.service import SellerRegistryService
from src.em_token.application.service import TokenService
from src.em_token.infrastructure.sql_token import SqlTokenLedger
from src.em_treasury.application.service import FeeTreasuryService


class AdminService:
    def __init__(
        self,
        registry: SellerRegistryService | None = None,
        treasury: FeeTreasuryService | None = None,
        tokens: TokenService | None = None,
        access: AccessControl | None = None,
        custody: str | None = None,
    ) -> None:
        self._registry = registry or SellerRegistryService()
        self._treasury = treasury or FeeTreasuryService()
        self._tokens = tokens or TokenService()
        self._access = access or access_control
        self._custody = custody or settings.ESCROW_CUSTODY_ADDRESS
        self._ledger = SqlTokenLedger()

    async def block_seller(
        self, db: AsyncSession, capability: AdminCapability, address: str, reason: str
    ) -> dict[str, Any]:
        blocked = await self._registry.block(db, capability, address, reason)
        return {"address": blocked.address, "reason": blocked.reason, "is_blocked": True}

    async def unblock_seller(
        self, db: AsyncSession, capability: AdminCapability, address: str
    ) -> dict[str, Any]:
        await self._registry.unblock(db, capability, address)
        return {"address": address, "is_blocked": False}

    async def get_fees(self, db: AsyncSession, capability: AdminCapability) -> dict[str, Any]:
        self._access.verify(capability)
        t = await self._treasury.get_treasury(db)
        return {
            "accrued": t.accrued,
            "total_accrued": t.total_accrued,
            "total_withdrawn": t.total_withdrawn,
        }

    async def withdraw_fees(
        self, db: AsyncSession, capability: AdminCapability, destination: str
    ) -> dict[str, Any]:
        amount = await self._treasury.withdraw(db, capability, destination)
        return {"destination": destination, "amount": amount}

    async def mint(
        self, db: AsyncSession, capability: AdminCapability, holder: str, amount: int
    ) -> dict[str, Any]:
        balance = await self._tokens.mint(db, capability, holder, amount)
        return {"holder": holder, "amount": amount, "balance": balance}

    async def verify_invariants(
        self, db: AsyncSession, capability: AdminCapability
    ) -> dict[str, Any]:
        self._access.verify(capability)
        violations = await verify_all_invariants(db, self._ledger, self._custody)
        return {"ok": not violations, "violations": violations}
