"""FeeTreasuryService — withdrawal of accrued marketplace fees.

Fees accrue from escrow outcomes (see fee_collector.accrue_fee) and sit in
the escrow custody balance until the owner withdraws them.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.em_access.access_control import AccessControl, AdminCapability, access_control
from src.em_common.database import transactional
from src.em_common.errors import FeeTransferFailedError, InvalidDestinationError
from src.em_common.locks import TREASURY_KEY, EntityLocks, entity_locks
from src.em_events.domain.events import fees_withdrawn
from src.em_events.infrastructure.outbox import write_event
from src.em_token.domain.models import is_null_address
from src.em_token.domain.protocol import TokenLedgerProtocol
from src.em_token.infrastructure.sql_token import SqlTokenLedger
from src.em_treasury.domain.models import FeeTreasury
from src.em_treasury.infrastructure.fee_collector import get_treasury, record_withdrawal

logger = logging.getLogger(__name__)


class FeeTreasuryService:
    def __init__(
        self,
        token: TokenLedgerProtocol | None = None,
        access: AccessControl | None = None,
        locks: EntityLocks | None = None,
        custody: str | None = None,
    ) -> None:
        self._token: TokenLedgerProtocol = token or SqlTokenLedger()
        self._access = access or access_control
        self._locks = locks or entity_locks
        self._custody = custody or settings.ESCROW_CUSTODY_ADDRESS

    async def withdraw(
        self, db: AsyncSession, capability: AdminCapability, destination: str
    ) -> int:
        """Transfer the whole accrued balance to destination and zero it.

        Returns the amount withdrawn. A zero balance is a successful
        transfer of 0.
        """
        self._access.verify(capability)
        if is_null_address(destination):
            raise InvalidDestinationError()

        async with self._locks.hold(TREASURY_KEY), transactional(db):
            amount = (await get_treasury(db)).accrued
            await record_withdrawal(db, amount)
            await write_event(fees_withdrawn(destination, amount), db)
            if not await self._token.transfer(db, self._custody, destination, amount):
                raise FeeTransferFailedError()

        logger.info("Fees withdrawn by %s: %d -> %s", capability.holder, amount, destination)
        return amount

    async def get_total_fees(self, db: AsyncSession) -> int:
        return (await get_treasury(db)).accrued

    async def get_treasury(self, db: AsyncSession) -> FeeTreasury:
        return await get_treasury(db)
