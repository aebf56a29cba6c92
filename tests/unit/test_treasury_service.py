"""FeeTreasuryService: withdrawal of accrued fees."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_access.access_control import AdminCapability
from src.em_common.errors import (
    FeeTransferFailedError,
    InvalidDestinationError,
    UnauthorizedError,
)
from src.em_events.infrastructure.outbox import list_events
from src.em_token.domain.models import NULL_ADDRESS
from src.em_treasury.infrastructure.fee_collector import accrue_fee
from tests.support import (
    BUYER,
    CUSTODY,
    DESTINATION,
    OWNER,
    STRANGER,
    FailingTokenLedger,
    Marketplace,
    build_marketplace,
    fund_buyer,
    setup_listing,
)


async def _confirmed_sale(market: Marketplace, db: AsyncSession) -> None:
    product = await setup_listing(market, db)
    await fund_buyer(db, BUYER)
    await market.escrow.purchase(db, product.id, BUYER)
    await market.escrow.confirm(db, product.id, BUYER)


async def test_withdraw_transfers_and_zeroes(market: Marketplace, db: AsyncSession) -> None:
    await _confirmed_sale(market, db)

    amount = await market.treasury.withdraw(db, market.access.authorize(OWNER), DESTINATION)

    assert amount == 5_000000
    assert await market.ledger.balance_of(db, DESTINATION) == 5_000000
    assert await market.ledger.balance_of(db, CUSTODY) == 0
    treasury = await market.treasury.get_treasury(db)
    assert treasury.accrued == 0
    assert treasury.total_accrued == 5_000000
    assert treasury.total_withdrawn == 5_000000
    events = await list_events(db, event_type="FeesWithdrawn")
    assert events[0].payload == {"destination": DESTINATION, "amount": 5_000000}


async def test_zero_withdrawal_succeeds(market: Marketplace, db: AsyncSession) -> None:
    amount = await market.treasury.withdraw(db, market.access.authorize(OWNER), DESTINATION)
    assert amount == 0
    assert await market.ledger.balance_of(db, DESTINATION) == 0
    assert len(await list_events(db, event_type="FeesWithdrawn")) == 1


@pytest.mark.parametrize("destination", ["", NULL_ADDRESS])
async def test_invalid_destination(
    market: Marketplace, db: AsyncSession, destination: str
) -> None:
    with pytest.raises(InvalidDestinationError):
        await market.treasury.withdraw(db, market.access.authorize(OWNER), destination)


async def test_non_owner_rejected(market: Marketplace, db: AsyncSession) -> None:
    with pytest.raises(UnauthorizedError):
        await market.treasury.withdraw(db, AdminCapability(holder=STRANGER), DESTINATION)


async def test_failed_transfer_keeps_accrual(db: AsyncSession) -> None:
    market = build_marketplace(FailingTokenLedger({DESTINATION}))
    await _confirmed_sale(market, db)

    with pytest.raises(FeeTransferFailedError):
        await market.treasury.withdraw(db, market.access.authorize(OWNER), DESTINATION)

    assert await market.treasury.get_total_fees(db) == 5_000000
    assert (await market.treasury.get_treasury(db)).total_withdrawn == 0
    assert await list_events(db, event_type="FeesWithdrawn") == []


async def test_accrue_fee_accumulates(db: AsyncSession) -> None:
    await accrue_fee(db, 300_000, "cancel:1")
    await accrue_fee(db, 0, "noop")
    await accrue_fee(db, 5_000000, "confirm:1")
    await db.commit()

    market = build_marketplace()
    treasury = await market.treasury.get_treasury(db)
    assert treasury.accrued == treasury.total_accrued == 5_300000
