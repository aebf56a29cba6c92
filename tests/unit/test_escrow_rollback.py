"""A failed token leg leaves no state change, no event and no token movement."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.enums import PurchaseState
from src.em_common.errors import (
    PenaltyTransferFailedError,
    RefundFailedError,
    TransferFailedError,
)
from src.em_events.infrastructure.outbox import list_events
from src.em_token.infrastructure.sql_token import SqlTokenLedger
from tests.support import (
    BUYER,
    CUSTODY,
    PRICE,
    SELLER,
    FailingTokenLedger,
    build_marketplace,
    fund_buyer,
    setup_listing,
)


async def test_purchase_without_allowance_rolls_back(db: AsyncSession) -> None:
    market = build_marketplace()
    product = await setup_listing(market, db)
    await SqlTokenLedger().mint(db, BUYER, PRICE)
    await db.commit()

    with pytest.raises(TransferFailedError):
        await market.escrow.purchase(db, product.id, BUYER)

    assert (await market.catalog.get_product(db, product.id)).inventory == 5
    assert await market.escrow.get_purchase(db, product.id, BUYER) is None
    assert await market.ledger.balance_of(db, BUYER) == PRICE
    assert await list_events(db, event_type="ProductPurchased") == []


async def test_failed_payout_rolls_back_confirm(db: AsyncSession) -> None:
    market = build_marketplace(FailingTokenLedger({SELLER}))
    product = await setup_listing(market, db)
    await fund_buyer(db, BUYER)
    await market.escrow.purchase(db, product.id, BUYER)

    with pytest.raises(TransferFailedError):
        await market.escrow.confirm(db, product.id, BUYER)

    purchase = await market.escrow.get_purchase(db, product.id, BUYER)
    assert purchase.state == PurchaseState.PAID
    assert await market.treasury.get_total_fees(db) == 0
    assert await market.ledger.balance_of(db, CUSTODY) == PRICE
    assert (await market.catalog.get_product(db, product.id)).total_sold == 0
    assert (await market.registry.get_seller(db, SELLER)).confirmed_purchases == 0
    assert await list_events(db, event_type="PaymentConfirmed") == []


async def test_failed_refund_rolls_back_cancel(db: AsyncSession) -> None:
    market = build_marketplace(FailingTokenLedger({BUYER}))
    product = await setup_listing(market, db)
    await fund_buyer(db, BUYER)
    await market.escrow.purchase(db, product.id, BUYER)

    with pytest.raises(RefundFailedError):
        await market.escrow.cancel(db, product.id, BUYER)

    purchase = await market.escrow.get_purchase(db, product.id, BUYER)
    assert purchase.state == PurchaseState.PAID
    assert not purchase.canceled
    assert (await market.catalog.get_product(db, product.id)).inventory == 4
    assert await market.treasury.get_total_fees(db) == 0


async def test_failed_penalty_rolls_back_completed_refund(db: AsyncSession) -> None:
    market = build_marketplace(FailingTokenLedger({SELLER}))
    product = await setup_listing(market, db)
    await fund_buyer(db, BUYER)
    await market.escrow.purchase(db, product.id, BUYER)

    with pytest.raises(PenaltyTransferFailedError):
        await market.escrow.cancel(db, product.id, BUYER)

    assert await market.ledger.balance_of(db, BUYER) == 0
    assert await market.ledger.balance_of(db, CUSTODY) == PRICE
    assert (await market.registry.get_seller(db, SELLER)).canceled_purchases == 0
    assert await list_events(db, event_type="PurchaseCanceled") == []
