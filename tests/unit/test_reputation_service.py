"""ReputationService: reports, the auto-block rule and rating caps."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.errors import (
    AlreadyReportedError,
    NoConfirmedPurchasesError,
    NotCanceledError,
    RatingExceededError,
)
from src.em_events.infrastructure.outbox import list_events
from src.em_reputation.application.service import AUTO_BLOCK_REASON
from tests.support import (
    BUYER,
    BUYER_2,
    BUYER_3,
    OWNER,
    SELLER,
    STRANGER,
    Marketplace,
    fund_buyer,
    list_product,
    register_seller,
    setup_listing,
)


async def _purchase_and_cancel(
    market: Marketplace, db: AsyncSession, product_id: int, buyer: str
) -> None:
    await fund_buyer(db, buyer)
    await market.escrow.purchase(db, product_id, buyer)
    await market.escrow.cancel(db, product_id, buyer)


class TestReportCancellation:
    async def test_report_increments_counter(self, market: Marketplace, db: AsyncSession) -> None:
        product = await setup_listing(market, db)
        await _purchase_and_cancel(market, db, product.id, BUYER)

        outcome = await market.reputation.report_cancellation(db, product.id, BUYER)

        assert outcome.seller.reported_purchases == 1
        assert not outcome.auto_blocked
        purchase = await market.escrow.get_purchase(db, product.id, BUYER)
        assert purchase.reported
        events = await list_events(db, event_type="CancellationReported")
        assert events[0].payload["reported_purchases"] == 1

    async def test_report_requires_cancellation(
        self, market: Marketplace, db: AsyncSession
    ) -> None:
        product = await setup_listing(market, db)
        with pytest.raises(NotCanceledError):
            await market.reputation.report_cancellation(db, product.id, BUYER)

        await fund_buyer(db, BUYER)
        await market.escrow.purchase(db, product.id, BUYER)
        with pytest.raises(NotCanceledError):
            await market.reputation.report_cancellation(db, product.id, BUYER)

    async def test_report_twice_rejected(self, market: Marketplace, db: AsyncSession) -> None:
        product = await setup_listing(market, db)
        await _purchase_and_cancel(market, db, product.id, BUYER)
        await market.reputation.report_cancellation(db, product.id, BUYER)
        with pytest.raises(AlreadyReportedError):
            await market.reputation.report_cancellation(db, product.id, BUYER)

    async def test_reported_marker_survives_repurchase(
        self, market: Marketplace, db: AsyncSession
    ) -> None:
        product = await setup_listing(market, db)
        await _purchase_and_cancel(market, db, product.id, BUYER)
        await market.reputation.report_cancellation(db, product.id, BUYER)
        await fund_buyer(db, BUYER)
        await market.escrow.purchase(db, product.id, BUYER)
        await market.escrow.cancel(db, product.id, BUYER)
        with pytest.raises(AlreadyReportedError):
            await market.reputation.report_cancellation(db, product.id, BUYER)


class TestAutoBlock:
    async def test_blocks_at_third_report(self, market: Marketplace, db: AsyncSession) -> None:
        product = await setup_listing(market, db)
        for buyer in (BUYER, BUYER_2, BUYER_3):
            await _purchase_and_cancel(market, db, product.id, buyer)

        await market.reputation.report_cancellation(db, product.id, BUYER)
        second = await market.reputation.report_cancellation(db, product.id, BUYER_2)
        assert not second.auto_blocked
        assert not await market.registry.is_blocked(db, SELLER)

        third = await market.reputation.report_cancellation(db, product.id, BUYER_3)
        assert third.auto_blocked
        detail = await market.registry.get_blocked_detail(db, SELLER)
        assert detail.reason == AUTO_BLOCK_REASON == "Multiple reports with no confirmed purchases"
        assert [e.payload["reason"] for e in await list_events(db, event_type="SellerBlocked")] == [
            AUTO_BLOCK_REASON
        ]

    async def test_reports_accumulate_across_products(
        self, market: Marketplace, db: AsyncSession
    ) -> None:
        await register_seller(market, db)
        products = [await list_product(market, db, inventory=1) for _ in range(3)]
        buyers = (BUYER, BUYER_2, BUYER_3)
        for product, buyer in zip(products, buyers):
            await _purchase_and_cancel(market, db, product.id, buyer)

        first = await market.reputation.report_cancellation(db, products[0].id, BUYER)
        assert first.seller.reported_purchases == 1
        assert not await market.registry.is_blocked(db, SELLER)

        second = await market.reputation.report_cancellation(db, products[1].id, BUYER_2)
        assert second.seller.reported_purchases == 2
        assert not second.auto_blocked
        assert not await market.registry.is_blocked(db, SELLER)

        third = await market.reputation.report_cancellation(db, products[2].id, BUYER_3)
        assert third.seller.reported_purchases == 3
        assert third.auto_blocked
        assert await market.registry.is_blocked(db, SELLER)

    async def test_confirmed_purchase_prevents_block(
        self, market: Marketplace, db: AsyncSession
    ) -> None:
        product = await setup_listing(market, db)
        await fund_buyer(db, STRANGER)
        await market.escrow.purchase(db, product.id, STRANGER)
        await market.escrow.confirm(db, product.id, STRANGER)
        for buyer in (BUYER, BUYER_2, BUYER_3):
            await _purchase_and_cancel(market, db, product.id, buyer)
            await market.reputation.report_cancellation(db, product.id, buyer)

        assert not await market.registry.is_blocked(db, SELLER)
        seller = await market.registry.get_seller(db, SELLER)
        assert seller.reported_purchases == 3

    async def test_already_blocked_seller_skips_silently(
        self, market: Marketplace, db: AsyncSession
    ) -> None:
        product = await setup_listing(market, db)
        for buyer in (BUYER, BUYER_2, BUYER_3):
            await _purchase_and_cancel(market, db, product.id, buyer)
        await market.registry.block(db, market.access.authorize(OWNER), SELLER, "manual")

        for buyer in (BUYER, BUYER_2):
            await market.reputation.report_cancellation(db, product.id, buyer)
        third = await market.reputation.report_cancellation(db, product.id, BUYER_3)

        assert not third.auto_blocked
        assert third.seller.reported_purchases == 3
        assert (await market.registry.get_blocked_detail(db, SELLER)).reason == "manual"


class TestRate:
    async def test_rating_capped_by_confirmed(self, market: Marketplace, db: AsyncSession) -> None:
        product = await setup_listing(market, db)
        with pytest.raises(NoConfirmedPurchasesError):
            await market.reputation.rate(db, BUYER, SELLER)

        await fund_buyer(db, BUYER)
        await market.escrow.purchase(db, product.id, BUYER)
        await market.escrow.confirm(db, product.id, BUYER)

        assert await market.reputation.rate(db, BUYER, SELLER) == 1
        with pytest.raises(RatingExceededError):
            await market.reputation.rate(db, BUYER, SELLER)

        seller = await market.registry.get_seller(db, SELLER)
        assert seller.rating == 1 == seller.confirmed_purchases
        events = await list_events(db, event_type="SellerRated")
        assert [e.payload for e in events] == [{"seller": SELLER, "rating": 1}]

    async def test_unknown_seller(self, market: Marketplace, db: AsyncSession) -> None:
        with pytest.raises(NoConfirmedPurchasesError):
            await market.reputation.rate(db, BUYER, STRANGER)
