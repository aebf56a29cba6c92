"""Service rules with mocked repositories, no database."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.em_catalog.application.service import ProductCatalogService
from src.em_catalog.domain.models import Product
from src.em_common.enums import SellerCounter
from src.em_common.errors import (
    InternalError,
    ProductNotFoundError,
    RatingExceededError,
    SellerBlockedError,
    SellerNotRegisteredError,
)
from src.em_common.locks import EntityLocks
from src.em_escrow.application.service import EscrowService
from src.em_reputation.application.service import ReputationService, should_auto_block
from src.em_seller.application.service import SellerRegistryService
from src.em_seller.domain.models import BlockedSeller, Seller
from src.em_seller.infrastructure.persistence import SellerRepository

SELLER = "0x" + "5" * 40


def _seller(**counters: int) -> Seller:
    return Seller(address=SELLER, name="Acme", profile_uri="ipfs://acme", **counters)


class TestCatalogRules:
    async def test_not_registered_rolls_back(self) -> None:
        products, sellers = AsyncMock(), AsyncMock()
        sellers.get_seller.return_value = None
        svc = ProductCatalogService(repo=products, seller_repo=sellers, locks=EntityLocks())
        db = AsyncMock()

        with pytest.raises(SellerNotRegisteredError):
            await svc.create_product(db, SELLER, "n", "u", 1, "", 1)

        products.insert_product.assert_not_awaited()
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    async def test_blocked_seller(self) -> None:
        products, sellers = AsyncMock(), AsyncMock()
        sellers.get_seller.return_value = _seller()
        sellers.get_blocked.return_value = BlockedSeller(address=SELLER, reason="x")
        svc = ProductCatalogService(repo=products, seller_repo=sellers, locks=EntityLocks())

        with pytest.raises(SellerBlockedError):
            await svc.create_product(AsyncMock(), SELLER, "n", "u", 1, "", 1)

    async def test_allocates_next_id_and_snapshots_name(self) -> None:
        products, sellers = AsyncMock(), AsyncMock()
        sellers.get_seller.return_value = _seller()
        sellers.get_blocked.return_value = None
        products.count_products.return_value = 6
        svc = ProductCatalogService(repo=products, seller_repo=sellers, locks=EntityLocks())
        db = AsyncMock()

        product = await svc.create_product(db, SELLER, "Lamp", "u", 10, "d", 2)

        assert product == Product(
            id=7,
            name="Lamp",
            image_url="u",
            price=10,
            seller=SELLER,
            seller_name="Acme",
            description="d",
            inventory=2,
            total_sold=0,
            initial_inventory=2,
        )
        products.insert_product.assert_awaited_once()
        db.commit.assert_awaited_once()


class TestAutoBlockRule:
    @pytest.mark.parametrize(
        "reported, confirmed, expected",
        [(2, 0, False), (3, 0, True), (4, 0, True), (3, 1, False), (0, 0, False)],
    )
    def test_threshold(self, reported: int, confirmed: int, expected: bool) -> None:
        seller = _seller(reported_purchases=reported, confirmed_purchases=confirmed)
        assert should_auto_block(seller) is expected


class TestRateRules:
    async def test_exhausted_rating(self) -> None:
        sellers = AsyncMock()
        sellers.increment_rating.return_value = None
        sellers.get_seller.return_value = _seller(confirmed_purchases=2, rating=2)
        svc = ReputationService(
            products=AsyncMock(),
            purchases=AsyncMock(),
            sellers=sellers,
            registry=SellerRegistryService(repo=sellers, locks=EntityLocks()),
            locks=EntityLocks(),
        )
        db = AsyncMock()

        with pytest.raises(RatingExceededError):
            await svc.rate(db, "0xrater", SELLER)
        db.rollback.assert_awaited_once()


class TestSellerRepositoryGuards:
    async def test_counter_on_missing_row_is_internal_error(self) -> None:
        db = AsyncMock()
        db.execute.return_value = MagicMock(fetchone=MagicMock(return_value=None))
        with pytest.raises(InternalError):
            await SellerRepository().increment_counter(db, SELLER, SellerCounter.CONFIRMED)


class TestUnknownProductRollsBack:
    @pytest.mark.parametrize("operation", ["confirm", "cancel"])
    async def test_escrow_mutation(self, operation: str) -> None:
        products, purchases = AsyncMock(), AsyncMock()
        products.get_product.return_value = None
        svc = EscrowService(
            products=products,
            purchases=purchases,
            sellers=AsyncMock(),
            token=AsyncMock(),
            locks=EntityLocks(),
            custody="0xcustody",
        )
        db = AsyncMock()

        with pytest.raises(ProductNotFoundError):
            await getattr(svc, operation)(db, 42, "0xbuyer")

        db.rollback.assert_awaited_once()
        purchases.get_purchase.assert_not_awaited()

    async def test_report_cancellation(self) -> None:
        products, purchases, sellers = AsyncMock(), AsyncMock(), AsyncMock()
        products.get_product.return_value = None
        svc = ReputationService(
            products=products,
            purchases=purchases,
            sellers=sellers,
            registry=SellerRegistryService(repo=sellers, locks=EntityLocks()),
            locks=EntityLocks(),
        )
        db = AsyncMock()

        with pytest.raises(ProductNotFoundError):
            await svc.report_cancellation(db, 42, "0xbuyer")

        db.rollback.assert_awaited_once()
        purchases.mark_reported.assert_not_awaited()
