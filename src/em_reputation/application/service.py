"""ReputationService — cancellation reports, ratings and the auto-block rule.

A seller collecting AUTO_BLOCK_REPORT_THRESHOLD reports without a single
confirmed purchase is blocked automatically. Rating is capped by the number
of confirmed purchases.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.em_catalog.domain.models import Product
from src.em_catalog.domain.repository import ProductRepositoryProtocol
from src.em_catalog.infrastructure.persistence import ProductRepository
from src.em_common.database import transactional
from src.em_common.enums import SellerCounter
from src.em_common.errors import (
    AlreadyReportedError,
    NoConfirmedPurchasesError,
    NotCanceledError,
    ProductNotFoundError,
    RatingExceededError,
)
from src.em_common.locks import EntityLocks, entity_locks, product_key, seller_key
from src.em_escrow.domain.repository import PurchaseRepositoryProtocol
from src.em_escrow.infrastructure.persistence import PurchaseRepository
from src.em_events.domain.events import cancellation_reported, seller_rated
from src.em_events.infrastructure.outbox import write_event
from src.em_seller.application.service import SellerRegistryService
from src.em_seller.domain.models import Seller
from src.em_seller.domain.repository import SellerRepositoryProtocol
from src.em_seller.infrastructure.persistence import SellerRepository

logger = logging.getLogger(__name__)

AUTO_BLOCK_REPORT_THRESHOLD = 3
AUTO_BLOCK_REASON = "Multiple reports with no confirmed purchases"


@dataclass
class ReportOutcome:
    seller: Seller
    auto_blocked: bool


def should_auto_block(seller: Seller) -> bool:
    return (
        seller.reported_purchases >= AUTO_BLOCK_REPORT_THRESHOLD
        and seller.confirmed_purchases == 0
    )


class ReputationService:
    def __init__(
        self,
        products: ProductRepositoryProtocol | None = None,
        purchases: PurchaseRepositoryProtocol | None = None,
        sellers: SellerRepositoryProtocol | None = None,
        registry: SellerRegistryService | None = None,
        locks: EntityLocks | None = None,
    ) -> None:
        self._products: ProductRepositoryProtocol = products or ProductRepository()
        self._purchases: PurchaseRepositoryProtocol = purchases or PurchaseRepository()
        self._sellers: SellerRepositoryProtocol = sellers or SellerRepository()
        self._registry = registry or SellerRegistryService(repo=self._sellers)
        self._locks = locks or entity_locks

    async def report_cancellation(
        self, db: AsyncSession, product_id: int, buyer: str
    ) -> ReportOutcome:
        async with transactional(db):
            product = await self._require_product(db, product_id)

        async with self._locks.hold(
            product_key(product_id), seller_key(product.seller)
        ), transactional(db):
            product = await self._require_product(db, product_id)
            current = await self._purchases.get_purchase(db, product_id, buyer)
            if current is None or not current.canceled:
                raise NotCanceledError(product_id)
            if current.reported:
                raise AlreadyReportedError(product_id)

            await self._purchases.mark_reported(db, product_id, buyer)
            seller = await self._sellers.increment_counter(
                db, product.seller, SellerCounter.REPORTED
            )
            await write_event(
                cancellation_reported(
                    product_id, product.seller, buyer, seller.reported_purchases
                ),
                db,
            )
            auto_blocked = False
            if should_auto_block(seller):
                auto_blocked = await self._registry.apply_auto_block(
                    db, product.seller, AUTO_BLOCK_REASON
                )

        logger.info(
            "Cancellation reported: product=%d buyer=%s seller=%s reports=%d",
            product_id, buyer, product.seller, seller.reported_purchases,
        )
        if auto_blocked:
            logger.warning("Seller auto-blocked: %s", product.seller)
        return ReportOutcome(seller=seller, auto_blocked=auto_blocked)

    async def rate(self, db: AsyncSession, rater: str, address: str) -> int:
        """Add one rating point; returns the new rating."""
        async with self._locks.hold(seller_key(address)), transactional(db):
            rating = await self._sellers.increment_rating(db, address)
            if rating is None:
                seller = await self._sellers.get_seller(db, address)
                if seller is None or seller.confirmed_purchases == 0:
                    raise NoConfirmedPurchasesError(address)
                raise RatingExceededError(address)
            await write_event(seller_rated(address, rating), db)

        logger.info("Seller rated by %s: %s rating=%d", rater, address, rating)
        return rating

    async def _require_product(self, db: AsyncSession, product_id: int) -> Product:
        product = await self._products.get_product(db, product_id) if product_id > 0 else None
        if product is None:
            raise ProductNotFoundError(product_id)
        return product
