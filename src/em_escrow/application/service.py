"""EscrowService — purchase, confirm and cancel with custody-held funds.

A purchase moves the price from the buyer to the escrow custody address
(the buyer must have approved custody as spender beforehand). Confirmation
pays the seller minus the sale fee; cancellation refunds the buyer minus a
penalty that is split between the seller and the treasury.

Each operation is one unit of work: entity locks, then every state change,
outbox event and token leg on the same session. A failed token leg raises,
which rolls back the whole operation including legs that already succeeded.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.em_catalog.domain.models import Product
from src.em_catalog.domain.repository import ProductRepositoryProtocol
from src.em_catalog.infrastructure.persistence import ProductRepository
from src.em_common.database import transactional
from src.em_common.enums import SellerCounter
from src.em_common.errors import (
    AlreadyConfirmedError,
    AlreadyPaidError,
    AlreadySoldError,
    InternalError,
    NotPaidError,
    OutOfStockError,
    PenaltyTransferFailedError,
    ProductNotFoundError,
    RefundFailedError,
    SelfPurchaseError,
    TransferFailedError,
)
from src.em_common.locks import EntityLocks, entity_locks, product_key, seller_key
from src.em_escrow.domain.fees import calc_cancellation_split, calc_sale_split
from src.em_escrow.domain.models import Purchase
from src.em_escrow.domain.repository import PurchaseRepositoryProtocol
from src.em_escrow.infrastructure.persistence import PurchaseRepository
from src.em_events.domain.events import payment_confirmed, product_purchased, purchase_canceled
from src.em_events.infrastructure.outbox import write_event
from src.em_seller.domain.models import SellerContact
from src.em_seller.domain.repository import SellerRepositoryProtocol
from src.em_seller.infrastructure.persistence import SellerRepository
from src.em_token.domain.protocol import TokenLedgerProtocol
from src.em_token.infrastructure.sql_token import SqlTokenLedger
from src.em_treasury.infrastructure.fee_collector import accrue_fee

logger = logging.getLogger(__name__)


class EscrowService:
    def __init__(
        self,
        products: ProductRepositoryProtocol | None = None,
        purchases: PurchaseRepositoryProtocol | None = None,
        sellers: SellerRepositoryProtocol | None = None,
        token: TokenLedgerProtocol | None = None,
        locks: EntityLocks | None = None,
        custody: str | None = None,
    ) -> None:
        self._products: ProductRepositoryProtocol = products or ProductRepository()
        self._purchases: PurchaseRepositoryProtocol = purchases or PurchaseRepository()
        self._sellers: SellerRepositoryProtocol = sellers or SellerRepository()
        self._token: TokenLedgerProtocol = token or SqlTokenLedger()
        self._locks = locks or entity_locks
        self._custody = custody or settings.ESCROW_CUSTODY_ADDRESS

    @property
    def custody(self) -> str:
        return self._custody

    async def purchase(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase:
        async with self._locks.hold(product_key(product_id)), transactional(db):
            product = await self._require_product(db, product_id)
            if product.inventory == 0:
                raise OutOfStockError(product_id)
            if buyer == product.seller:
                raise SelfPurchaseError()
            existing = await self._purchases.get_purchase(db, product_id, buyer)
            if existing is not None and existing.is_paid:
                raise AlreadyPaidError(product_id)

            if await self._products.take_one_unit(db, product_id) is None:
                raise OutOfStockError(product_id)
            purchase = await self._purchases.mark_paid(db, product_id, buyer)
            await write_event(
                product_purchased(product_id, product.name, product.price, product.seller, buyer),
                db,
            )
            if not await self._token.transfer_from(
                db, self._custody, buyer, self._custody, product.price
            ):
                raise TransferFailedError("Payment into escrow failed")

        logger.info(
            "Purchase escrowed: product=%d buyer=%s price=%d", product_id, buyer, product.price
        )
        return purchase

    async def confirm(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase:
        seller = (await self._find_product(db, product_id)).seller
        async with self._locks.hold(
            product_key(product_id), seller_key(seller)
        ), transactional(db):
            product = await self._require_product(db, product_id)
            current = await self._purchases.get_purchase(db, product_id, buyer)
            if current is None or not current.is_paid:
                raise NotPaidError(product_id)
            if current.is_sold:
                raise AlreadyConfirmedError(product_id)

            split = calc_sale_split(product.price)
            await accrue_fee(db, split.fee, f"confirm:{product_id}:{buyer}")
            purchase = await self._purchases.mark_sold(db, product_id, buyer)
            await self._products.record_sale(db, product_id)
            await self._sellers.increment_counter(db, product.seller, SellerCounter.CONFIRMED)
            await write_event(
                payment_confirmed(product_id, product.name, product.price, product.seller, buyer),
                db,
            )
            if not await self._token.transfer(db, self._custody, product.seller, split.payout):
                raise TransferFailedError("Seller payout failed")

        logger.info(
            "Purchase confirmed: product=%d buyer=%s payout=%d fee=%d",
            product_id, buyer, split.payout, split.fee,
        )
        return purchase

    async def cancel(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase:
        seller = (await self._find_product(db, product_id)).seller
        async with self._locks.hold(
            product_key(product_id), seller_key(seller)
        ), transactional(db):
            product = await self._require_product(db, product_id)
            current = await self._purchases.get_purchase(db, product_id, buyer)
            if current is None or not current.is_paid:
                raise NotPaidError(product_id)
            if current.is_sold:
                raise AlreadySoldError(product_id)

            split = calc_cancellation_split(product.price)
            await accrue_fee(db, split.fee_on_penalty, f"cancel:{product_id}:{buyer}")
            purchase = await self._purchases.mark_canceled(db, product_id, buyer)
            await self._sellers.increment_counter(db, product.seller, SellerCounter.CANCELED)
            await self._products.restore_one_unit(db, product_id)
            await write_event(
                purchase_canceled(
                    product_id,
                    product.seller,
                    buyer,
                    split.refund,
                    split.penalty_to_seller,
                    split.fee_on_penalty,
                ),
                db,
            )
            if not await self._token.transfer(db, self._custody, buyer, split.refund):
                raise RefundFailedError()
            if not await self._token.transfer(
                db, self._custody, product.seller, split.penalty_to_seller
            ):
                raise PenaltyTransferFailedError()

        logger.info(
            "Purchase canceled: product=%d buyer=%s refund=%d penalty_to_seller=%d fee=%d",
            product_id, buyer, split.refund, split.penalty_to_seller, split.fee_on_penalty,
        )
        return purchase

    async def get_seller_contact(
        self, db: AsyncSession, product_id: int, buyer: str
    ) -> SellerContact:
        """Contact details of the product's seller, for a buyer whose payment is held."""
        product = await self._require_product(db, product_id)
        current = await self._purchases.get_purchase(db, product_id, buyer)
        if current is None or not current.is_paid:
            raise NotPaidError(product_id)
        contact = await self._sellers.get_contact(db, product.seller)
        if contact is None:
            raise InternalError(f"Contact missing for seller {product.seller}")
        return contact

    async def get_purchase(
        self, db: AsyncSession, product_id: int, buyer: str
    ) -> Purchase | None:
        return await self._purchases.get_purchase(db, product_id, buyer)

    async def _require_product(self, db: AsyncSession, product_id: int) -> Product:
        product = (
            await self._products.get_product(db, product_id) if product_id > 0 else None
        )
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def _find_product(self, db: AsyncSession, product_id: int) -> Product:
        """Unlocked read naming the seller whose lock a mutation must also hold."""
        async with transactional(db):
            return await self._require_product(db, product_id)
