"""ProductCatalogService — product listings owned by registered sellers.

create_product validates input before touching the registry, then holds the
catalog lock (id allocation) and the seller lock (block state) for the
duration of its transaction.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.em_catalog.domain.models import Product
from src.em_catalog.domain.repository import ProductRepositoryProtocol
from src.em_catalog.infrastructure.persistence import ProductRepository
from src.em_common.database import transactional
from src.em_common.errors import SellerBlockedError, SellerNotRegisteredError
from src.em_common.locks import CATALOG_KEY, EntityLocks, entity_locks, seller_key
from src.em_common.validation import require_positive, require_text
from src.em_events.domain.events import product_created
from src.em_events.infrastructure.outbox import write_event
from src.em_seller.domain.repository import SellerRepositoryProtocol
from src.em_seller.infrastructure.persistence import SellerRepository

logger = logging.getLogger(__name__)


class ProductCatalogService:
    def __init__(
        self,
        repo: ProductRepositoryProtocol | None = None,
        seller_repo: SellerRepositoryProtocol | None = None,
        locks: EntityLocks | None = None,
    ) -> None:
        self._repo: ProductRepositoryProtocol = repo or ProductRepository()
        self._seller_repo: SellerRepositoryProtocol = seller_repo or SellerRepository()
        self._locks = locks or entity_locks

    async def create_product(
        self,
        db: AsyncSession,
        seller: str,
        name: str,
        image_url: str,
        price: int,
        description: str,
        inventory: int,
    ) -> Product:
        require_text("name", name)
        require_text("image_url", image_url)
        require_positive("price", price)
        require_positive("inventory", inventory)

        async with self._locks.hold(CATALOG_KEY, seller_key(seller)), transactional(db):
            record = await self._seller_repo.get_seller(db, seller)
            if record is None or not record.is_registered:
                raise SellerNotRegisteredError(seller)
            if await self._seller_repo.get_blocked(db, seller) is not None:
                raise SellerBlockedError(seller)

            product = Product(
                id=await self._repo.count_products(db) + 1,
                name=name,
                image_url=image_url,
                price=price,
                seller=seller,
                seller_name=record.name,
                description=description,
                inventory=inventory,
                total_sold=0,
                initial_inventory=inventory,
            )
            await self._repo.insert_product(db, product)
            await write_event(
                product_created(
                    product.id,
                    product.name,
                    product.image_url,
                    product.price,
                    product.seller,
                    product.seller_name,
                    product.inventory,
                ),
                db,
            )

        logger.info(
            "Product created: id=%d seller=%s price=%d inventory=%d",
            product.id, seller, price, inventory,
        )
        return product

    async def get_product(self, db: AsyncSession, product_id: int) -> Product | None:
        """None for id 0, negative ids and ids never allocated."""
        if product_id <= 0:
            return None
        return await self._repo.get_product(db, product_id)

    async def list_products(
        self, db: AsyncSession, cursor_id: int | None, limit: int
    ) -> list[Product]:
        return await self._repo.list_products(db, cursor_id, limit)

    async def count_products(self, db: AsyncSession) -> int:
        return await self._repo.count_products(db)
