"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.em_catalog.domain.models import Product


class ProductRepositoryProtocol(Protocol):
    async def count_products(self, db: AsyncSession) -> int: ...

    async def insert_product(self, db: AsyncSession, product: Product) -> None: ...

    async def get_product(self, db: AsyncSession, product_id: int) -> Product | None: ...

    async def list_products(
        self, db: AsyncSession, cursor_id: int | None, limit: int
    ) -> list[Product]: ...

    async def take_one_unit(self, db: AsyncSession, product_id: int) -> Product | None: ...

    async def restore_one_unit(self, db: AsyncSession, product_id: int) -> Product: ...

    async def record_sale(self, db: AsyncSession, product_id: int) -> Product: ...
