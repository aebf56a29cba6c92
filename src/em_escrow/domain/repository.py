"""Repository Protocol for escrow purchase records."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.em_escrow.domain.models import Purchase


class PurchaseRepositoryProtocol(Protocol):
    async def get_purchase(
        self, db: AsyncSession, product_id: int, buyer: str
    ) -> Purchase | None: ...

    async def mark_paid(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase: ...

    async def mark_sold(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase: ...

    async def mark_canceled(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase: ...

    async def mark_reported(self, db: AsyncSession, product_id: int, buyer: str) -> Purchase: ...
