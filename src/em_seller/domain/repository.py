"""Repository Protocol for seller records, contacts and blocks.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.enums import SellerCounter
from src.em_seller.domain.models import BlockedSeller, Seller, SellerContact


class SellerRepositoryProtocol(Protocol):
    async def get_seller(self, db: AsyncSession, address: str) -> Seller | None: ...

    async def insert_seller(
        self, db: AsyncSession, seller: Seller, contact: SellerContact
    ) -> None: ...

    async def get_contact(self, db: AsyncSession, address: str) -> SellerContact | None: ...

    async def get_blocked(self, db: AsyncSession, address: str) -> BlockedSeller | None: ...

    async def insert_blocked(self, db: AsyncSession, address: str, reason: str) -> None: ...

    async def delete_blocked(self, db: AsyncSession, address: str) -> bool: ...

    async def increment_counter(
        self, db: AsyncSession, address: str, counter: SellerCounter
    ) -> Seller: ...

    async def increment_rating(self, db: AsyncSession, address: str) -> int | None: ...
