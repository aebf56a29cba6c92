"""SellerRegistryService — seller identity, contact data and block state.

Mutating methods hold the seller's entity lock and run as one transaction.
block/unblock require the owner's AdminCapability; the automatic block
raised by the reputation rules goes through apply_auto_block, which runs
inside the caller's transaction and is a no-op for an already blocked seller.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.em_access.access_control import AccessControl, AdminCapability, access_control
from src.em_common.database import transactional
from src.em_common.errors import (
    SellerAlreadyBlockedError,
    SellerAlreadyRegisteredError,
    SellerNotBlockedError,
)
from src.em_common.locks import EntityLocks, entity_locks, seller_key
from src.em_common.validation import require_text
from src.em_events.domain.events import seller_blocked, seller_registered, seller_unblocked
from src.em_events.infrastructure.outbox import write_event
from src.em_seller.domain.models import BlockedSeller, Seller, SellerContact
from src.em_seller.domain.repository import SellerRepositoryProtocol
from src.em_seller.infrastructure.persistence import SellerRepository

logger = logging.getLogger(__name__)


class SellerRegistryService:
    def __init__(
        self,
        repo: SellerRepositoryProtocol | None = None,
        access: AccessControl | None = None,
        locks: EntityLocks | None = None,
    ) -> None:
        self._repo: SellerRepositoryProtocol = repo or SellerRepository()
        self._access = access or access_control
        self._locks = locks or entity_locks

    async def register(
        self,
        db: AsyncSession,
        address: str,
        name: str,
        profile_uri: str,
        location: str,
        phone: str,
    ) -> Seller:
        require_text("name", name)
        require_text("profile_uri", profile_uri)
        require_text("location", location)
        require_text("phone", phone)

        async with self._locks.hold(seller_key(address)), transactional(db):
            existing = await self._repo.get_seller(db, address)
            if existing is not None and existing.is_registered:
                raise SellerAlreadyRegisteredError(address)
            seller = Seller(address=address, name=name, profile_uri=profile_uri)
            await self._repo.insert_seller(
                db, seller, SellerContact(address=address, location=location, phone=phone)
            )
            await write_event(seller_registered(address, name, profile_uri), db)

        logger.info("Seller registered: %s (%s)", address, name)
        return seller

    async def block(
        self, db: AsyncSession, capability: AdminCapability, address: str, reason: str
    ) -> BlockedSeller:
        self._access.verify(capability)
        async with self._locks.hold(seller_key(address)), transactional(db):
            if await self._repo.get_blocked(db, address) is not None:
                raise SellerAlreadyBlockedError(address)
            await self._insert_block(db, address, reason)

        logger.info("Seller blocked by %s: %s reason=%r", capability.holder, address, reason)
        return BlockedSeller(address=address, reason=reason)

    async def unblock(
        self, db: AsyncSession, capability: AdminCapability, address: str
    ) -> None:
        self._access.verify(capability)
        async with self._locks.hold(seller_key(address)), transactional(db):
            if not await self._repo.delete_blocked(db, address):
                raise SellerNotBlockedError(address)
            await write_event(seller_unblocked(address), db)

        logger.info("Seller unblocked by %s: %s", capability.holder, address)

    async def apply_auto_block(self, db: AsyncSession, address: str, reason: str) -> bool:
        """Block inside the caller's transaction. Returns False if already blocked.

        The caller must hold the seller's lock.
        """
        if await self._repo.get_blocked(db, address) is not None:
            return False
        await self._insert_block(db, address, reason)
        return True

    async def is_blocked(self, db: AsyncSession, address: str) -> bool:
        return await self._repo.get_blocked(db, address) is not None

    async def get_seller(self, db: AsyncSession, address: str) -> Seller | None:
        return await self._repo.get_seller(db, address)

    async def get_blocked_detail(self, db: AsyncSession, address: str) -> BlockedSeller:
        blocked = await self._repo.get_blocked(db, address)
        if blocked is None:
            raise SellerNotBlockedError(address)
        return blocked

    async def _insert_block(self, db: AsyncSession, address: str, reason: str) -> None:
        await self._repo.insert_blocked(db, address, reason)
        await write_event(seller_blocked(address, reason), db)
