"""Addresses, service wiring and ledger doubles shared by the test suite."""

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.em_access.access_control import AccessControl
from src.em_catalog.application.service import ProductCatalogService
from src.em_catalog.domain.models import Product
from src.em_common.locks import EntityLocks
from src.em_escrow.application.service import EscrowService
from src.em_reputation.application.service import ReputationService
from src.em_seller.application.service import SellerRegistryService
from src.em_token.infrastructure.sql_token import SqlTokenLedger
from src.em_treasury.application.service import FeeTreasuryService

OWNER = settings.OWNER_ADDRESS
CUSTODY = settings.ESCROW_CUSTODY_ADDRESS
SELLER = "0x" + "5" * 40
OTHER_SELLER = "0x" + "6" * 40
BUYER = "0x" + "b" * 40
BUYER_2 = "0x" + "c" * 40
BUYER_3 = "0x" + "d" * 40
STRANGER = "0x" + "e" * 40
DESTINATION = "0x" + "f" * 40

PRICE = 100_000000  # 100 tokens


class FailingTokenLedger(SqlTokenLedger):
    """SQL ledger whose transfer() reports failure for chosen recipients."""

    def __init__(self, fail_recipients: Iterable[str] = ()) -> None:
        self.fail_recipients = set(fail_recipients)

    async def transfer(
        self, db: AsyncSession, sender: str, recipient: str, amount: int
    ) -> bool:
        if recipient in self.fail_recipients:
            return False
        return await super().transfer(db, sender, recipient, amount)


@dataclass
class Marketplace:
    access: AccessControl
    ledger: SqlTokenLedger
    registry: SellerRegistryService
    catalog: ProductCatalogService
    escrow: EscrowService
    reputation: ReputationService
    treasury: FeeTreasuryService


def build_marketplace(ledger: SqlTokenLedger | None = None) -> Marketplace:
    locks = EntityLocks()
    access = AccessControl(owner=OWNER)
    ledger = ledger or SqlTokenLedger()
    registry = SellerRegistryService(access=access, locks=locks)
    return Marketplace(
        access=access,
        ledger=ledger,
        registry=registry,
        catalog=ProductCatalogService(locks=locks),
        escrow=EscrowService(token=ledger, locks=locks, custody=CUSTODY),
        reputation=ReputationService(registry=registry, locks=locks),
        treasury=FeeTreasuryService(token=ledger, access=access, locks=locks, custody=CUSTODY),
    )


async def register_seller(m: Marketplace, db: AsyncSession, address: str = SELLER) -> None:
    await m.registry.register(
        db, address, "Acme Goods", "ipfs://acme", "Lisbon", "+351 555 0100"
    )


async def list_product(
    m: Marketplace,
    db: AsyncSession,
    seller: str = SELLER,
    price: int = PRICE,
    inventory: int = 5,
) -> Product:
    return await m.catalog.create_product(
        db, seller, "Walnut desk", "https://img.example/desk.png", price, "Solid walnut", inventory
    )


async def fund_buyer(db: AsyncSession, buyer: str, amount: int = PRICE) -> None:
    """Mint amount to buyer and approve custody to pull it."""
    ledger = SqlTokenLedger()
    await ledger.mint(db, buyer, amount)
    await ledger.approve(db, buyer, CUSTODY, amount)
    await db.commit()


async def setup_listing(
    m: Marketplace, db: AsyncSession, price: int = PRICE, inventory: int = 5
) -> Product:
    await register_seller(m, db)
    return await list_product(m, db, price=price, inventory=inventory)
