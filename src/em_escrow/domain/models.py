"""Domain models for em_escrow — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass

from src.em_common.enums import PurchaseState


@dataclass
class Purchase:
    """Escrow record for one (product, buyer) pair.

    canceled and reported are one-way markers; they survive a repurchase.
    """

    product_id: int
    buyer: str
    is_paid: bool = False
    is_sold: bool = False
    canceled: bool = False
    reported: bool = False

    @property
    def state(self) -> PurchaseState:
        if self.is_sold:
            return PurchaseState.SOLD
        if self.is_paid:
            return PurchaseState.PAID
        if self.canceled:
            return PurchaseState.CANCELED
        return PurchaseState.NONE
