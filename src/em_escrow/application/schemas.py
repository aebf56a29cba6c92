"""Pydantic schemas for em_escrow API responses."""

from pydantic import BaseModel

from src.em_escrow.domain.models import Purchase
from src.em_seller.domain.models import SellerContact


class PurchaseResponse(BaseModel):
    product_id: int
    buyer: str
    state: str
    is_paid: bool
    is_sold: bool
    canceled: bool
    reported: bool

    @classmethod
    def from_domain(cls, p: Purchase) -> "PurchaseResponse":
        return cls(
            product_id=p.product_id,
            buyer=p.buyer,
            state=p.state.value,
            is_paid=p.is_paid,
            is_sold=p.is_sold,
            canceled=p.canceled,
            reported=p.reported,
        )


class SellerContactResponse(BaseModel):
    address: str
    location: str
    phone: str

    @classmethod
    def from_domain(cls, c: SellerContact) -> "SellerContactResponse":
        return cls(address=c.address, location=c.location, phone=c.phone)
