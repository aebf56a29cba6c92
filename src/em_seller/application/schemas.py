"""Pydantic schemas for em_seller API requests/responses."""

from pydantic import BaseModel, Field

from src.em_seller.domain.models import BlockedSeller, Seller


class RegisterSellerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    profile_uri: str = Field(..., min_length=1, max_length=2048)
    location: str = Field(..., min_length=1, max_length=500)
    phone: str = Field(..., min_length=1, max_length=64)


class SellerResponse(BaseModel):
    address: str
    name: str
    profile_uri: str
    confirmed_purchases: int
    canceled_purchases: int
    reported_purchases: int
    rating: int

    @classmethod
    def from_domain(cls, s: Seller) -> "SellerResponse":
        return cls(
            address=s.address,
            name=s.name,
            profile_uri=s.profile_uri,
            confirmed_purchases=s.confirmed_purchases,
            canceled_purchases=s.canceled_purchases,
            reported_purchases=s.reported_purchases,
            rating=s.rating,
        )


class BlockStatusResponse(BaseModel):
    address: str
    is_blocked: bool


class BlockedSellerResponse(BaseModel):
    address: str
    reason: str

    @classmethod
    def from_domain(cls, b: BlockedSeller) -> "BlockedSellerResponse":
        return cls(address=b.address, reason=b.reason)


