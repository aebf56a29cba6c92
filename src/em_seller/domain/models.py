"""Domain models for em_seller — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass


@dataclass
class Seller:
    address: str
    name: str
    profile_uri: str
    confirmed_purchases: int = 0
    canceled_purchases: int = 0
    reported_purchases: int = 0
    rating: int = 0

    @property
    def is_registered(self) -> bool:
        return bool(self.name)


@dataclass
class SellerContact:
    address: str
    location: str
    phone: str


@dataclass
class BlockedSeller:
    address: str
    reason: str
