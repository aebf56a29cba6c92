"""Marketplace notifications.

Events are written to the outbox inside the same transaction as the state
change that produced them, so a rolled-back operation never leaves an event
behind.
"""

from dataclasses import dataclass, field
from typing import Any

from src.em_common.enums import EventType


@dataclass(frozen=True)
class DomainEvent:
    event_type: EventType
    subject: str              # seller address or product id, used for filtering
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class StoredEvent:
    id: int
    event_type: str
    subject: str
    payload: dict[str, Any]


def product_created(
    product_id: int,
    name: str,
    image_url: str,
    price: int,
    seller: str,
    seller_name: str,
    inventory: int,
) -> DomainEvent:
    return DomainEvent(
        EventType.PRODUCT_CREATED,
        str(product_id),
        {
            "id": product_id,
            "name": name,
            "image_url": image_url,
            "price": price,
            "seller": seller,
            "seller_name": seller_name,
            "inventory": inventory,
        },
    )


def product_purchased(
    product_id: int, name: str, price: int, seller: str, buyer: str
) -> DomainEvent:
    return DomainEvent(
        EventType.PRODUCT_PURCHASED,
        str(product_id),
        {
            "id": product_id,
            "name": name,
            "price": price,
            "seller": seller,
            "buyer": buyer,
            "is_paid": True,
        },
    )


def payment_confirmed(
    product_id: int, name: str, price: int, seller: str, buyer: str
) -> DomainEvent:
    return DomainEvent(
        EventType.PAYMENT_CONFIRMED,
        str(product_id),
        {"id": product_id, "name": name, "price": price, "seller": seller, "buyer": buyer},
    )


def purchase_canceled(
    product_id: int,
    seller: str,
    buyer: str,
    refund: int,
    penalty_to_seller: int,
    fee: int,
) -> DomainEvent:
    return DomainEvent(
        EventType.PURCHASE_CANCELED,
        str(product_id),
        {
            "id": product_id,
            "seller": seller,
            "buyer": buyer,
            "refund": refund,
            "penalty_to_seller": penalty_to_seller,
            "fee": fee,
        },
    )


def cancellation_reported(
    product_id: int, seller: str, buyer: str, reported_purchases: int
) -> DomainEvent:
    return DomainEvent(
        EventType.CANCELLATION_REPORTED,
        str(product_id),
        {
            "id": product_id,
            "seller": seller,
            "buyer": buyer,
            "reported_purchases": reported_purchases,
        },
    )


def seller_registered(seller: str, name: str, profile_uri: str) -> DomainEvent:
    return DomainEvent(
        EventType.SELLER_REGISTERED,
        seller,
        {"seller": seller, "name": name, "profile_uri": profile_uri},
    )


def seller_rated(seller: str, rating: int) -> DomainEvent:
    return DomainEvent(EventType.SELLER_RATED, seller, {"seller": seller, "rating": rating})


def seller_blocked(seller: str, reason: str) -> DomainEvent:
    return DomainEvent(EventType.SELLER_BLOCKED, seller, {"seller": seller, "reason": reason})


def seller_unblocked(seller: str) -> DomainEvent:
    return DomainEvent(EventType.SELLER_UNBLOCKED, seller, {"seller": seller})


def fees_withdrawn(destination: str, amount: int) -> DomainEvent:
    return DomainEvent(
        EventType.FEES_WITHDRAWN,
        destination,
        {"destination": destination, "amount": amount},
    )
