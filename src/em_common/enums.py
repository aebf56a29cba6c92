"""Global enums. Values are persisted, keep them stable."""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    AUTHORIZATION = "AUTHORIZATION"
    NOT_FOUND = "NOT_FOUND"
    STATE_CONFLICT = "STATE_CONFLICT"
    DEPENDENCY = "DEPENDENCY"
    SYSTEM = "SYSTEM"


class PurchaseState(str, Enum):
    """Lifecycle of one (product, buyer) pair."""
    NONE = "NONE"
    PAID = "PAID"
    SOLD = "SOLD"
    CANCELED = "CANCELED"


class SellerCounter(str, Enum):
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"
    REPORTED = "REPORTED"


class EventType(str, Enum):
    PRODUCT_CREATED = "ProductCreated"
    PRODUCT_PURCHASED = "ProductPurchased"
    PAYMENT_CONFIRMED = "PaymentConfirmed"
    PURCHASE_CANCELED = "PurchaseCanceled"
    CANCELLATION_REPORTED = "CancellationReported"
    SELLER_REGISTERED = "SellerRegistered"
    SELLER_RATED = "SellerRated"
    SELLER_BLOCKED = "SellerBlocked"
    SELLER_UNBLOCKED = "SellerUnblocked"
    FEES_WITHDRAWN = "FeesWithdrawn"


class TokenEntryType(str, Enum):
    MINT = "MINT"
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"
