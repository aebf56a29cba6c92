"""Unified error codes and custom exceptions.

Every failure carries a numeric code and a closed ErrorKind so callers can
tell validation, authorization, lifecycle and dependency failures apart.

Error code ranges:
  1xxx: Auth/Access
  2xxx: Seller registry
  3xxx: Product catalog
  4xxx: Escrow
  5xxx: Reputation
  6xxx: Treasury / token transfers
  9xxx: System
"""

from src.em_common.enums import ErrorKind


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        kind: ErrorKind = ErrorKind.SYSTEM,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.kind = kind
        super().__init__(message)


# --- 1xxx: Auth/Access ---

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409, ErrorKind.STATE_CONFLICT)


class AddressExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Address already bound to an account", 409, ErrorKind.STATE_CONFLICT)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401, ErrorKind.AUTHORIZATION)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403, ErrorKind.AUTHORIZATION)


class UnauthorizedError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(
            1005, f"Caller {caller} lacks the administrative capability", 403,
            ErrorKind.AUTHORIZATION,
        )


# --- 2xxx: Seller registry ---

class SellerAlreadyRegisteredError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(2001, f"Seller already registered: {address}", 409, ErrorKind.STATE_CONFLICT)


class SellerNotRegisteredError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(2002, f"Seller not registered: {address}", 403, ErrorKind.AUTHORIZATION)


class SellerBlockedError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(2003, f"Seller is blocked: {address}", 403, ErrorKind.AUTHORIZATION)


class SellerAlreadyBlockedError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(2004, f"Seller already blocked: {address}", 409, ErrorKind.STATE_CONFLICT)


class SellerNotBlockedError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(2005, f"Seller is not blocked: {address}", 409, ErrorKind.STATE_CONFLICT)


class SellerNotFoundError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(2006, f"Seller not found: {address}", 404, ErrorKind.NOT_FOUND)


# --- 3xxx: Product catalog ---

class ProductNotFoundError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(3001, f"Product not found: {product_id}", 404, ErrorKind.NOT_FOUND)


class OutOfStockError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(3002, f"Product out of stock: {product_id}", 409, ErrorKind.STATE_CONFLICT)


# --- 4xxx: Escrow ---

class SelfPurchaseError(AppError):
    def __init__(self) -> None:
        super().__init__(4001, "Seller cannot purchase own product", 422, ErrorKind.VALIDATION)


class AlreadyPaidError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(
            4002, f"Product {product_id} already purchased by this buyer", 409,
            ErrorKind.STATE_CONFLICT,
        )


class NotPaidError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(
            4003, f"No paid purchase of product {product_id} for this buyer", 409,
            ErrorKind.STATE_CONFLICT,
        )


class AlreadyConfirmedError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(
            4004, f"Purchase of product {product_id} already confirmed", 409,
            ErrorKind.STATE_CONFLICT,
        )


class AlreadySoldError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(
            4005, f"Purchase of product {product_id} is sold and cannot be cancelled", 409,
            ErrorKind.STATE_CONFLICT,
        )


class PurchaseNotFoundError(AppError):
    def __init__(self, product_id: int, buyer: str) -> None:
        super().__init__(
            4006, f"No purchase of product {product_id} by {buyer}", 404, ErrorKind.NOT_FOUND
        )


# --- 5xxx: Reputation ---

class NotCanceledError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(
            5001, f"Purchase of product {product_id} was never cancelled", 409,
            ErrorKind.STATE_CONFLICT,
        )


class AlreadyReportedError(AppError):
    def __init__(self, product_id: int) -> None:
        super().__init__(
            5002, f"Cancellation of product {product_id} already reported", 409,
            ErrorKind.STATE_CONFLICT,
        )


class NoConfirmedPurchasesError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(
            5003, f"Seller {address} has no confirmed purchases", 409, ErrorKind.STATE_CONFLICT
        )


class RatingExceededError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(
            5004, f"Seller {address} rating cannot exceed confirmed purchases", 409,
            ErrorKind.STATE_CONFLICT,
        )


# --- 6xxx: Treasury / token transfers ---

class InvalidDestinationError(AppError):
    def __init__(self) -> None:
        super().__init__(6001, "Invalid fee destination address", 422, ErrorKind.VALIDATION)


class TransferFailedError(AppError):
    def __init__(self, detail: str = "Token transfer failed") -> None:
        super().__init__(6002, detail, 502, ErrorKind.DEPENDENCY)


class RefundFailedError(AppError):
    def __init__(self) -> None:
        super().__init__(6003, "Refund transfer to buyer failed", 502, ErrorKind.DEPENDENCY)


class PenaltyTransferFailedError(AppError):
    def __init__(self) -> None:
        super().__init__(6004, "Penalty transfer to seller failed", 502, ErrorKind.DEPENDENCY)


class FeeTransferFailedError(AppError):
    def __init__(self) -> None:
        super().__init__(6005, "Fee withdrawal transfer failed", 502, ErrorKind.DEPENDENCY)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500, ErrorKind.SYSTEM)


class FieldValidationError(AppError):
    def __init__(self, field: str, detail: str) -> None:
        super().__init__(9003, f"Invalid {field}: {detail}", 422, ErrorKind.VALIDATION)
        self.field = field
