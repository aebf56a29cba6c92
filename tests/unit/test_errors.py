"""Unit tests for error codes, HTTP statuses and kinds."""

import pytest

from src.em_common.enums import ErrorKind
from src.em_common.errors import (
    AlreadyConfirmedError,
    AlreadyPaidError,
    AppError,
    FeeTransferFailedError,
    FieldValidationError,
    InvalidDestinationError,
    NotPaidError,
    OutOfStockError,
    PenaltyTransferFailedError,
    ProductNotFoundError,
    RatingExceededError,
    RefundFailedError,
    SelfPurchaseError,
    SellerBlockedError,
    SellerNotRegisteredError,
    TransferFailedError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    "error, code, status, kind",
    [
        (UnauthorizedError("0x1"), 1005, 403, ErrorKind.AUTHORIZATION),
        (SellerNotRegisteredError("0x1"), 2002, 403, ErrorKind.AUTHORIZATION),
        (SellerBlockedError("0x1"), 2003, 403, ErrorKind.AUTHORIZATION),
        (ProductNotFoundError(9), 3001, 404, ErrorKind.NOT_FOUND),
        (OutOfStockError(9), 3002, 409, ErrorKind.STATE_CONFLICT),
        (SelfPurchaseError(), 4001, 422, ErrorKind.VALIDATION),
        (AlreadyPaidError(1), 4002, 409, ErrorKind.STATE_CONFLICT),
        (NotPaidError(1), 4003, 409, ErrorKind.STATE_CONFLICT),
        (AlreadyConfirmedError(1), 4004, 409, ErrorKind.STATE_CONFLICT),
        (RatingExceededError("0x1"), 5004, 409, ErrorKind.STATE_CONFLICT),
        (InvalidDestinationError(), 6001, 422, ErrorKind.VALIDATION),
        (TransferFailedError(), 6002, 502, ErrorKind.DEPENDENCY),
        (RefundFailedError(), 6003, 502, ErrorKind.DEPENDENCY),
        (PenaltyTransferFailedError(), 6004, 502, ErrorKind.DEPENDENCY),
        (FeeTransferFailedError(), 6005, 502, ErrorKind.DEPENDENCY),
    ],
)
def test_error_contract(error: AppError, code: int, status: int, kind: ErrorKind) -> None:
    assert isinstance(error, AppError)
    assert error.code == code
    assert error.http_status == status
    assert error.kind == kind


def test_field_validation_carries_field() -> None:
    err = FieldValidationError("price", "must be greater than 0, got 0")
    assert err.code == 9003
    assert err.field == "price"
    assert "price" in err.message
