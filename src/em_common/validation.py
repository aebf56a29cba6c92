from src.em_common.errors import FieldValidationError


def require_text(field: str, value: str) -> None:
    """Raise FieldValidationError(9003) if value is empty."""
    if not value:
        raise FieldValidationError(field, "must not be empty")


def require_positive(field: str, value: int) -> None:
    """Raise FieldValidationError(9003) if value is not > 0."""
    if value <= 0:
        raise FieldValidationError(field, f"must be greater than 0, got {value}")
