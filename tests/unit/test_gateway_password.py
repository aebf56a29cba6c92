"""Unit tests for password hashing."""

from src.em_gateway.auth.password import hash_password, verify_password


def test_hash_is_not_plaintext() -> None:
    hashed = hash_password("Secret123")
    assert hashed != "Secret123"
    assert hashed.startswith("$2")


def test_verify_correct_password() -> None:
    assert verify_password("Secret123", hash_password("Secret123"))


def test_verify_wrong_password() -> None:
    assert not verify_password("Secret124", hash_password("Secret123"))
