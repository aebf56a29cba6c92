"""Unit tests for the single-owner capability model."""

import pytest

from src.em_access.access_control import AccessControl, AdminCapability
from src.em_common.errors import UnauthorizedError

OWNER = "0x" + "a" * 40
STRANGER = "0x" + "e" * 40


def test_owner_receives_capability() -> None:
    access = AccessControl(owner=OWNER)
    cap = access.authorize(OWNER)
    assert cap == AdminCapability(holder=OWNER)
    access.verify(cap)


def test_non_owner_rejected() -> None:
    access = AccessControl(owner=OWNER)
    with pytest.raises(UnauthorizedError):
        access.authorize(STRANGER)


def test_forged_capability_rejected_on_verify() -> None:
    access = AccessControl(owner=OWNER)
    with pytest.raises(UnauthorizedError):
        access.verify(AdminCapability(holder=STRANGER))


def test_empty_owner_rejected() -> None:
    with pytest.raises(ValueError):
        AccessControl(owner="")


def test_checksummed_owner_matches_lowercase_caller() -> None:
    checksummed = "0x52908400098527886E0F7030069857D2E4169EE7"
    access = AccessControl(owner=checksummed)

    cap = access.authorize(checksummed.lower())

    assert access.owner == checksummed.lower()
    access.verify(cap)
    access.verify(AdminCapability(holder=checksummed))


def test_checksummed_owner_still_rejects_stranger() -> None:
    access = AccessControl(owner="0x52908400098527886E0F7030069857D2E4169EE7")
    with pytest.raises(UnauthorizedError):
        access.authorize(STRANGER)
