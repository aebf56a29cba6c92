"""Unit tests for the Purchase state projection."""

from src.em_common.enums import PurchaseState
from src.em_escrow.domain.models import Purchase


def test_new_pair_is_none() -> None:
    assert Purchase(product_id=1, buyer="0xb").state == PurchaseState.NONE


def test_paid() -> None:
    assert Purchase(1, "0xb", is_paid=True).state == PurchaseState.PAID


def test_sold_wins_over_paid() -> None:
    assert Purchase(1, "0xb", is_paid=True, is_sold=True).state == PurchaseState.SOLD


def test_canceled() -> None:
    assert Purchase(1, "0xb", canceled=True).state == PurchaseState.CANCELED


def test_repurchase_after_cancel_is_paid() -> None:
    p = Purchase(1, "0xb", is_paid=True, canceled=True, reported=True)
    assert p.state == PurchaseState.PAID
