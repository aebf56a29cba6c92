"""Unit tests for sale fee and cancellation penalty splits."""

import pytest

from src.em_escrow.domain.fees import (
    CANCELLATION_PENALTY_PERCENT,
    PENALTY_FEE_PERCENT,
    SALE_FEE_PERCENT,
    calc_cancellation_split,
    calc_sale_split,
)


def test_fixed_percentages() -> None:
    assert SALE_FEE_PERCENT == 5
    assert CANCELLATION_PENALTY_PERCENT == 10
    assert PENALTY_FEE_PERCENT == 3


class TestSaleSplit:
    def test_hundred_tokens(self) -> None:
        split = calc_sale_split(100_000000)
        assert split.fee == 5_000000
        assert split.payout == 95_000000

    def test_seller_keeps_fee_remainder(self) -> None:
        split = calc_sale_split(19)
        assert split.fee == 0
        assert split.payout == 19

    @pytest.mark.parametrize("price", [1, 7, 20, 101, 99_999999])
    def test_parts_sum_to_price(self, price: int) -> None:
        split = calc_sale_split(price)
        assert split.fee + split.payout == price


class TestCancellationSplit:
    def test_hundred_tokens(self) -> None:
        split = calc_cancellation_split(100_000000)
        assert split.penalty == 10_000000
        assert split.refund == 90_000000
        assert split.fee_on_penalty == 300_000
        assert split.penalty_to_seller == 9_700000

    def test_buyer_keeps_penalty_remainder(self) -> None:
        split = calc_cancellation_split(19)
        assert split.penalty == 1
        assert split.refund == 18

    def test_seller_keeps_fee_on_penalty_remainder(self) -> None:
        split = calc_cancellation_split(333)
        assert split.penalty == 33
        assert split.fee_on_penalty == 0
        assert split.penalty_to_seller == 33

    @pytest.mark.parametrize("price", [1, 10, 1000, 123_456789])
    def test_parts_sum_to_price(self, price: int) -> None:
        split = calc_cancellation_split(price)
        assert split.refund + split.penalty_to_seller + split.fee_on_penalty == price
