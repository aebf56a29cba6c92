"""Sale fee and cancellation penalty arithmetic.

All shares use floor division (value * percent // 100). The remainder stays
with the party not receiving the share: the seller keeps the remainder of
the sale fee, the buyer keeps the remainder of the penalty, and the seller
keeps the remainder of the fee charged on the penalty.
"""

from dataclasses import dataclass

from src.em_common.units import percent_of

SALE_FEE_PERCENT = 5
CANCELLATION_PENALTY_PERCENT = 10
PENALTY_FEE_PERCENT = 3


@dataclass(frozen=True)
class SaleSplit:
    fee: int
    payout: int  # to the seller


@dataclass(frozen=True)
class CancellationSplit:
    penalty: int
    refund: int             # to the buyer
    fee_on_penalty: int     # to the treasury
    penalty_to_seller: int


def calc_sale_split(price: int) -> SaleSplit:
    fee = percent_of(price, SALE_FEE_PERCENT)
    return SaleSplit(fee=fee, payout=price - fee)


def calc_cancellation_split(price: int) -> CancellationSplit:
    """100_000000 -> refund 90_000000, seller 9_700000, fee 300000."""
    penalty = percent_of(price, CANCELLATION_PENALTY_PERCENT)
    fee_on_penalty = percent_of(penalty, PENALTY_FEE_PERCENT)
    return CancellationSplit(
        penalty=penalty,
        refund=price - penalty,
        fee_on_penalty=fee_on_penalty,
        penalty_to_seller=penalty - fee_on_penalty,
    )
