"""Integer arithmetic utilities for token amounts.

All prices, fees and balances are int in the token's smallest unit
(6 fractional digits). No float, no Decimal.
"""

TOKEN_DECIMALS = 6
UNITS_PER_TOKEN = 10**TOKEN_DECIMALS


def percent_of(value: int, percent: int) -> int:
    """Floor share of value: value * percent // 100.

    The remainder is intentionally left with whoever is NOT receiving the share.
    """
    if value < 0 or percent < 0:
        raise ValueError(f"percent_of expects non-negative inputs, got {value}, {percent}")
    return value * percent // 100


def units_to_display(units: int) -> str:
    """Convert smallest units to display string: 95000000 -> '95.000000', -1 -> '-0.000001'."""
    if units < 0:
        return "-" + units_to_display(-units)
    return f"{units // UNITS_PER_TOKEN:,}.{units % UNITS_PER_TOKEN:0{TOKEN_DECIMALS}d}"
