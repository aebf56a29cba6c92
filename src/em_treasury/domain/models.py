"""Domain model for the fee treasury singleton."""

from dataclasses import dataclass


@dataclass
class FeeTreasury:
    accrued: int = 0            # uncollected fees, held by escrow custody
    total_accrued: int = 0
    total_withdrawn: int = 0
