"""Pydantic schemas for em_reputation API responses."""

from pydantic import BaseModel

from src.em_reputation.application.service import ReportOutcome


class ReportResponse(BaseModel):
    seller: str
    reported_purchases: int
    confirmed_purchases: int
    auto_blocked: bool

    @classmethod
    def from_outcome(cls, outcome: ReportOutcome) -> "ReportResponse":
        return cls(
            seller=outcome.seller.address,
            reported_purchases=outcome.seller.reported_purchases,
            confirmed_purchases=outcome.seller.confirmed_purchases,
            auto_blocked=outcome.auto_blocked,
        )


class RatingResponse(BaseModel):
    seller: str
    rating: int
