"""Pydantic schemas for em_token API requests/responses."""

from pydantic import BaseModel, Field

from src.em_common.units import units_to_display
from src.em_token.domain.models import TokenLedgerEntry


class ApproveRequest(BaseModel):
    amount: int = Field(..., ge=0, description="Allowance for escrow custody, smallest units")


class BalanceResponse(BaseModel):
    holder: str
    balance: int
    balance_display: str
    custody_allowance: int

    @classmethod
    def build(cls, holder: str, balance: int, allowance: int) -> "BalanceResponse":
        return cls(
            holder=holder,
            balance=balance,
            balance_display=units_to_display(balance),
            custody_allowance=allowance,
        )


class ApproveResponse(BaseModel):
    owner: str
    spender: str
    amount: int


class LedgerEntryOut(BaseModel):
    id: int
    entry_type: str
    amount: int
    amount_display: str
    balance_after: int
    counterparty: str | None

    @classmethod
    def from_domain(cls, e: TokenLedgerEntry) -> "LedgerEntryOut":
        return cls(
            id=e.id,
            entry_type=e.entry_type,
            amount=e.amount,
            amount_display=units_to_display(e.amount),
            balance_after=e.balance_after,
            counterparty=e.counterparty,
        )


class LedgerListResponse(BaseModel):
    items: list[LedgerEntryOut]
    next_cursor: int | None
    has_more: bool
