"""Domain models for em_token — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass

NULL_ADDRESS = "0x" + "0" * 40


def is_null_address(address: str | None) -> bool:
    return not address or address.lower() == NULL_ADDRESS


@dataclass
class TokenLedgerEntry:
    id: int
    holder: str
    entry_type: str          # TokenEntryType value
    amount: int              # positive=income negative=expense
    balance_after: int
    counterparty: str | None = None
