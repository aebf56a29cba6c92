"""Single-owner administrative capability.

The owner address is fixed at construction and compared case-insensitively.
Administrative operations take an AdminCapability value explicitly instead of
reading an ambient caller; the value is re-verified by every operation that
accepts it.
"""

from dataclasses import dataclass

from config.settings import settings
from src.em_common.errors import UnauthorizedError


@dataclass(frozen=True)
class AdminCapability:
    holder: str


class AccessControl:
    def __init__(self, owner: str) -> None:
        if not owner:
            raise ValueError("AccessControl requires a non-empty owner address")
        self._owner = owner.lower()

    @property
    def owner(self) -> str:
        return self._owner

    def is_owner(self, caller: str) -> bool:
        return caller.lower() == self._owner

    def authorize(self, caller: str) -> AdminCapability:
        """Issue the capability to the owner; anyone else gets UnauthorizedError."""
        if not self.is_owner(caller):
            raise UnauthorizedError(caller)
        return AdminCapability(holder=caller)

    def verify(self, capability: AdminCapability) -> None:
        if not self.is_owner(capability.holder):
            raise UnauthorizedError(capability.holder)


access_control = AccessControl(owner=settings.OWNER_ADDRESS)
