"""Single-owner governance"""
import logging

from .constants import ZERO_ADDRESS
from .errors import InvalidBeneficiaryError, UnauthorizedError

logger = logging.getLogger(__name__)


class OwnerAccessControl:
    """The owner is the one governance actor; ownership can be handed over"""

    def __init__(self, owner: str):
        if not owner or owner == ZERO_ADDRESS:
            raise InvalidBeneficiaryError("owner is the zero address")
        self.owner = owner

    def governance(self) -> str:
        return self.owner

    def is_governance(self, caller: str) -> bool:
        return caller == self.owner

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        if not self.is_governance(caller):
            raise UnauthorizedError("caller is not the owner")
        if not new_owner or new_owner == ZERO_ADDRESS:
            raise InvalidBeneficiaryError("new owner is the zero address")
        logger.info(
            "Ownership transferred",
            extra={"event": "governance.ownership_transferred", "previous_owner": self.owner, "new_owner": new_owner},
        )
        self.owner = new_owner
