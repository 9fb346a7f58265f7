"""Argument and price checks shared by the instructions"""
from typing import Optional

from ..constants import ZERO_ADDRESS
from ..errors import InvalidAmountError, InvalidBeneficiaryError, InvalidPriceError
from ..state.governance_config import GovernanceConfig


def require_integer(amount: int) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise InvalidAmountError(f"amount must be an integer, got {amount!r}")


def require_amount(amount: int) -> None:
    require_integer(amount)
    if amount <= 0:
        raise InvalidAmountError(f"amount must be a positive integer, got {amount!r}")


def require_account(account: Optional[str]) -> None:
    if not account or account == ZERO_ADDRESS:
        raise InvalidBeneficiaryError("beneficiary cannot be a zero address")


def read_price(config: GovernanceConfig) -> int:
    """Query the oracle once; the price is used for the whole operation"""
    price = config.oracle.get_price()
    if not isinstance(price, int) or isinstance(price, bool) or price <= 0:
        raise InvalidPriceError(f"oracle returned an invalid price: {price!r}")
    return price
