"""Checked integer arithmetic and ratio/fee helpers

All amounts are WAD scaled integers (18 decimals). Divisions truncate
toward zero except the collateral shortfall, which rounds up; nothing in
here ever touches a float.
"""
from typing import Optional

from .constants import BPS_SCALE, PERCENT_SCALE, UINT256_MAX
from .errors import MathOverflowError


def checked_add(a: int, b: int) -> int:
    """Add with overflow checking"""
    result = a + b
    if result > UINT256_MAX:
        raise MathOverflowError("Arithmetic overflow in addition")
    return result


def checked_sub(a: int, b: int) -> int:
    """Subtract with underflow checking"""
    if b > a:
        raise MathOverflowError("Arithmetic underflow in subtraction")
    return a - b


def checked_mul(a: int, b: int) -> int:
    """Multiply with overflow checking"""
    result = a * b
    if result > UINT256_MAX:
        raise MathOverflowError("Arithmetic overflow in multiplication")
    return result


def checked_div(a: int, b: int) -> int:
    """Divide with zero checking"""
    if b == 0:
        raise MathOverflowError("Division by zero")
    return a // b


def checked_div_up(a: int, b: int) -> int:
    """Divide with zero checking, rounding up"""
    if b == 0:
        raise MathOverflowError("Division by zero")
    return -(-a // b)


def collateral_ratio(collateral: int, debt: int, price: int) -> Optional[int]:
    """Collateralization ratio in whole percent, None when there is no debt"""
    if debt == 0:
        return None
    # ratio = collateral * price * 100 / debt
    return checked_div(checked_mul(checked_mul(collateral, price), PERCENT_SCALE), debt)


def debt_for_collateral(collateral: int, price: int, required_ratio: int) -> int:
    """Stablecoin issued against a deposit at the required ratio"""
    # truncates before scaling back up, which leaves dust below 100 wei
    return checked_mul(
        checked_div(checked_mul(collateral, price), required_ratio),
        PERCENT_SCALE,
    )


def collateral_shortfall(collateral: int, debt: int, price: int, required_ratio: int) -> int:
    """Collateral missing for the vault to reach the required ratio"""
    # required_collateral = debt * ratio / (100 * price), rounded up so the
    # topped-up vault never reads below the required ratio
    required_collateral = checked_div_up(
        checked_mul(debt, required_ratio),
        checked_mul(PERCENT_SCALE, price),
    )
    return max(required_collateral - collateral, 0)


def burn_fee(unlocked: int, burn_fee_bps: int) -> int:
    """Fee (in collateral) charged on collateral released by a repayment"""
    return checked_div(checked_mul(unlocked, burn_fee_bps), BPS_SCALE)
