"""Checked arithmetic and ratio helpers, cross-checked against float references"""
import numpy as np
import pytest

from vault_model.src.constants import UINT256_MAX, WAD
from vault_model.src.errors import ErrorKind, MathOverflowError
from vault_model.src.math_utils import (
    burn_fee,
    checked_add,
    checked_div,
    checked_div_up,
    checked_mul,
    checked_sub,
    collateral_ratio,
    collateral_shortfall,
    debt_for_collateral,
)


def test_checked_operations_reject_out_of_range_results():
    assert checked_add(UINT256_MAX - 1, 1) == UINT256_MAX
    with pytest.raises(MathOverflowError):
        checked_add(UINT256_MAX, 1)
    with pytest.raises(MathOverflowError):
        checked_mul(2**200, 2**60)
    with pytest.raises(MathOverflowError):
        checked_sub(1, 2)
    with pytest.raises(MathOverflowError) as excinfo:
        checked_div(1, 0)
    assert excinfo.value.kind is ErrorKind.ARITHMETIC_OVERFLOW


def test_division_truncates_toward_zero():
    assert checked_div(7, 2) == 3
    assert checked_div(2, 3) == 0


@pytest.mark.parametrize("collateral,price,ratio", [
    (WAD, 500, 120),
    (WAD // 2, 500, 120),
    (3 * WAD, 1234, 150),
    (7 * WAD // 10, 2000, 175),
])
def test_debt_for_collateral_matches_float_reference(collateral, price, ratio):
    debt = debt_for_collateral(collateral, price, ratio)
    expected = collateral / WAD * price / (ratio / 100)
    assert np.isclose(debt / WAD, expected, rtol=1e-12)
    # truncation happens before scaling back up, so the debt is a multiple of 100
    assert debt % 100 == 0
    assert debt <= collateral * price * 100 // ratio


def test_debt_for_one_unit_at_500():
    assert debt_for_collateral(WAD, 500, 120) == 416_666_666_666_666_666_600


def test_collateral_ratio():
    debt = debt_for_collateral(WAD, 500, 120)
    assert collateral_ratio(WAD, debt, 500) == 120
    assert collateral_ratio(WAD, debt, 400) == 96
    assert collateral_ratio(WAD, 0, 500) is None


def test_division_rounding_up():
    assert checked_div_up(7, 2) == 4
    assert checked_div_up(6, 2) == 3
    assert checked_div_up(0, 5) == 0
    with pytest.raises(MathOverflowError):
        checked_div_up(1, 0)


def test_collateral_shortfall_restores_required_ratio():
    debt = debt_for_collateral(WAD, 500, 120)
    shortfall = collateral_shortfall(WAD, debt, 400, 120)
    assert shortfall == WAD // 4
    assert collateral_ratio(WAD + shortfall, debt, 400) == 120
    # one wei less and the vault stays below the requirement
    assert collateral_ratio(WAD + shortfall - 1, debt, 400) == 119
    # an over-collateralized vault has nothing missing
    assert collateral_shortfall(WAD, debt, 600, 120) == 0


@pytest.mark.parametrize("price,ratio", [
    (400, 120),
    (499, 120),
    (333, 150),
    (1, 175),
])
def test_covering_the_shortfall_reaches_the_required_ratio(price, ratio):
    debt = debt_for_collateral(WAD, 500, 120)
    shortfall = collateral_shortfall(WAD, debt, price, ratio)
    assert shortfall > 0
    assert collateral_ratio(WAD + shortfall, debt, price) >= ratio
    assert collateral_ratio(WAD + shortfall - 1, debt, price) < ratio


def test_burn_fee():
    assert burn_fee(330_000_000_000_000_000, 100) == 3_300_000_000_000_000
    assert burn_fee(WAD, 0) == 0
    assert burn_fee(99, 100) == 0
