"""Governance-only parameter changes"""
from dataclasses import replace
from typing import Callable

from ..constants import BPS_SCALE
from ..errors import InvalidAmountError, UnauthorizedError
from ..events import (
    BurnFeeChange,
    CollRatioChange,
    Event,
    MaxInstalmentPeriodChanged,
    MinInstalmentAmountChanged,
    OracleChange,
)
from ..interfaces import AccessControl, PriceOracle
from ..state.governance_config import GovernanceConfig


def _require_governance(access: AccessControl, caller: str) -> None:
    if not access.is_governance(caller):
        raise UnauthorizedError("caller is not the owner")


def _require_non_negative(value: int, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise InvalidAmountError(f"{name} must be a non-negative integer, got {value!r}")


def change_burn_fee(
    config: GovernanceConfig, access: AccessControl, caller: str, fee: int, emit: Callable[[Event], None]
) -> GovernanceConfig:
    _require_governance(access, caller)
    _require_non_negative(fee, "burn fee")
    if fee > BPS_SCALE:
        raise InvalidAmountError("burn fee cannot exceed 10000 bps")
    emit(BurnFeeChange(caller, fee))
    return replace(config, burn_fee_bps=fee)


def change_coll_ratio(
    config: GovernanceConfig, access: AccessControl, caller: str, ratio: int, emit: Callable[[Event], None]
) -> GovernanceConfig:
    _require_governance(access, caller)
    _require_non_negative(ratio, "collateralization ratio")
    if ratio == 0:
        raise InvalidAmountError("collateralization ratio cannot be 0")
    emit(CollRatioChange(caller, ratio))
    return replace(config, required_ratio=ratio)


def change_max_instalment_period(
    config: GovernanceConfig, access: AccessControl, caller: str, period: int, emit: Callable[[Event], None]
) -> GovernanceConfig:
    _require_governance(access, caller)
    _require_non_negative(period, "instalment period")
    emit(MaxInstalmentPeriodChanged(caller, period))
    return replace(config, max_instalment_period=period)


def change_min_instalment_amount(
    config: GovernanceConfig, access: AccessControl, caller: str, amount: int, emit: Callable[[Event], None]
) -> GovernanceConfig:
    _require_governance(access, caller)
    _require_non_negative(amount, "instalment amount")
    emit(MinInstalmentAmountChanged(caller, amount))
    return replace(config, min_instalment_amount=amount)


def change_oracle(
    config: GovernanceConfig, access: AccessControl, caller: str, oracle: PriceOracle, emit: Callable[[Event], None]
) -> GovernanceConfig:
    _require_governance(access, caller)
    if oracle is None:
        raise InvalidAmountError("oracle cannot be empty")
    emit(OracleChange(caller, oracle))
    return replace(config, oracle=oracle)
