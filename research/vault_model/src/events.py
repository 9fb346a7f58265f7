"""Notifications emitted by state-changing operations"""
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Transfer:
    """Stablecoin movement; sender is the zero address on issuance, recipient on burn"""
    sender: str
    recipient: str
    value: int


@dataclass(frozen=True)
class BurnFeeChange:
    caller: str
    fee: int


@dataclass(frozen=True)
class CollRatioChange:
    caller: str
    ratio: int


@dataclass(frozen=True)
class MaxInstalmentPeriodChanged:
    caller: str
    period: int


@dataclass(frozen=True)
class MinInstalmentAmountChanged:
    caller: str
    amount: int


@dataclass(frozen=True)
class OracleChange:
    caller: str
    oracle: Any


@dataclass(frozen=True)
class VaultLiquidated:
    minter: str
    liquidator: str
    debt_repaid: int
    collateral_seized: int


Event = Union[
    Transfer,
    BurnFeeChange,
    CollRatioChange,
    MaxInstalmentPeriodChanged,
    MinInstalmentAmountChanged,
    OracleChange,
    VaultLiquidated,
]
