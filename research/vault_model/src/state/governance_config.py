"""Governance parameters"""
from dataclasses import dataclass

from ..constants import (
    DEFAULT_BURN_FEE,
    DEFAULT_COLL_RATIO,
    DEFAULT_MAX_INSTALMENT_PERIOD,
    DEFAULT_MIN_INSTALMENT_AMOUNT,
)
from ..interfaces import PriceOracle


@dataclass(frozen=True)
class GovernanceConfig:
    """Snapshot of every parameter governance can change.

    Frozen: a setter swaps in a new snapshot, so an operation that grabbed
    one keeps seeing the same values until it finishes.
    """
    oracle: PriceOracle
    burn_fee_bps: int = DEFAULT_BURN_FEE
    required_ratio: int = DEFAULT_COLL_RATIO  # whole percent
    max_instalment_period: int = DEFAULT_MAX_INSTALMENT_PERIOD  # seconds
    min_instalment_amount: int = DEFAULT_MIN_INSTALMENT_AMOUNT  # WAD scaled frEUR
