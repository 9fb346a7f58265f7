"""Vault state management"""
from dataclasses import dataclass
from typing import Optional

from ..math_utils import collateral_ratio


@dataclass
class Vault:
    """Collateral locked by a minter and the stablecoin debt it backs"""
    collateral_amount: int = 0  # WAD scaled collateral
    debt_amount: int = 0  # WAD scaled frEUR
    last_instalment: int = 0  # unix seconds of creation or last repayment

    def is_empty(self) -> bool:
        """Fully repaid, liquidated or never opened"""
        return self.collateral_amount == 0 and self.debt_amount == 0

    def ratio(self, price: int) -> Optional[int]:
        """Current collateralization ratio in whole percent"""
        return collateral_ratio(self.collateral_amount, self.debt_amount, price)
