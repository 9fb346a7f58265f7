"""In-memory stablecoin ledger and collateral custody"""
import copy
from collections import defaultdict
from typing import Any, Dict

from ..constants import TOKEN_DECIMALS, TOKEN_NAME, TOKEN_SYMBOL, ZERO_ADDRESS
from ..errors import InsufficientBalanceError, InvalidAmountError, InvalidBeneficiaryError


class InMemoryTokenLedger:
    """ERC20-like frEUR balances plus the collateral held by the engine.

    Collateral balances stand in for the accounts' native coin; the engine
    pot (`custody`) holds whatever is locked in vaults.
    """

    def __init__(self, name: str = TOKEN_NAME, symbol: str = TOKEN_SYMBOL, decimals: int = TOKEN_DECIMALS):
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._balances: Dict[str, int] = defaultdict(int)
        self._collateral: Dict[str, int] = defaultdict(int)
        self._supply = 0
        self.custody = 0

    # stablecoin

    def mint(self, account: str, amount: int) -> None:
        _check_amount(amount)
        if not account or account == ZERO_ADDRESS:
            raise InvalidBeneficiaryError("mint to the zero address")
        self._balances[account] += amount
        self._supply += amount

    def burn(self, account: str, amount: int) -> None:
        _check_amount(amount)
        if self._balances[account] < amount:
            raise InsufficientBalanceError("burn amount exceeds balance")
        self._balances[account] -= amount
        self._supply -= amount

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def total_supply(self) -> int:
        return self._supply

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        _check_amount(amount)
        if not recipient or recipient == ZERO_ADDRESS:
            raise InvalidBeneficiaryError("transfer to the zero address")
        if self._balances[sender] < amount:
            raise InsufficientBalanceError("transfer amount exceeds balance")
        self._balances[sender] -= amount
        self._balances[recipient] += amount

    # collateral

    def fund_collateral(self, account: str, amount: int) -> None:
        """Credit an account with collateral from outside the system"""
        _check_amount(amount)
        self._collateral[account] += amount

    def lock_collateral(self, payer: str, amount: int) -> None:
        _check_amount(amount)
        if self._collateral[payer] < amount:
            raise InsufficientBalanceError("collateral amount exceeds balance")
        self._collateral[payer] -= amount
        self.custody += amount

    def release_collateral(self, recipient: str, amount: int) -> None:
        _check_amount(amount)
        if self.custody < amount:
            raise InsufficientBalanceError("collateral custody exhausted")
        self.custody -= amount
        self._collateral[recipient] += amount

    def collateral_balance_of(self, account: str) -> int:
        return self._collateral.get(account, 0)

    # rollback

    def snapshot(self) -> Dict[str, Any]:
        return {
            "balances": dict(self._balances),
            "collateral": dict(self._collateral),
            "supply": self._supply,
            "custody": self.custody,
        }

    def restore(self, state: Dict[str, Any]) -> None:
        state = copy.deepcopy(state)
        self._balances = defaultdict(int, state["balances"])
        self._collateral = defaultdict(int, state["collateral"])
        self._supply = state["supply"]
        self.custody = state["custody"]


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise InvalidAmountError("negative amount")
