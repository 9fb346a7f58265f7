"""
Interfaces of the collaborators the vault engine is built against.

The engine never inherits token or ownership behaviour; it is handed
objects satisfying these protocols. Implementations are called while
the engine holds its lock, so they must not call back into the engine.
"""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PriceOracle(Protocol):
    """Source of the collateral price"""

    def get_price(self) -> int:
        """frEUR per one whole unit of collateral, as a positive integer"""
        ...


@runtime_checkable
class TokenLedger(Protocol):
    """Balances of the stablecoin and custody of the collateral asset"""

    name: str
    symbol: str
    decimals: int

    def mint(self, account: str, amount: int) -> None:
        ...

    def burn(self, account: str, amount: int) -> None:
        ...

    def balance_of(self, account: str) -> int:
        ...

    def total_supply(self) -> int:
        ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        ...

    def lock_collateral(self, payer: str, amount: int) -> None:
        """Move collateral from the payer into engine custody"""
        ...

    def release_collateral(self, recipient: str, amount: int) -> None:
        """Pay collateral out of engine custody"""
        ...

    def collateral_balance_of(self, account: str) -> int:
        ...

    def snapshot(self) -> Any:
        """Opaque image of every balance, used to undo a failed operation"""
        ...

    def restore(self, state: Any) -> None:
        ...


@runtime_checkable
class AccessControl(Protocol):
    """Decides who may change governance parameters"""

    def governance(self) -> str:
        """Account currently acting as governance; burn fees are paid to it"""
        ...

    def is_governance(self, caller: str) -> bool:
        ...
