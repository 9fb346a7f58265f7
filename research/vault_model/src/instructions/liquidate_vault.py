"""Seize a delinquent, under-collateralized vault"""
from dataclasses import dataclass
from typing import Callable

from ..constants import ZERO_ADDRESS
from ..errors import (
    AmountTooLowError,
    InstalmentPeriodNotExceededError,
    InsufficientBalanceError,
    RatioNotBelowThresholdError,
)
from ..events import Event, Transfer, VaultLiquidated
from ..interfaces import TokenLedger
from ..state.governance_config import GovernanceConfig
from ..state.vault import Vault
from ..state.vault_store import VaultStore
from .checks import read_price, require_account, require_integer


@dataclass(frozen=True)
class LiquidationResult:
    debt_repaid: int  # frEUR burned from the liquidator
    collateral_seized: int  # collateral paid to the liquidator


def check_liquidation(vault: Vault, stablecoin_amount: int, price: int, config: GovernanceConfig, now: int) -> None:
    """Raise the first failing liquidation condition, in gate order"""
    if stablecoin_amount < vault.debt_amount:
        raise AmountTooLowError("The entered stablecoin amount is too low")

    ratio = vault.ratio(price)
    if ratio is None or ratio >= config.required_ratio:
        raise RatioNotBelowThresholdError("Collateralization ratio is not below the required value")

    if now - vault.last_instalment <= config.max_instalment_period:
        raise InstalmentPeriodNotExceededError("Max time between instalments not exceeded")


def liquidate_vault(
    store: VaultStore,
    ledger: TokenLedger,
    config: GovernanceConfig,
    liquidator: str,
    minter: str,
    stablecoin_amount: int,
    now: int,
    emit: Callable[[Event], None],
) -> LiquidationResult:
    """Burn the minter's whole debt from the liquidator and hand over all collateral.

    The gate decides the reported reason for any integer amount: zero
    against a vault with debt is `AmountTooLow`, not `InvalidAmount`.
    """
    require_integer(stablecoin_amount)
    require_account(minter)

    price = read_price(config)
    vault = store.get(minter)
    check_liquidation(vault, stablecoin_amount, price, config, now)

    debt = vault.debt_amount
    if ledger.balance_of(liquidator) < debt:
        raise InsufficientBalanceError("liquidator cannot cover the debt")

    ledger.burn(liquidator, debt)
    emit(Transfer(liquidator, ZERO_ADDRESS, debt))

    seized = vault.collateral_amount
    store.clear(minter, now)
    if seized > 0:
        ledger.release_collateral(liquidator, seized)
    emit(VaultLiquidated(minter, liquidator, debt, seized))

    return LiquidationResult(debt_repaid=debt, collateral_seized=seized)
