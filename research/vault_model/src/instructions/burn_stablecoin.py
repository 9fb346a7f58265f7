"""Repay vault debt, release collateral and collect the burn fee"""
from dataclasses import dataclass
from typing import Callable

from ..constants import PERCENT_SCALE, ZERO_ADDRESS
from ..errors import BelowMinimumInstalmentError, InsufficientBalanceError, NoOutstandingDebtError
from ..events import Event, Transfer
from ..interfaces import TokenLedger
from ..math_utils import burn_fee, checked_div, checked_mul, checked_sub
from ..state.governance_config import GovernanceConfig
from ..state.vault import Vault
from ..state.vault_store import VaultStore
from .checks import read_price, require_account, require_amount


@dataclass(frozen=True)
class RepayResult:
    burned: int  # frEUR burned from the payer
    unlocked: int  # collateral released from the vault, fee included
    fee: int  # part of `unlocked` paid to governance


def unlocked_collateral(
    collateral: int,
    debt: int,
    repaid: int,
    price: int,
    required_ratio: int,
) -> int:
    """Collateral released when `repaid` out of `debt` is paid back.

    A full repayment releases everything. A partial one releases the
    repaid share (in whole percent), then resizes what stays locked so
    the vault ends up as close to the required ratio as truncation
    allows: over-collateralized vaults get more back, under-collateralized
    ones less, possibly nothing.
    """
    if repaid == debt:
        return collateral

    share = checked_div(checked_mul(repaid, PERCENT_SCALE), debt)
    unlocked = checked_div(checked_mul(share, collateral), PERCENT_SCALE)

    current_ratio = checked_div(checked_mul(checked_mul(collateral, price), PERCENT_SCALE), debt)
    if current_ratio == required_ratio:
        return unlocked
    if current_ratio == 0:
        return 0

    # retained = (collateral - unlocked) * required / current
    retained = checked_div(
        checked_div(
            checked_mul(checked_mul(collateral - unlocked, required_ratio), PERCENT_SCALE),
            current_ratio,
        ),
        PERCENT_SCALE,
    )
    return collateral - min(retained, collateral)


def burn_stablecoin(
    store: VaultStore,
    ledger: TokenLedger,
    config: GovernanceConfig,
    fee_recipient: str,
    payer: str,
    stablecoin_amount: int,
    beneficiary: str,
    now: int,
    emit: Callable[[Event], None],
) -> RepayResult:
    """Burn up to `stablecoin_amount` frEUR of `payer` against `beneficiary`'s debt.

    The amount actually burned is capped by the payer's balance and by the
    debt. Unlocked collateral minus the burn fee goes to the beneficiary,
    the fee goes to `fee_recipient`. Repaying a vault that holds collateral
    but no debt counts as a full repayment of zero and releases it all.
    """
    require_amount(stablecoin_amount)
    require_account(beneficiary)

    price = read_price(config)

    balance = ledger.balance_of(payer)
    if balance == 0:
        raise InsufficientBalanceError("Sender's token balance is 0.")

    vault = store.get(beneficiary)
    debt = vault.debt_amount
    if debt == 0 and vault.collateral_amount == 0:
        raise NoOutstandingDebtError("beneficiary has no vault to repay")
    if stablecoin_amount < debt and stablecoin_amount < config.min_instalment_amount:
        raise BelowMinimumInstalmentError(
            "The stablecoin amount sent is lower than both the required minimum and the debt."
        )

    repaid = min(stablecoin_amount, balance, debt)
    unlocked = unlocked_collateral(vault.collateral_amount, debt, repaid, price, config.required_ratio)
    fee = burn_fee(unlocked, config.burn_fee_bps)

    # a vault without debt is closed without burning anything
    if repaid > 0:
        ledger.burn(payer, repaid)
        emit(Transfer(payer, ZERO_ADDRESS, repaid))

    store.put(
        beneficiary,
        Vault(
            collateral_amount=checked_sub(vault.collateral_amount, unlocked),
            debt_amount=checked_sub(debt, repaid),
            last_instalment=now,
        ),
    )

    if fee > 0:
        ledger.release_collateral(fee_recipient, fee)
    if unlocked - fee > 0:
        ledger.release_collateral(beneficiary, unlocked - fee)

    return RepayResult(burned=repaid, unlocked=unlocked, fee=fee)
