"""Open or top up a vault and issue frEUR against the deposit"""
from dataclasses import dataclass
from typing import Callable

from ..constants import ZERO_ADDRESS
from ..events import Event, Transfer
from ..interfaces import TokenLedger
from ..math_utils import checked_add, collateral_shortfall, debt_for_collateral
from ..state.governance_config import GovernanceConfig
from ..state.vault import Vault
from ..state.vault_store import VaultStore
from .checks import read_price, require_account, require_amount


@dataclass(frozen=True)
class MintResult:
    minted: int  # newly issued frEUR
    collateral_locked: int  # vault collateral after the deposit
    debt: int  # vault debt after the issuance


def mint_stablecoin(
    store: VaultStore,
    ledger: TokenLedger,
    config: GovernanceConfig,
    caller: str,
    collateral_amount: int,
    beneficiary: str,
    now: int,
    emit: Callable[[Event], None],
) -> MintResult:
    """Lock `collateral_amount` from `caller` in `beneficiary`'s vault.

    A top-up of an under-collateralized vault first tops the vault back up
    to the required ratio; only the part of the deposit left after that
    backs new debt. Collateral and debt accumulate across deposits.
    """
    require_amount(collateral_amount)
    require_account(beneficiary)

    price = read_price(config)
    required_ratio = config.required_ratio
    vault = store.get(beneficiary)

    backing = collateral_amount
    if vault.collateral_amount > 0:
        # top-up keeps the instalment clock running
        last_instalment = vault.last_instalment
        ratio = vault.ratio(price)
        if ratio is not None and ratio < required_ratio:
            shortfall = collateral_shortfall(vault.collateral_amount, vault.debt_amount, price, required_ratio)
            backing = collateral_amount - shortfall if collateral_amount >= shortfall else 0
    else:
        last_instalment = now

    minted = debt_for_collateral(backing, price, required_ratio)

    ledger.lock_collateral(caller, collateral_amount)
    if minted > 0:
        ledger.mint(beneficiary, minted)
        emit(Transfer(ZERO_ADDRESS, beneficiary, minted))

    updated = Vault(
        collateral_amount=checked_add(vault.collateral_amount, collateral_amount),
        debt_amount=checked_add(vault.debt_amount, minted),
        last_instalment=last_instalment,
    )
    store.put(beneficiary, updated)
    store.register_minter(beneficiary)

    return MintResult(minted=minted, collateral_locked=updated.collateral_amount, debt=updated.debt_amount)
