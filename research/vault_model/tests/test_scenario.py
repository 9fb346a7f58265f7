"""FreeEUR lifecycle: two minters, a third-party burner and a liquidation"""
import pytest

from vault_model.src.access_control import OwnerAccessControl
from vault_model.src.constants import DAY_IN_SECONDS, WAD
from vault_model.src.engine import StablecoinEngine
from vault_model.src.errors import (
    AmountTooLowError,
    BelowMinimumInstalmentError,
    InstalmentPeriodNotExceededError,
    InsufficientBalanceError,
    RatioNotBelowThresholdError,
)
from vault_model.src.oracle import FixedPriceOracle
from vault_model.src.state.token_ledger import InMemoryTokenLedger

from conftest import DEBT_FOR_ONE, FakeClock

GOVERNANCE = "governance"
SENDER = "sender"
BENEFICIARY = "beneficiary"
SENDER2 = "sender2"


def test_free_eur_lifecycle():
    clock = FakeClock()
    ledger = InMemoryTokenLedger()
    for account in (SENDER, SENDER2):
        ledger.fund_collateral(account, 10 * WAD)
    engine = StablecoinEngine(ledger, OwnerAccessControl(GOVERNANCE), FixedPriceOracle(500), clock=clock)

    def tick():
        clock.advance(15)

    # minting for self and for a beneficiary
    engine.mint(SENDER, WAD)
    tick()
    engine.mint_for(SENDER, WAD, BENEFICIARY)
    assert [engine.registered_minter_at(i) for i in range(engine.registered_minter_count())] == [SENDER, BENEFICIARY]

    # partial burn of a third
    tick()
    instalment_before = engine.last_instalment_of(SENDER)
    engine.repay(SENDER, DEBT_FOR_ONE // 3)
    assert engine.last_instalment_of(SENDER) > instalment_before
    assert engine.collateral_of(SENDER) == 670_000_000_000_000_000
    assert ledger.collateral_balance_of(GOVERNANCE) == 3_300_000_000_000_000

    # too small an instalment
    tick()
    with pytest.raises(BelowMinimumInstalmentError):
        engine.repay(SENDER, 5 * WAD)

    # burning the rest closes the vault
    tick()
    engine.repay(SENDER, engine.balance_of(SENDER))
    assert engine.collateral_of(SENDER) == 0
    assert engine.debt_of(SENDER) == 0
    assert engine.balance_of(SENDER) == 0

    # sender burns a third of the beneficiary's debt
    tick()
    engine.mint(SENDER, WAD // 2)
    beneficiary_collateral_before = ledger.collateral_balance_of(BENEFICIARY)
    engine.repay_for(SENDER, engine.balance_of(BENEFICIARY) // 3, BENEFICIARY)
    assert engine.collateral_of(BENEFICIARY) == 670_000_000_000_000_000
    assert engine.debt_of(BENEFICIARY) == 277_777_777_777_777_777_734
    assert engine.balance_of(SENDER) == 69_444_444_444_444_444_434
    assert ledger.collateral_balance_of(BENEFICIARY) - beneficiary_collateral_before == 326_700_000_000_000_000

    # sender asks for more than it holds, only its balance is burned
    tick()
    result = engine.repay_for(SENDER, 2 * engine.balance_of(SENDER), BENEFICIARY)
    assert result.burned == 69_444_444_444_444_444_434
    assert result.unlocked == 167_500_000_000_000_000
    assert engine.debt_of(BENEFICIARY) == 208_333_333_333_333_333_300

    # empty balance
    tick()
    with pytest.raises(InsufficientBalanceError):
        engine.repay_for(SENDER, 200 * WAD, BENEFICIARY)

    # beneficiary holds more than it owes, only the debt is burned
    tick()
    result = engine.repay(BENEFICIARY, engine.balance_of(BENEFICIARY))
    assert result.burned == 208_333_333_333_333_333_300
    assert engine.collateral_of(BENEFICIARY) == 0
    assert engine.balance_of(BENEFICIARY) == 208_333_333_333_333_333_300

    # burning below, then above, the required ratio
    tick()
    engine.mint(SENDER2, WAD)
    assert engine.collateral_ratio_of(SENDER2) == 120
    engine.set_required_ratio(GOVERNANCE, 150)
    engine.repay(SENDER2, 100 * WAD)
    assert engine.collateral_ratio_of(SENDER2) == 150
    engine.set_required_ratio(GOVERNANCE, 130)
    tick()
    engine.repay(SENDER2, 100 * WAD)
    assert engine.debt_of(SENDER2) == 216_666_666_666_666_666_600
    assert engine.collateral_ratio_of(SENDER2) == 131

    # liquidation attempts by sender
    engine.transfer(SENDER2, SENDER, 200 * WAD)
    engine.transfer(BENEFICIARY, SENDER, 200 * WAD)
    assert engine.balance_of(SENDER) == 400 * WAD

    with pytest.raises(AmountTooLowError):
        engine.liquidate(SENDER, SENDER2, 50 * WAD)
    with pytest.raises(RatioNotBelowThresholdError):
        engine.liquidate(SENDER, SENDER2, 220 * WAD)

    engine.set_required_ratio(GOVERNANCE, 200)
    with pytest.raises(InstalmentPeriodNotExceededError):
        engine.liquidate(SENDER, SENDER2, 220 * WAD)

    clock.advance(31 * DAY_IN_SECONDS)
    sender2_collateral = ledger.collateral_balance_of(SENDER2)
    sender_collateral = ledger.collateral_balance_of(SENDER)

    result = engine.liquidate(SENDER, SENDER2, 220 * WAD)

    assert result.collateral_seized == 568_100_000_000_000_000
    assert engine.debt_of(SENDER2) == 0
    assert engine.collateral_of(SENDER2) == 0
    assert engine.balance_of(SENDER) == 183_333_333_333_333_333_400
    assert ledger.collateral_balance_of(SENDER2) == sender2_collateral
    assert ledger.collateral_balance_of(SENDER) == sender_collateral + 568_100_000_000_000_000
