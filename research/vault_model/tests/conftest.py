"""Shared fixtures for the vault engine tests"""
import pytest

from vault_model.src.access_control import OwnerAccessControl
from vault_model.src.constants import WAD
from vault_model.src.engine import StablecoinEngine
from vault_model.src.oracle import FixedPriceOracle
from vault_model.src.state.token_ledger import InMemoryTokenLedger

GOVERNANCE = "governance"
ALICE = "alice"
BOB = "bob"
CAROL = "carol"
LIQUIDATOR = "liquidator"

START_TIME = 1_600_000_000

# 1 unit of collateral at price 500 and ratio 120%: 5e20 // 120 * 100
DEBT_FOR_ONE = 416_666_666_666_666_666_600


class FakeClock:
    def __init__(self, now: int = START_TIME):
        self.now = now

    def advance(self, seconds: int) -> int:
        self.now += seconds
        return self.now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def oracle():
    return FixedPriceOracle(500)


@pytest.fixture
def ledger():
    ledger = InMemoryTokenLedger()
    for account in (ALICE, BOB, CAROL, LIQUIDATOR):
        ledger.fund_collateral(account, 10 * WAD)
    return ledger


@pytest.fixture
def access():
    return OwnerAccessControl(GOVERNANCE)


@pytest.fixture
def engine(ledger, access, oracle, clock):
    return StablecoinEngine(ledger, access, oracle, clock=clock)
