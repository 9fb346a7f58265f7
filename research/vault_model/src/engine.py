"""
Vault engine: the one entry point for minting, repaying, liquidating
and governance.

Every operation runs under a single engine-wide lock and inside a
transaction: the vault store and the token ledger are snapshotted first,
events are buffered, and on any exception both are restored and the
buffered events dropped. A rejected call therefore leaves no trace except
a warning in the log.

Committed events go to the bounded `events` log and to every subscriber.
A subscriber that raises is logged and skipped; it cannot undo or fail
an operation that already went through.
"""
import logging
import threading
import time
from collections import deque
from contextlib import contextmanager
from typing import Callable, Deque, Iterator, List, Optional

from .constants import EVENT_LOG_SIZE
from .errors import ProtocolError
from .events import Event, Transfer
from .instructions.burn_stablecoin import RepayResult, burn_stablecoin
from .instructions.checks import read_price
from .instructions.governance import (
    change_burn_fee,
    change_coll_ratio,
    change_max_instalment_period,
    change_min_instalment_amount,
    change_oracle,
)
from .instructions.liquidate_vault import LiquidationResult, check_liquidation, liquidate_vault
from .instructions.mint_stablecoin import MintResult, mint_stablecoin
from .interfaces import AccessControl, PriceOracle, TokenLedger
from .state.governance_config import GovernanceConfig
from .state.vault_store import VaultStore

logger = logging.getLogger(__name__)

Emit = Callable[[Event], None]


def _system_clock() -> int:
    return int(time.time())


class StablecoinEngine:
    """Collateralized frEUR issuance backed by a single collateral asset.

    Usage:
        engine = StablecoinEngine(ledger, OwnerAccessControl("gov"), FixedPriceOracle(500))
        engine.mint("alice", 1 * WAD)
        engine.repay("alice", 100 * WAD)
    """

    def __init__(
        self,
        ledger: TokenLedger,
        access_control: AccessControl,
        oracle: PriceOracle,
        clock: Optional[Callable[[], int]] = None,
        store: Optional[VaultStore] = None,
        config: Optional[GovernanceConfig] = None,
        event_log_size: int = EVENT_LOG_SIZE,
    ):
        self.ledger = ledger
        self.access_control = access_control
        self.clock = clock or _system_clock
        self.store = store or VaultStore()
        self.config = config or GovernanceConfig(oracle=oracle)
        self.events: Deque[Event] = deque(maxlen=event_log_size)
        self._listeners: List[Callable[[Event], None]] = []
        self._lock = threading.RLock()

    def subscribe(self, listener: Callable[[Event], None]) -> None:
        """Call `listener` with every event of every committed operation"""
        with self._lock:
            self._listeners.append(listener)

    @contextmanager
    def _transaction(self, operation: str, caller: str) -> Iterator[Emit]:
        with self._lock:
            store_state = self.store.snapshot()
            ledger_state = self.ledger.snapshot()
            pending: List[Event] = []
            try:
                yield pending.append
            except Exception as exc:
                self.store.restore(store_state)
                self.ledger.restore(ledger_state)
                if isinstance(exc, ProtocolError):
                    logger.warning(
                        "%s rejected: %s",
                        operation,
                        exc,
                        extra={"event": f"engine.{operation}.rejected", "caller": caller, "kind": exc.kind.value},
                    )
                raise
            for event in pending:
                self.events.append(event)
                for listener in self._listeners:
                    try:
                        listener(event)
                    except Exception:
                        # the operation is already committed
                        logger.exception(
                            "Listener %r failed on %s",
                            listener,
                            type(event).__name__,
                            extra={"event": f"engine.{operation}.listener_failed", "caller": caller},
                        )

    # minting

    def mint(self, caller: str, collateral_amount: int) -> MintResult:
        return self.mint_for(caller, collateral_amount, caller)

    def mint_for(self, caller: str, collateral_amount: int, beneficiary: str) -> MintResult:
        with self._transaction("mint", caller) as emit:
            result = mint_stablecoin(
                self.store, self.ledger, self.config, caller, collateral_amount, beneficiary, self.clock(), emit
            )
        logger.info(
            "Minted %d frEUR for %s",
            result.minted,
            beneficiary,
            extra={"event": "engine.mint", "caller": caller, "beneficiary": beneficiary, "collateral": collateral_amount},
        )
        return result

    # repayment

    def repay(self, caller: str, stablecoin_amount: int) -> RepayResult:
        return self.repay_for(caller, stablecoin_amount, caller)

    def repay_for(self, caller: str, stablecoin_amount: int, beneficiary: str) -> RepayResult:
        with self._transaction("repay", caller) as emit:
            result = burn_stablecoin(
                self.store,
                self.ledger,
                self.config,
                self.access_control.governance(),
                caller,
                stablecoin_amount,
                beneficiary,
                self.clock(),
                emit,
            )
        logger.info(
            "Burned %d frEUR for %s, unlocked %d collateral (fee %d)",
            result.burned,
            beneficiary,
            result.unlocked,
            result.fee,
            extra={"event": "engine.repay", "caller": caller, "beneficiary": beneficiary},
        )
        return result

    # liquidation

    def liquidate(self, liquidator: str, minter: str, stablecoin_amount: int) -> LiquidationResult:
        with self._transaction("liquidate", liquidator) as emit:
            result = liquidate_vault(
                self.store, self.ledger, self.config, liquidator, minter, stablecoin_amount, self.clock(), emit
            )
        logger.info(
            "Liquidated %s: %d collateral for %d frEUR",
            minter,
            result.collateral_seized,
            result.debt_repaid,
            extra={"event": "engine.liquidate", "liquidator": liquidator, "minter": minter},
        )
        return result

    def is_liquidatable(self, minter: str) -> bool:
        """Whether repaying the full debt would currently liquidate `minter`"""
        with self._lock:
            vault = self.store.get(minter)
            if vault.debt_amount == 0:
                return False
            try:
                check_liquidation(vault, vault.debt_amount, read_price(self.config), self.config, self.clock())
            except ProtocolError:
                return False
            return True

    def delinquent_vaults(self) -> List[str]:
        """Registered minters that can be liquidated right now, in registration order"""
        with self._lock:
            return [minter for minter in self.store.minters() if self.is_liquidatable(minter)]

    # governance

    def _govern(self, operation: str, caller: str, change, value) -> None:
        with self._transaction(operation, caller) as emit:
            self.config = change(self.config, self.access_control, caller, value, emit)
        logger.info(
            "Governance changed %s to %s",
            operation,
            value,
            extra={"event": f"governance.{operation}", "caller": caller},
        )

    def set_burn_fee(self, caller: str, fee_bps: int) -> None:
        self._govern("burn_fee", caller, change_burn_fee, fee_bps)

    def set_required_ratio(self, caller: str, ratio: int) -> None:
        self._govern("coll_ratio", caller, change_coll_ratio, ratio)

    def set_max_instalment_period(self, caller: str, period: int) -> None:
        self._govern("max_instalment_period", caller, change_max_instalment_period, period)

    def set_min_instalment_amount(self, caller: str, amount: int) -> None:
        self._govern("min_instalment_amount", caller, change_min_instalment_amount, amount)

    def set_oracle(self, caller: str, oracle: PriceOracle) -> None:
        self._govern("oracle", caller, change_oracle, oracle)

    # views

    def collateral_of(self, account: str) -> int:
        with self._lock:
            return self.store.get(account).collateral_amount

    def debt_of(self, account: str) -> int:
        with self._lock:
            return self.store.get(account).debt_amount

    def collateral_ratio_of(self, account: str) -> int:
        """Ratio in whole percent, 0 for a vault without debt"""
        with self._lock:
            ratio = self.store.get(account).ratio(read_price(self.config))
            return ratio or 0

    def last_instalment_of(self, account: str) -> int:
        with self._lock:
            return self.store.get(account).last_instalment

    def burn_fee_bps(self) -> int:
        return self.config.burn_fee_bps

    def required_ratio(self) -> int:
        return self.config.required_ratio

    def max_instalment_period(self) -> int:
        return self.config.max_instalment_period

    def min_instalment_amount(self) -> int:
        return self.config.min_instalment_amount

    def collateral_price(self) -> int:
        with self._lock:
            return read_price(self.config)

    def registered_minter_at(self, index: int) -> str:
        with self._lock:
            return self.store.minter_at(index)

    def registered_minter_count(self) -> int:
        with self._lock:
            return self.store.minter_count()

    # token passthrough

    def name(self) -> str:
        return self.ledger.name

    def symbol(self) -> str:
        return self.ledger.symbol

    def decimals(self) -> int:
        return self.ledger.decimals

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self.ledger.balance_of(account)

    def total_supply(self) -> int:
        with self._lock:
            return self.ledger.total_supply()

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        with self._transaction("transfer", sender) as emit:
            self.ledger.transfer(sender, recipient, amount)
            emit(Transfer(sender, recipient, amount))
