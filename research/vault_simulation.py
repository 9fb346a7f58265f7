import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from vault_model.src.access_control import OwnerAccessControl
from vault_model.src.constants import DAY_IN_SECONDS, WAD
from vault_model.src.engine import StablecoinEngine
from vault_model.src.errors import ProtocolError
from vault_model.src.oracle import FixedPriceOracle
from vault_model.src.state.token_ledger import InMemoryTokenLedger

logger = logging.getLogger(__name__)

GOVERNANCE = "governance"
KEEPER = "keeper"


@dataclass
class SimulationParams:
    initial_price: int = 500  # frEUR per unit of collateral
    price_volatility: float = 0.03  # daily
    price_drift: float = -0.002  # daily, gently pushes ratios down
    simulation_days: int = 180
    n_borrowers: int = 50
    max_deposit: float = 5.0  # whole units of collateral
    repay_probability: float = 0.03  # chance a borrower pays an instalment on a given day
    repay_fraction: float = 0.2  # share of the remaining debt paid per instalment
    keeper_collateral: int = 10_000  # whole units the keeper locks to hold frEUR
    required_ratio: int = 150
    random_seed: Optional[int] = None
    experiment_name: str = "default"


class VaultSimulation:
    """Drives a StablecoinEngine along a random collateral price path.

    Borrowers open one vault each on day 0, then sporadically pay
    instalments. A single keeper liquidates every delinquent vault at the
    end of each day.
    """

    def __init__(self, params: SimulationParams):
        self.params = params
        self.rng = np.random.default_rng(params.random_seed)
        self.now = 0
        self.oracle = FixedPriceOracle(params.initial_price)
        self.ledger = InMemoryTokenLedger()
        self.engine = StablecoinEngine(
            self.ledger,
            OwnerAccessControl(GOVERNANCE),
            self.oracle,
            clock=lambda: self.now,
        )
        self.engine.set_required_ratio(GOVERNANCE, params.required_ratio)
        self.borrowers: List[str] = [f"borrower_{i}" for i in range(params.n_borrowers)]
        self.records: List[dict] = []

    def price_path(self) -> np.ndarray:
        """Geometric random walk of the daily price, floored at 1"""
        shocks = self.rng.normal(self.params.price_drift, self.params.price_volatility, self.params.simulation_days)
        path = self.params.initial_price * np.exp(np.cumsum(shocks))
        return np.maximum(np.rint(path), 1).astype(np.int64)

    def open_vaults(self) -> None:
        keeper_deposit = self.params.keeper_collateral * WAD
        self.ledger.fund_collateral(KEEPER, keeper_deposit)
        self.engine.mint(KEEPER, keeper_deposit)

        deposits = self.rng.uniform(0.1, self.params.max_deposit, len(self.borrowers))
        for borrower, deposit in zip(self.borrowers, deposits):
            amount = int(deposit * 1000) * WAD // 1000
            self.ledger.fund_collateral(borrower, amount)
            self.engine.mint(borrower, amount)

    def pay_instalments(self) -> int:
        paid = 0
        for borrower in self.borrowers:
            if self.rng.random() >= self.params.repay_probability:
                continue
            debt = self.engine.debt_of(borrower)
            if debt == 0:
                continue
            amount = max(int(debt * self.params.repay_fraction), self.engine.min_instalment_amount())
            try:
                self.engine.repay(borrower, amount)
                paid += 1
            except ProtocolError as e:
                logger.debug("Instalment of %s skipped: %s", borrower, e)
        return paid

    def liquidate_delinquent(self) -> int:
        liquidated = 0
        for minter in self.engine.delinquent_vaults():
            if minter == KEEPER:
                continue
            try:
                self.engine.liquidate(KEEPER, minter, self.engine.debt_of(minter))
                liquidated += 1
            except ProtocolError as e:
                logger.debug("Liquidation of %s failed: %s", minter, e)
        return liquidated

    def simulate(self) -> pd.DataFrame:
        self.open_vaults()
        for day, price in enumerate(self.price_path(), start=1):
            self.now = day * DAY_IN_SECONDS
            self.oracle.set_price(int(price))

            paid = self.pay_instalments()
            delinquent = len(self.engine.delinquent_vaults())
            liquidated = self.liquidate_delinquent()

            ratios = [self.engine.collateral_ratio_of(b) for b in self.borrowers if self.engine.debt_of(b) > 0]
            self.records.append({
                "day": day,
                "price": int(price),
                "open_vaults": len(ratios),
                "median_ratio": float(np.median(ratios)) if ratios else np.nan,
                "total_debt": sum(self.engine.debt_of(b) for b in self.borrowers) / WAD,
                "total_collateral": sum(self.engine.collateral_of(b) for b in self.borrowers) / WAD,
                "instalments": paid,
                "delinquent": delinquent,
                "liquidated": liquidated,
                "governance_fees": self.ledger.collateral_balance_of(GOVERNANCE) / WAD,
            })
        return pd.DataFrame(self.records).set_index("day")

    def plot_results(self, results: pd.DataFrame) -> Path:
        output_dir = Path('research/results') / self.params.experiment_name
        output_dir.mkdir(parents=True, exist_ok=True)

        fig, (ax1, ax2, ax3) = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

        ax1.plot(results.index, results["price"], label='Collateral Price')
        ax1.set_ylabel('Price (frEUR)')
        ax1.set_title('Collateral Price Over Time')
        ax1.legend()
        ax1.grid(True, alpha=0.3)

        ax2.plot(results.index, results["median_ratio"], label='Median Ratio', color='orange')
        ax2.axhline(y=self.params.required_ratio, color='r', linestyle='--', alpha=0.3)
        ax2.set_ylabel('Collateral Ratio (%)')
        ax2.set_title('Vault Collateralization')
        ax2.legend()
        ax2.grid(True, alpha=0.3)

        ax3.bar(results.index, results["liquidated"], label='Liquidations', color='red', alpha=0.6)
        ax3.plot(results.index, results["open_vaults"], label='Open Vaults')
        ax3.set_xlabel('Time (days)')
        ax3.set_title('Vaults')
        ax3.legend()
        ax3.grid(True, alpha=0.3)

        seed_text = f"Random Seed: {self.params.random_seed}" if self.params.random_seed is not None else "No Seed"
        fig.text(0.02, 0.02, seed_text, fontsize=8, alpha=0.7)

        plt.tight_layout()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = output_dir / f"vaults_ratio_{self.params.required_ratio}_{timestamp}.png"
        plt.savefig(path, bbox_inches='tight', dpi=150)
        plt.close()
        return path


def main():
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    params = SimulationParams(
        experiment_name="vault_liquidations",
        random_seed=57,
    )
    sim = VaultSimulation(params)
    results = sim.simulate()
    print(results.describe())
    print(f"Plot saved to {sim.plot_results(results)}")


if __name__ == "__main__":
    main()
