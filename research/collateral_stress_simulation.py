import logging
import numpy as np
import matplotlib.pyplot as plt
import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from pathlib import Path
from datetime import datetime

from vault_model.src.config import load_protocol_config
from vault_model.src.constants import NATIVE_ASSET, ONE_HUNDRED_PERCENT, PRICE_SCALE, REFERENCE_SCALE
from vault_model.src.instructions.mint import mint
from vault_model.src.instructions.valuation import max_mintable, total_collateral_value, undercollateralized
from vault_model.src.oracle import PriceOracle, usd
from vault_model.src.stablecoin import Stablecoin
from vault_model.src.state.collateral import Asset, TokenRegistry
from vault_model.src.state.ledger import Ledger
from vault_model.src.state.protocol_config import ProtocolConfig, VaultRegistry

LOG = logging.getLogger("vault_model.simulation")


@dataclass
class CollateralSpec:
    symbol: str
    address: str
    amount: float       # whole tokens deposited
    initial_price: float
    volatility: float   # per-step std of log returns
    drift: float = 0.0  # per-step mean of log returns
    decimals: int = 18


@dataclass
class StressParams:
    collateral: List[CollateralSpec] = field(default_factory=lambda: [
        CollateralSpec("ETH", NATIVE_ASSET, amount=1.0, initial_price=2000.0, volatility=0.01),
        CollateralSpec("WBTC", "WBTC", amount=0.02, initial_price=60000.0, volatility=0.008, decimals=8),
    ])
    target_ratio: float = 1.8   # collateral value / minted at t=0
    simulation_days: int = 90
    steps_per_day: int = 24     # hourly steps
    random_seed: Optional[int] = None
    experiment_name: str = "default"
    config: ProtocolConfig = field(default_factory=ProtocolConfig)


class CollateralStressSimulation:
    """Runs one vault through simulated price paths until liquidation or the end"""

    def __init__(self, params: StressParams):
        self.params = params
        self.rng = np.random.default_rng(params.random_seed)
        self.ledger = Ledger()
        self.token_registry = TokenRegistry()
        self.oracle = PriceOracle()
        self.stablecoin = Stablecoin(self.ledger)
        self.registry = VaultRegistry(
            self.ledger, self.token_registry, self.oracle, self.stablecoin, config=params.config
        )
        self.vault = self.registry.create_vault(owner="owner")
        self.assets: Dict[str, Asset] = {}
        self.history: Optional[pd.DataFrame] = None

        for spec in params.collateral:
            asset = Asset(spec.symbol, spec.address, spec.decimals)
            self.assets[spec.symbol] = asset
            self.token_registry.add_asset(asset)
            self.oracle.set_price(asset.address, usd(spec.initial_price))
            self.ledger.mint_token(asset.address, self.vault.address, int(spec.amount * asset.unit))

    def price_paths(self) -> np.ndarray:
        """Geometric Brownian price paths, shape (steps, assets)"""
        steps = self.params.simulation_days * self.params.steps_per_day
        drift = np.array([c.drift for c in self.params.collateral])
        vol = np.array([c.volatility for c in self.params.collateral])
        initial = np.array([c.initial_price for c in self.params.collateral])
        log_returns = self.rng.normal(drift, vol, size=(steps, len(self.params.collateral)))
        return initial * np.exp(np.cumsum(log_returns, axis=0))

    def open_position(self) -> int:
        """Mint so that collateral / (minted + fee) equals target_ratio"""
        value = total_collateral_value(self.vault)
        mint_fee = self.registry.mint_fee
        amount = int(value / self.params.target_ratio * ONE_HUNDRED_PERCENT / (ONE_HUNDRED_PERCENT + mint_fee))
        amount = min(amount, max_mintable(self.vault) * ONE_HUNDRED_PERCENT // (ONE_HUNDRED_PERCENT + mint_fee))
        mint(self.vault, self.vault.owner, self.vault.owner, amount)
        return amount

    def simulate(self) -> pd.DataFrame:
        self.open_position()
        paths = self.price_paths()
        rows = []
        for step, prices in enumerate(paths):
            for spec, price in zip(self.params.collateral, prices):
                self.oracle.set_price(spec.address, max(int(price * PRICE_SCALE), 1))

            value = total_collateral_value(self.vault)
            liquidated_now = False
            if not self.vault.liquidated and undercollateralized(self.vault):
                LOG.warning("[simulation] step=%d liquidating vault=%s", step, self.vault.address)
                self.registry.liquidate(self.vault)
                liquidated_now = True

            row = {
                "time": step / self.params.steps_per_day,
                "collateral_value": value / REFERENCE_SCALE,
                "minted": self.vault.minted_amount / REFERENCE_SCALE,
                "max_mintable": max_mintable(self.vault) / REFERENCE_SCALE,
                "liquidated": self.vault.liquidated,
                "liquidation_event": liquidated_now,
            }
            for spec, price in zip(self.params.collateral, prices):
                row[f"price_{spec.symbol}"] = price
            rows.append(row)

        self.history = pd.DataFrame(rows)
        return self.history

    def plot_results(self):
        if self.history is None:
            self.simulate()
        output_dir = Path('research/results') / self.params.experiment_name
        output_dir.mkdir(parents=True, exist_ok=True)
        history = self.history

        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 8))

        # Plot collateral value against the mint ceiling
        ax1.plot(history["time"], history["collateral_value"], label='Collateral Value')
        ax1.plot(history["time"], history["max_mintable"], label='Max Mintable')
        ax1.plot(history["time"], history["minted"], label='Minted', color='r', linestyle='--')
        ax1.set_ylabel('Reference units')
        ax1.set_title('Vault Collateralization Over Time')
        ax1.legend()
        ax1.grid(True)

        # Plot prices
        for spec in self.params.collateral:
            ax2.plot(history["time"], history[f"price_{spec.symbol}"], label=spec.symbol)
        liquidations = history[history["liquidation_event"]]
        for t in liquidations["time"]:
            ax2.axvline(x=t, color='r', linestyle=':', alpha=0.5)
        ax2.set_ylabel('Price')
        ax2.set_xlabel('Time (days)')
        ax2.set_title('Collateral Prices')
        ax2.legend()
        ax2.grid(True)

        plt.tight_layout()

        plot_name = f"ratio_{self.params.target_ratio}_threshold_{self.params.config.collateralization_threshold}"
        if self.params.random_seed is not None:
            plot_name += f"_seed_{self.params.random_seed}"

        plt.savefig(output_dir / f"{plot_name}.png")
        plt.close()


def liquidation_rate(target_ratios: List[float], base_params: StressParams, runs: int = 50) -> pd.DataFrame:
    """Share of runs that end liquidated, per starting collateral ratio"""
    base_seed = base_params.random_seed or 0
    records = []
    for ratio in target_ratios:
        liquidated = 0
        for run in range(runs):
            params = StressParams(
                collateral=base_params.collateral,
                target_ratio=ratio,
                simulation_days=base_params.simulation_days,
                steps_per_day=base_params.steps_per_day,
                random_seed=base_seed + run,
                experiment_name=base_params.experiment_name,
                config=base_params.config,
            )
            sim = CollateralStressSimulation(params)
            history = sim.simulate()
            liquidated += int(history["liquidated"].iloc[-1])
        records.append({"target_ratio": ratio, "runs": runs, "liquidation_rate": liquidated / runs})
    return pd.DataFrame(records)


def plot_liquidation_rates(rates: pd.DataFrame, experiment_name: str):
    output_dir = Path('research/results') / experiment_name
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(rates["target_ratio"] * 100, rates["liquidation_rate"] * 100, marker='o')
    ax.set_xlabel('Starting collateral ratio (%)')
    ax.set_ylabel('Runs liquidated (%)')
    ax.set_title('Liquidation Rate by Starting Collateral Ratio')
    ax.grid(True, alpha=0.3)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    plt.savefig(output_dir / f"liquidation_rates_{timestamp}.png", bbox_inches='tight', dpi=300)
    plt.close()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    base_params = StressParams(
        experiment_name="liquidation_rates",
        random_seed=57,
        simulation_days=30,
        config=load_protocol_config(),
    )

    # single run
    sim = CollateralStressSimulation(base_params)
    sim.simulate()
    sim.plot_results()

    rates = liquidation_rate([1.55, 1.7, 1.9, 2.2, 2.6], base_params, runs=20)
    print(rates.to_string(index=False))
    plot_liquidation_rates(rates, base_params.experiment_name)


if __name__ == "__main__":
    main()
