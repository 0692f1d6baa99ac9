"""Chain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class HarnessConfig:
    """Configuration for a simulated chain."""

    # Chain
    genesis_height: int = 1
    seed: int = 0  # feeds address derivation
    contracts: tuple[str, ...] = ("arbitrage-tracker",)  # deployed by Chain.build

    # Accounts
    wallet_count: int = 8  # wallet_1 .. wallet_N next to the deployer
    initial_balance: int = 100_000_000_000_000  # micro-units per account

    def __post_init__(self) -> None:
        if self.genesis_height < 0:
            raise ValueError(f"genesis_height must be >= 0, got {self.genesis_height}")
        if self.wallet_count < 0:
            raise ValueError(f"wallet_count must be >= 0, got {self.wallet_count}")
        if not isinstance(self.contracts, tuple):
            object.__setattr__(self, "contracts", tuple(self.contracts))

    @property
    def account_labels(self) -> list[str]:
        return ["deployer"] + [f"wallet_{i}" for i in range(1, self.wallet_count + 1)]

    @classmethod
    def from_toml(cls, path: Path) -> HarnessConfig:
        import tomllib

        with path.open("rb") as f:
            data = tomllib.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> HarnessConfig:
        chain = data.get("chain", {})
        accounts = data.get("accounts", {})
        if not isinstance(chain, dict) or not isinstance(accounts, dict):
            raise ValueError("[chain] and [accounts] must be tables")

        defaults = cls()
        return cls(
            genesis_height=chain.get("genesis_height", defaults.genesis_height),
            seed=chain.get("seed", defaults.seed),
            contracts=tuple(chain.get("contracts", defaults.contracts)),
            wallet_count=accounts.get("wallet_count", defaults.wallet_count),
            initial_balance=accounts.get("initial_balance", defaults.initial_balance),
        )
