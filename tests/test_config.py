from pathlib import Path

import pytest

from chain_harness.config import HarnessConfig


def test_defaults() -> None:
    config = HarnessConfig()

    assert config.genesis_height == 1
    assert config.contracts == ("arbitrage-tracker",)
    assert config.account_labels[0] == "deployer"
    assert config.account_labels[-1] == "wallet_8"
    assert len(config.account_labels) == 9


def test_contracts_list_stored_as_tuple() -> None:
    config = HarnessConfig(contracts=["arbitrage-tracker"])  # type: ignore[arg-type]
    assert config.contracts == ("arbitrage-tracker",)


def test_rejects_negative_genesis() -> None:
    with pytest.raises(ValueError, match="genesis_height"):
        HarnessConfig(genesis_height=-1)


def test_rejects_negative_wallet_count() -> None:
    with pytest.raises(ValueError, match="wallet_count"):
        HarnessConfig(wallet_count=-1)


def test_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "harness.toml"
    path.write_text(
        """
[chain]
genesis_height = 0
seed = 3
contracts = []

[accounts]
wallet_count = 2
initial_balance = 5
""",
        encoding="utf-8",
    )

    config = HarnessConfig.from_toml(path)

    assert config.genesis_height == 0
    assert config.seed == 3
    assert config.contracts == ()
    assert config.account_labels == ["deployer", "wallet_1", "wallet_2"]
    assert config.initial_balance == 5


def test_from_toml_missing_sections_use_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.toml"
    path.write_text("", encoding="utf-8")

    assert HarnessConfig.from_toml(path) == HarnessConfig()
