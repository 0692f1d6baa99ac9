"""Shared pytest fixtures for harness tests."""

import pytest

from chain_harness.config import HarnessConfig
from chain_harness.core.accounts import Account, AccountRegistry
from chain_harness.core.chain import Chain
from chain_harness.scenarios.runner import ScenarioRunner


@pytest.fixture
def config() -> HarnessConfig:
    """Default configuration: genesis height 1, arbitrage-tracker deployed."""
    return HarnessConfig()


@pytest.fixture
def chain(config: HarnessConfig) -> Chain:
    """Create a fresh chain for every test."""
    return Chain.build(config)


@pytest.fixture
def accounts(chain: Chain) -> AccountRegistry:
    return chain.accounts


@pytest.fixture
def deployer(accounts: AccountRegistry) -> Account:
    return accounts.get("deployer")


@pytest.fixture
def runner(chain: Chain) -> ScenarioRunner:
    return ScenarioRunner(chain)
