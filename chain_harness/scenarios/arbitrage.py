"""Bundled scenarios for the arbitrage-tracker contract."""

from __future__ import annotations

from chain_harness.contracts.arbitrage_tracker import (
    CONTRACT_NAME,
    CREATE_STRATEGY,
    EXECUTE_STRATEGY,
)
from chain_harness.core.values import Ascii, Ok, UInt, Utf8
from chain_harness.scenarios.runner import Scenario, Step, TxSpec

MEDIUM_FREQUENCY = UInt(2)
LOW_RISK = UInt(1)

CREATE_STRATEGY_ARGS = (
    Ascii("Eth-Btc Cross-Chain"),
    Utf8("Low-risk arbitrage between Ethereum and Bitcoin chains"),
    Ascii("ethereum"),
    Ascii("bitcoin"),
    MEDIUM_FREQUENCY,
    LOW_RISK,
    UInt(1000),  # max allocation
)


def execute_strategy_args(strategy_id: int = 1) -> tuple[UInt, UInt, Utf8]:
    return (
        UInt(strategy_id),
        UInt(500),
        Utf8("Successful cross-chain arbitrage"),
    )


def create_strategy_tx(sender: str = "deployer", expect_id: int | None = 1) -> TxSpec:
    return TxSpec(
        contract=CONTRACT_NAME,
        function=CREATE_STRATEGY,
        args=CREATE_STRATEGY_ARGS,
        sender=sender,
        expect=Ok(UInt(expect_id)) if expect_id is not None else None,
    )


def execute_strategy_tx(
    strategy_id: int = 1,
    sender: str = "deployer",
    expect_id: int | None = 1,
) -> TxSpec:
    return TxSpec(
        contract=CONTRACT_NAME,
        function=EXECUTE_STRATEGY,
        args=execute_strategy_args(strategy_id),
        sender=sender,
        expect=Ok(UInt(expect_id)) if expect_id is not None else None,
    )


CREATE_STRATEGY_SCENARIO = Scenario(
    name="Create Arbitrage Strategy",
    steps=(Step(txs=(create_strategy_tx(),), expect_height=2),),
)

EXECUTE_STRATEGY_SCENARIO = Scenario(
    name="Execute Arbitrage Strategy",
    steps=(
        Step(txs=(create_strategy_tx(expect_id=None),)),
        Step(txs=(execute_strategy_tx(),), expect_height=3),
    ),
)

ARBITRAGE_SCENARIOS: list[Scenario] = [
    CREATE_STRATEGY_SCENARIO,
    EXECUTE_STRATEGY_SCENARIO,
]
