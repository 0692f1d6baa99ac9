"""Scenario execution: one block per step, expectations checked per receipt."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from chain_harness.core.chain import Chain
from chain_harness.core.transactions import contract_call
from chain_harness.core.values import serialize
from chain_harness.testing.assertions import (
    ReceiptAssertionError,
    assert_block,
    assert_receipt,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from chain_harness.config import HarnessConfig
    from chain_harness.core.receipts import Block
    from chain_harness.core.transactions import ContractCall
    from chain_harness.core.values import ClarityValue, Response


@dataclass(frozen=True)
class TxSpec:
    """A contract call inside a scenario; the sender is an account label."""

    contract: str
    function: str
    args: tuple[ClarityValue, ...] = ()
    sender: str = "deployer"
    expect: Response | None = None


@dataclass(frozen=True)
class Step:
    """Transactions mined together as one block."""

    txs: tuple[TxSpec, ...]
    expect_height: int | None = None


@dataclass(frozen=True)
class Scenario:
    name: str
    steps: tuple[Step, ...]


@dataclass
class ScenarioResult:
    name: str
    blocks: list[Block] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    txs_processed: int = 0

    @property
    def passed(self) -> bool:
        return not self.failures

    def fingerprint(self) -> list[tuple[int, list[dict[str, Any]]]]:
        """Heights and outcomes, for comparing repeated runs."""
        return [(block.height, block.outcomes()) for block in self.blocks]

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "passed": self.passed,
            "failures": list(self.failures),
            "txs_processed": self.txs_processed,
            "blocks": [block.to_dict() for block in self.blocks],
        }


class ScenarioRunner:
    """Submits ordered batches to a chain, mining exactly one block per call."""

    def __init__(self, chain: Chain) -> None:
        self._chain = chain
        self._blocks: list[Block] = []

    @property
    def chain(self) -> Chain:
        return self._chain

    @property
    def blocks(self) -> list[Block]:
        return list(self._blocks)

    def submit(self, transactions: Iterable[ContractCall]) -> Block:
        block = self._chain.mine_block(transactions)
        self._blocks.append(block)
        return block

    def run_step(self, step: Step) -> Block:
        accounts = self._chain.accounts
        return self.submit(
            contract_call(tx.contract, tx.function, tx.args, accounts.get(tx.sender))
            for tx in step.txs
        )


def check_step(step: Step, block: Block, number: int) -> list[str]:
    """Compare a mined block against the step's expectations."""
    failures: list[str] = []

    try:
        assert_block(block, height=step.expect_height, receipt_count=len(step.txs))
    except ReceiptAssertionError as e:
        failures.append(f"block {number}: {e}")
        return failures

    for tx, receipt in zip(step.txs, block.receipts, strict=True):
        if tx.expect is None:
            continue
        try:
            assert_receipt(receipt, tx.expect)
        except ReceiptAssertionError as e:
            failures.append(f"block {number}: {e}")

    return failures


def run_scenario(scenario: Scenario, config: HarnessConfig | None = None) -> ScenarioResult:
    """Run a scenario on a freshly built chain."""
    runner = ScenarioRunner(Chain.build(config))
    result = ScenarioResult(name=scenario.name)

    for number, step in enumerate(scenario.steps, start=1):
        block = runner.run_step(step)
        result.blocks.append(block)
        result.failures.extend(check_step(step, block, number))

    result.txs_processed = runner.chain.txs_processed
    return result


@dataclass
class DeterminismReport:
    runs: int
    mismatched_runs: list[int] = field(default_factory=list)  # 0-based, vs run 0

    @property
    def consistent(self) -> bool:
        return not self.mismatched_runs


def check_determinism(
    scenarios: Sequence[Scenario],
    config: HarnessConfig | None = None,
    runs: int = 2,
) -> DeterminismReport:
    """Run the scenario sequence ``runs`` times and compare heights and outcomes."""
    if runs < 2:
        raise ValueError(f"runs must be >= 2, got {runs}")

    baseline = [run_scenario(s, config).fingerprint() for s in scenarios]
    report = DeterminismReport(runs=runs)
    for run_index in range(1, runs):
        repeat = [run_scenario(s, config).fingerprint() for s in scenarios]
        if repeat != baseline:
            report.mismatched_runs.append(run_index)
    return report


def describe_expectation(tx: TxSpec) -> str:
    expected = serialize(tx.expect) if tx.expect is not None else "any"
    return f"{tx.contract}.{tx.function} by {tx.sender} -> {expected}"
