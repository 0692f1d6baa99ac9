"""Scenario descriptions and the runner that mines them."""

from chain_harness.scenarios.arbitrage import ARBITRAGE_SCENARIOS
from chain_harness.scenarios.loader import ScenarioFileError, load_scenarios
from chain_harness.scenarios.runner import (
    DeterminismReport,
    Scenario,
    ScenarioResult,
    ScenarioRunner,
    Step,
    TxSpec,
    check_determinism,
    run_scenario,
)

__all__ = [
    "ARBITRAGE_SCENARIOS",
    "DeterminismReport",
    "Scenario",
    "ScenarioFileError",
    "ScenarioResult",
    "ScenarioRunner",
    "Step",
    "TxSpec",
    "check_determinism",
    "load_scenarios",
    "run_scenario",
]
