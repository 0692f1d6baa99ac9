from __future__ import annotations

from typing import TYPE_CHECKING

import coolname.impl

from chain_harness.scenarios.runner import run_scenario

if TYPE_CHECKING:
    from random import Random

    from chain_harness.config import HarnessConfig
    from chain_harness.scenarios.runner import Scenario, ScenarioResult


def generate_run_id(rng: Random) -> str:
    coolname.impl.replace_random(rng)
    words = coolname.impl.generate(3)
    return "-".join(words)


def execute_scenario(
    scenario: Scenario,
    config: HarnessConfig,
) -> tuple[ScenarioResult | None, Exception | None]:
    try:
        return (run_scenario(scenario, config), None)
    except Exception as e:
        return (None, e)


def find_divergent_runs(results: list[ScenarioResult]) -> list[int]:
    """Indexes of repeat runs whose heights or outcomes differ from run 0."""
    if not results:
        return []
    baseline = results[0].fingerprint()
    return [i for i, result in enumerate(results[1:], start=1) if result.fingerprint() != baseline]


def determine_status(
    result: ScenarioResult | None,
    error: Exception | None,
    divergent_runs: list[int] | None = None,
) -> str:
    if error is not None or result is None:
        return "error"
    if result.failures:
        return f"FAILED({len(result.failures)})"
    if divergent_runs:
        runs = ",".join(str(i) for i in divergent_runs)
        return f"ATTENTION(nondeterministic:{runs})"
    return "success"
