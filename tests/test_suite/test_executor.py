from random import Random

from chain_harness.config import HarnessConfig
from chain_harness.scenarios.arbitrage import (
    CREATE_STRATEGY_SCENARIO,
    EXECUTE_STRATEGY_SCENARIO,
    create_strategy_tx,
)
from chain_harness.scenarios.runner import Scenario, ScenarioResult, Step
from chain_harness.suite.executor import (
    determine_status,
    execute_scenario,
    find_divergent_runs,
    generate_run_id,
)


def test_generate_run_id_returns_string() -> None:
    run_id = generate_run_id(Random(42))
    assert isinstance(run_id, str)
    assert len(run_id.split("-")) >= 3


def test_generate_run_id_deterministic_with_same_seed() -> None:
    assert generate_run_id(Random(42)) == generate_run_id(Random(42))


def test_execute_scenario_returns_result() -> None:
    result, error = execute_scenario(EXECUTE_STRATEGY_SCENARIO, HarnessConfig())

    assert error is None
    assert result is not None
    assert result.passed


def test_execute_scenario_catches_harness_errors() -> None:
    """Scenario against a chain without the contract raises UnknownContract."""
    result, error = execute_scenario(CREATE_STRATEGY_SCENARIO, HarnessConfig(contracts=()))

    assert result is None
    assert error is not None
    assert "arbitrage-tracker" in str(error)


def test_determine_status_success() -> None:
    result = ScenarioResult(name="ok")
    assert determine_status(result, None) == "success"


def test_determine_status_error() -> None:
    assert determine_status(None, RuntimeError("boom")) == "error"


def test_determine_status_failed() -> None:
    result = ScenarioResult(name="bad", failures=["block 1: a", "block 2: b"])
    assert determine_status(result, None) == "FAILED(2)"


def test_determine_status_nondeterministic() -> None:
    result = ScenarioResult(name="flaky")
    assert determine_status(result, None, [2]) == "ATTENTION(nondeterministic:2)"


def test_find_divergent_runs() -> None:
    scenario = Scenario(name="s", steps=(Step(txs=(create_strategy_tx(),)),))
    default = execute_scenario(scenario, HarnessConfig())[0]
    shifted = execute_scenario(scenario, HarnessConfig(genesis_height=9))[0]
    assert default is not None
    assert shifted is not None

    assert find_divergent_runs([]) == []
    assert find_divergent_runs([default, default]) == []
    assert find_divergent_runs([default, default, shifted]) == [2]
