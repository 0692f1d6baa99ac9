from __future__ import annotations

import json
import time
from datetime import UTC, datetime
from random import Random
from typing import TYPE_CHECKING

from chain_harness.suite.executor import (
    determine_status,
    execute_scenario,
    find_divergent_runs,
    generate_run_id,
)

if TYPE_CHECKING:
    from pathlib import Path

    from chain_harness.scenarios.runner import Scenario, ScenarioResult
    from chain_harness.suite.config import SuiteConfig


def append_summary(path: Path, summary: dict[str, object]) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(summary) + "\n")


def write_trace(output_dir: Path, run_id: str, result: ScenarioResult) -> None:
    trace_dir = output_dir / run_id
    trace_dir.mkdir(parents=True, exist_ok=True)
    (trace_dir / "blocks.json").write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")


def run_suite(scenarios: list[Scenario], config: SuiteConfig) -> list[dict[str, object]]:
    """Run every scenario ``config.repeat`` times and record one summary each."""
    rng = Random(config.master_seed) if config.master_seed is not None else Random()

    config.output_dir.mkdir(parents=True, exist_ok=True)
    summaries: list[dict[str, object]] = []

    for scenario in scenarios:
        run_seed = rng.randint(0, 2**31 - 1)
        run_id = generate_run_id(Random(run_seed))

        start_time = datetime.now(UTC)
        wall_start = time.monotonic()

        results: list[ScenarioResult] = []
        error: Exception | None = None
        for _ in range(config.repeat):
            result, error = execute_scenario(scenario, config.harness)
            if result is None:
                break
            results.append(result)

        wall_clock = time.monotonic() - wall_start
        end_time = datetime.now(UTC)

        primary = results[0] if results else None
        divergent = find_divergent_runs(results)
        status = determine_status(primary, error, divergent)

        summary: dict[str, object] = {
            "run_id": run_id,
            "seed": run_seed,
            "scenario": scenario.name,
            "status": status,
            "failures": list(primary.failures) if primary is not None else [],
            "blocks_mined": len(primary.blocks) if primary is not None else 0,
            "txs_processed": primary.txs_processed if primary is not None else 0,
            "final_height": primary.blocks[-1].height if primary and primary.blocks else None,
            "repeat": config.repeat,
            "divergent_runs": divergent,
            "wall_clock_seconds": round(wall_clock, 3),
            "timestamp_start": start_time.isoformat(),
            "timestamp_end": end_time.isoformat(),
        }
        if error is not None:
            summary["error"] = f"{type(error).__name__}: {error}"

        append_summary(config.overview_path, summary)
        summaries.append(summary)

        status_display = "OK" if status == "success" else status
        print(f"[{run_id}] {scenario.name} ... {status_display} ({wall_clock:.1f}s)")
        if primary is not None:
            for failure in primary.failures:
                print(f"    {failure}")
        if error is not None:
            print(f"    {summary['error']}")

        should_trace = not config.trace_on_failure_only or status != "success"
        if should_trace and primary is not None:
            write_trace(config.output_dir, run_id, primary)

    return summaries


def load_suite_scenarios(config: SuiteConfig) -> list[Scenario]:
    from chain_harness.scenarios.arbitrage import ARBITRAGE_SCENARIOS
    from chain_harness.scenarios.loader import load_scenarios

    if not config.scenario_files:
        return list(ARBITRAGE_SCENARIOS)

    scenarios: list[Scenario] = []
    for path in config.scenario_files:
        scenarios.extend(load_scenarios(path))
    return scenarios


def main(argv: list[str] | None = None) -> int:
    import argparse
    from pathlib import Path

    from chain_harness.scenarios.loader import ScenarioFileError
    from chain_harness.scenarios.runner import describe_expectation
    from chain_harness.suite.config import DEFAULT_OUTPUT_DIR, SuiteConfig

    parser = argparse.ArgumentParser(description="Run contract scenarios against a simulated chain")
    parser.add_argument(
        "scenarios",
        nargs="*",
        type=Path,
        help="Scenario TOML files (default: bundled arbitrage scenarios)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to TOML configuration file",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Master seed for run ids",
    )
    parser.add_argument(
        "--repeat",
        type=int,
        help="Run each scenario N times and check the runs agree",
    )
    parser.add_argument(
        "--trace-all",
        action="store_true",
        help="Write block traces for all runs, not just failures",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List scenarios and their expectations without running them",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the report server after the run",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the report server (default: 8000)",
    )

    args = parser.parse_args(argv)

    try:
        suite_config = (
            SuiteConfig.from_toml(args.config) if args.config is not None else SuiteConfig()
        )
    except (OSError, ValueError) as e:
        # tomllib.TOMLDecodeError is a ValueError
        print(f"Cannot load config: {e}")
        return 2

    if args.scenarios:
        suite_config.scenario_files = list(args.scenarios)
    if args.output_dir is not None:
        suite_config.output_dir = args.output_dir
    if args.seed is not None:
        suite_config.master_seed = args.seed
    if args.repeat is not None:
        if args.repeat < 1:
            parser.error("--repeat must be >= 1")
        suite_config.repeat = args.repeat
    if args.trace_all:
        suite_config.trace_on_failure_only = False

    try:
        scenarios = load_suite_scenarios(suite_config)
    except (OSError, ScenarioFileError) as e:
        print(f"Cannot load scenarios: {e}")
        return 2

    if args.list:
        for scenario in scenarios:
            print(scenario.name)
            for number, step in enumerate(scenario.steps, start=1):
                height = step.expect_height if step.expect_height is not None else "?"
                print(f"  block {number} (height {height})")
                for tx in step.txs:
                    print(f"    {describe_expectation(tx)}")
        return 0

    summaries = run_suite(scenarios, suite_config)
    passed = sum(1 for s in summaries if s["status"] == "success")
    print(f"\n{passed}/{len(summaries)} scenarios passed")

    if args.serve:
        from chain_harness.suite.server import run_server

        run_server(suite_config.output_dir, suite_config.overview_file, port=args.port)

    return 0 if passed == len(summaries) else 1


if __name__ == "__main__":
    raise SystemExit(main())
