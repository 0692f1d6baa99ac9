"""FastAPI backend serving suite run summaries."""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

from fastapi import FastAPI
from pydantic import BaseModel


class RunSummary(BaseModel):
    run_id: str
    seed: int
    scenario: str
    status: str
    failures: list[str]
    blocks_mined: int
    txs_processed: int
    final_height: int | None
    wall_clock_seconds: float
    timestamp: datetime


class DashboardStats(BaseModel):
    total_runs: int
    success_rate: float
    failure_rate: float
    attention_rate: float
    error_rate: float
    runs_per_minute: float
    failures_by_scenario: dict[str, int]
    recent_runs: list[RunSummary]


def create_app(output_dir: Path, overview_file: str = "runs.ndjson") -> FastAPI:
    app = FastAPI(title="Contract Harness Report API")
    runs_file = output_dir / overview_file

    def _parse_run(run: dict[str, Any]) -> RunSummary:
        return RunSummary(
            run_id=run["run_id"],
            seed=run["seed"],
            scenario=run["scenario"],
            status=run["status"],
            failures=run.get("failures", []),
            blocks_mined=run.get("blocks_mined", 0),
            txs_processed=run.get("txs_processed", 0),
            final_height=run.get("final_height"),
            wall_clock_seconds=run["wall_clock_seconds"],
            timestamp=datetime.fromisoformat(run["timestamp_start"]),
        )

    def _load_all_runs() -> list[dict[str, Any]]:
        if not runs_file.exists():
            return []
        with open(runs_file, encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    @app.get("/api/stats")
    async def get_stats() -> DashboardStats:
        runs = _load_all_runs()
        failure_counts: dict[str, int] = {}

        for run in runs:
            if run["status"] != "success":
                name = run["scenario"]
                failure_counts[name] = failure_counts.get(name, 0) + 1

        total = len(runs)
        success_count = sum(1 for r in runs if r["status"] == "success")
        failed_count = sum(1 for r in runs if r["status"].startswith("FAILED"))
        attention_count = sum(1 for r in runs if r["status"].startswith("ATTENTION"))
        error_count = sum(1 for r in runs if r["status"] == "error")

        rpm = 0.0
        if len(runs) >= 2:
            first_ts = datetime.fromisoformat(runs[0]["timestamp_start"])
            last_ts = datetime.fromisoformat(runs[-1]["timestamp_end"])
            duration_minutes = (last_ts - first_ts).total_seconds() / 60
            if duration_minutes > 0:
                rpm = total / duration_minutes

        recent = [_parse_run(run) for run in runs[-20:]]

        return DashboardStats(
            total_runs=total,
            success_rate=success_count / total if total > 0 else 0,
            failure_rate=failed_count / total if total > 0 else 0,
            attention_rate=attention_count / total if total > 0 else 0,
            error_rate=error_count / total if total > 0 else 0,
            runs_per_minute=rpm,
            failures_by_scenario=failure_counts,
            recent_runs=recent,
        )

    @app.get("/api/runs")
    async def get_runs(limit: int = 100, offset: int = 0) -> list[RunSummary]:
        all_runs = _load_all_runs()
        return [_parse_run(run) for run in all_runs[offset : offset + limit]]

    @app.get("/api/run/{run_id}")
    async def get_run_details(run_id: str) -> dict[str, Any]:
        for run in _load_all_runs():
            if run["run_id"] == run_id:
                blocks_file = output_dir / run_id / "blocks.json"
                if blocks_file.exists():
                    with open(blocks_file, encoding="utf-8") as bf:
                        run["trace"] = json.load(bf)
                return run

        return {"error": "Run not found"}

    return app


def run_server(
    output_dir: Path,
    overview_file: str = "runs.ndjson",
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    import uvicorn

    app = create_app(output_dir, overview_file)
    print(f"Starting report server at http://{host}:{port}")
    print(f"Watching: {output_dir / overview_file}")
    uvicorn.run(app, host=host, port=port)
