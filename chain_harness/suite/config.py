from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from chain_harness.config import HarnessConfig

DEFAULT_OUTPUT_DIR = "harness_output"
DEFAULT_OVERVIEW_FILE = "runs.ndjson"


@dataclass
class SuiteConfig:
    """Settings for a suite run: which scenarios, how often, where results go.

    ``repeat`` > 1 runs every scenario that many times on fresh chains and
    flags any run whose heights or outcomes differ from the first.
    """

    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    scenario_files: list[Path] = field(default_factory=list)
    harness: HarnessConfig = field(default_factory=HarnessConfig)
    overview_file: str = DEFAULT_OVERVIEW_FILE
    repeat: int = 1
    trace_on_failure_only: bool = True
    master_seed: int | None = None

    def __post_init__(self) -> None:
        if self.repeat < 1:
            raise ValueError(f"repeat must be >= 1, got {self.repeat}")

    @property
    def overview_path(self) -> Path:
        return self.output_dir / self.overview_file

    @classmethod
    def from_toml(cls, path: Path) -> SuiteConfig:
        import tomllib

        with path.open("rb") as f:
            data = tomllib.load(f)

        suite = data.get("suite", {})
        output = data.get("output", {})

        # Scenario paths are relative to the config file
        scenario_files = [path.parent / Path(p) for p in suite.get("scenarios", [])]

        return cls(
            output_dir=Path(output.get("dir", DEFAULT_OUTPUT_DIR)),
            scenario_files=scenario_files,
            harness=HarnessConfig.from_dict(data),
            overview_file=output.get("overview_file", DEFAULT_OVERVIEW_FILE),
            repeat=suite.get("repeat", 1),
            trace_on_failure_only=suite.get("trace_on_failure_only", True),
            master_seed=suite.get("master_seed"),
        )
