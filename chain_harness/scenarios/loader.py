"""Load scenarios from TOML files.

Layout::

    [[scenario]]
    name = "Create Arbitrage Strategy"

    [[scenario.block]]
    expect_height = 2

    [[scenario.block.tx]]
    contract = "arbitrage-tracker"
    function = "create-arbitrage-strategy"
    sender = "deployer"
    args = [{ ascii = "Eth-Btc" }, { uint = 2 }]
    expect = { ok = { uint = 1 } }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chain_harness.core.values import Err, Ok, value_from_dict
from chain_harness.scenarios.runner import Scenario, Step, TxSpec

if TYPE_CHECKING:
    from pathlib import Path


SCENARIO_KEYS = frozenset({"name", "block"})
BLOCK_KEYS = frozenset({"expect_height", "tx"})
TX_KEYS = frozenset({"contract", "function", "sender", "args", "expect"})


class ScenarioFileError(Exception):
    """Scenario document is unreadable or has the wrong shape."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


def load_scenarios(path: Path) -> list[Scenario]:
    import tomllib

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ScenarioFileError(str(path), f"invalid TOML: {e}") from e

    return scenarios_from_dict(data, source=str(path))


def scenarios_from_dict(data: dict[str, Any], source: str = "<scenarios>") -> list[Scenario]:
    entries = data.get("scenario", [])
    if not isinstance(entries, list) or not entries:
        raise ScenarioFileError(source, "expected at least one [[scenario]] table")

    scenarios: list[Scenario] = []
    for index, entry in enumerate(entries):
        where = f"scenario[{index}]"
        entry = _check_table(entry, SCENARIO_KEYS, where, source)

        name = entry.get("name")
        if not name:
            raise ScenarioFileError(source, f"{where} is missing a name")
        if not isinstance(name, str):
            raise ScenarioFileError(source, f"{where}.name must be a string")

        blocks = _table_list(entry, "block", where, source)
        if not blocks:
            raise ScenarioFileError(source, f"{where} ({name}) has no [[scenario.block]]")

        steps = tuple(
            _parse_step(block, f"{where}.block[{block_index}]", source)
            for block_index, block in enumerate(blocks)
        )
        scenarios.append(Scenario(name=name, steps=steps))

    return scenarios


def _check_table(
    entry: object, allowed: frozenset[str], where: str, source: str
) -> dict[str, Any]:
    # Unknown keys are errors, not ignored
    if not isinstance(entry, dict):
        raise ScenarioFileError(source, f"{where} must be a table, got {type(entry).__name__}")
    for key in entry:
        if key not in allowed:
            raise ScenarioFileError(source, f"{where}: unknown key {key!r}")
    return entry


def _table_list(entry: dict[str, Any], key: str, where: str, source: str) -> list[Any]:
    value = entry.get(key, [])
    if not isinstance(value, list):
        raise ScenarioFileError(source, f"{where}.{key} must be an array of tables")
    return value


def _parse_step(block: object, where: str, source: str) -> Step:
    block = _check_table(block, BLOCK_KEYS, where, source)

    txs = tuple(
        _parse_tx(tx, f"{where}.tx[{tx_index}]", source)
        for tx_index, tx in enumerate(_table_list(block, "tx", where, source))
    )
    expect_height = block.get("expect_height")
    if expect_height is not None and (
        isinstance(expect_height, bool) or not isinstance(expect_height, int)
    ):
        raise ScenarioFileError(source, f"{where}.expect_height must be an integer")
    return Step(txs=txs, expect_height=expect_height)


def _parse_tx(tx: object, where: str, source: str) -> TxSpec:
    tx = _check_table(tx, TX_KEYS, where, source)

    for key in ("contract", "function"):
        if not tx.get(key):
            raise ScenarioFileError(source, f"{where} is missing {key}")
    for key in ("contract", "function", "sender"):
        if key in tx and not isinstance(tx[key], str):
            raise ScenarioFileError(source, f"{where}.{key} must be a string")

    raw_args = tx.get("args", [])
    if not isinstance(raw_args, list):
        raise ScenarioFileError(source, f"{where}.args must be an array")

    try:
        args = tuple(value_from_dict(arg) for arg in raw_args)
        expect = value_from_dict(tx["expect"]) if "expect" in tx else None
    except (TypeError, ValueError) as e:
        raise ScenarioFileError(source, f"{where}: {e}") from e

    if expect is not None and not isinstance(expect, Ok | Err):
        raise ScenarioFileError(source, f"{where}.expect must be an ok or err value")

    return TxSpec(
        contract=tx["contract"],
        function=tx["function"],
        args=args,
        sender=tx.get("sender", "deployer"),
        expect=expect,
    )
