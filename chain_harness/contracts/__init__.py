"""Contracts the chain can deploy by name."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chain_harness.contracts.arbitrage_tracker import CONTRACT_NAME, ArbitrageTracker

if TYPE_CHECKING:
    from collections.abc import Callable

    from chain_harness.core.contract import Contract

CONTRACT_FACTORIES: dict[str, Callable[[], Contract]] = {
    CONTRACT_NAME: ArbitrageTracker,
}


def create_contract(name: str) -> Contract:
    factory = CONTRACT_FACTORIES.get(name)
    if factory is None:
        known = ", ".join(sorted(CONTRACT_FACTORIES))
        raise ValueError(f"No contract named {name!r} (known: {known})")
    return factory()


__all__ = ["CONTRACT_FACTORIES", "ArbitrageTracker", "create_contract"]
