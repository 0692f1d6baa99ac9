"""Receipts and block records returned by the chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from chain_harness.core.values import Ok, serialize, value_to_dict

if TYPE_CHECKING:
    from chain_harness.core.transactions import ContractCall
    from chain_harness.core.types import ContractName
    from chain_harness.core.values import ClarityValue, Response


@dataclass(frozen=True)
class ContractEvent:
    """Value printed by a contract during a call."""

    contract: ContractName
    value: ClarityValue


@dataclass(frozen=True)
class Receipt:
    """Outcome of one transaction in a mined block."""

    result: Response
    tx: ContractCall
    index: int
    events: tuple[ContractEvent, ...] = ()

    @property
    def is_ok(self) -> bool:
        return isinstance(self.result, Ok)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "contract": self.tx.contract,
            "function": self.tx.function,
            "sender": self.tx.sender,
            "result": serialize(self.result),
            "events": [serialize(event.value) for event in self.events],
        }


@dataclass(frozen=True)
class Block:
    """A mined block: its height and one receipt per submitted transaction."""

    height: int
    receipts: tuple[Receipt, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "height": self.height,
            "receipts": [receipt.to_dict() for receipt in self.receipts],
        }

    def outcomes(self) -> list[dict[str, Any]]:
        """Plain-dict results, in receipt order, for comparing runs."""
        return [value_to_dict(receipt.result) for receipt in self.receipts]
