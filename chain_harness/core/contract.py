"""Contract base class and call context."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from chain_harness.core.receipts import ContractEvent

if TYPE_CHECKING:
    from chain_harness.core.types import Address, ContractName, FunctionName
    from chain_harness.core.values import ClarityValue, Response


class UnknownContract(Exception):
    """Call targeted a contract that is not deployed."""

    def __init__(self, contract: str) -> None:
        self.contract = contract
        super().__init__(f"Call targeted unknown contract: {contract}")


class UnknownFunction(Exception):
    """Call targeted a function the contract does not expose."""

    def __init__(self, contract: str, function: str) -> None:
        self.contract = contract
        self.function = function
        super().__init__(f"Contract {contract} has no function {function}")


class InvalidResponse(Exception):
    """Public function returned something other than ok/err."""

    def __init__(self, contract: str, function: str, value: object) -> None:
        self.contract = contract
        self.function = function
        self.value = value
        super().__init__(
            f"{contract}.{function} must return ok or err, got {type(value).__name__}"
        )


class CallContext:
    """Per-call view of the chain handed to a contract."""

    def __init__(
        self,
        contract: ContractName,
        sender: Address,
        block_height: int,
    ) -> None:
        self.contract = contract
        self.sender = sender
        self.block_height = block_height
        self.events: list[ContractEvent] = []

    def print(self, value: ClarityValue) -> None:
        """Emit an event; dropped if the call ends in err."""
        self.events.append(ContractEvent(contract=self.contract, value=value))


class Contract(ABC):
    """Base class for in-process contracts hosted by the chain.

    Subclasses declare their entry points in ``public_functions`` and
    ``read_only_functions`` and dispatch on the function name in
    ``on_call`` / ``on_read_only``. The chain snapshots a contract's attributes
    before each public call and restores them in place when the call returns
    err, so contracts mutate their own attributes freely.
    """

    public_functions: ClassVar[frozenset[str]] = frozenset()
    read_only_functions: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, name: ContractName) -> None:
        self._name = name

    @property
    def name(self) -> ContractName:
        return self._name

    @abstractmethod
    def on_call(
        self, ctx: CallContext, function: FunctionName, args: tuple[ClarityValue, ...]
    ) -> Response:
        """Single entrypoint for public calls."""
        ...

    def on_read_only(
        self, ctx: CallContext, function: FunctionName, args: tuple[ClarityValue, ...]
    ) -> ClarityValue:
        raise UnknownFunction(self._name, function)
