"""Transaction descriptors submitted to the chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chain_harness.core.accounts import Account
from chain_harness.core.types import Address, ContractName, FunctionName
from chain_harness.core.values import ClarityValue

if TYPE_CHECKING:
    from collections.abc import Iterable


class MalformedTransaction(Exception):
    """A descriptor is missing a required field or carries an untagged argument."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed transaction: {field} {reason}")


@dataclass(frozen=True)
class ContractCall:
    """Call of a public function on a deployed contract.

    Arguments are not checked against the function signature; that is the
    contract's job when the block is mined.
    """

    contract: ContractName
    function: FunctionName
    args: tuple[ClarityValue, ...]
    sender: Address

    def __post_init__(self) -> None:
        if not self.contract:
            raise MalformedTransaction("contract", "is required")
        if not self.function:
            raise MalformedTransaction("function", "is required")
        if not self.sender:
            raise MalformedTransaction("sender", "is required")
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
        for index, arg in enumerate(self.args):
            if not isinstance(arg, ClarityValue):
                raise MalformedTransaction(
                    f"args[{index}]", f"is not a tagged value: {type(arg).__name__}"
                )


def contract_call(
    contract: str,
    function: str,
    args: Iterable[ClarityValue] | None,
    sender: Account | str,
) -> ContractCall:
    """Build a ``ContractCall`` from an account or a raw address."""
    address = sender.address if isinstance(sender, Account) else sender
    return ContractCall(
        contract=ContractName(contract),
        function=FunctionName(function),
        args=tuple(args or ()),
        sender=Address(address),
    )
