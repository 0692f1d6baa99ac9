"""Tests for transaction descriptors."""

import pytest

from chain_harness.core.accounts import Account
from chain_harness.core.transactions import ContractCall, MalformedTransaction, contract_call
from chain_harness.core.types import Address, ContractName, FunctionName
from chain_harness.core.values import UInt, Utf8


class TestContractCall:
    def test_build_from_account(self, deployer: Account) -> None:
        tx = contract_call("arbitrage-tracker", "execute-arbitrage-strategy", [UInt(1)], deployer)

        assert tx.contract == "arbitrage-tracker"
        assert tx.function == "execute-arbitrage-strategy"
        assert tx.args == (UInt(1),)
        assert tx.sender == deployer.address

    def test_build_from_raw_address(self) -> None:
        tx = contract_call("c", "f", [], "ST123")
        assert tx.sender == "ST123"

    def test_args_default_to_empty(self) -> None:
        tx = contract_call("c", "f", None, "ST123")
        assert tx.args == ()

    def test_list_args_stored_as_tuple(self) -> None:
        tx = ContractCall(
            contract=ContractName("c"),
            function=FunctionName("f"),
            args=[UInt(1), Utf8("x")],  # type: ignore[arg-type]
            sender=Address("ST123"),
        )
        assert tx.args == (UInt(1), Utf8("x"))

    def test_immutable(self, deployer: Account) -> None:
        tx = contract_call("c", "f", [], deployer)

        with pytest.raises(AttributeError):
            tx.contract = ContractName("other")  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("contract", "function", "sender", "field"),
        [
            ("", "f", "ST1", "contract"),
            (None, "f", "ST1", "contract"),
            ("c", "", "ST1", "function"),
            ("c", "f", "", "sender"),
            ("c", "f", None, "sender"),
        ],
    )
    def test_missing_required_field(
        self, contract: str, function: str, sender: str, field: str
    ) -> None:
        with pytest.raises(MalformedTransaction) as exc_info:
            contract_call(contract, function, [], sender)

        assert exc_info.value.field == field

    def test_untagged_argument_rejected(self) -> None:
        with pytest.raises(MalformedTransaction, match=r"args\[1\]"):
            contract_call("c", "f", [UInt(1), 2], "ST1")  # type: ignore[list-item]

    def test_argument_semantics_not_checked(self) -> None:
        """Arity and types are the contract's business at execution time."""
        tx = contract_call("arbitrage-tracker", "create-arbitrage-strategy", [UInt(1)], "ST1")
        assert len(tx.args) == 1
