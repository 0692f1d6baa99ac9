"""In-memory ledger that mines blocks of contract calls."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from chain_harness.core.contract import (
    CallContext,
    InvalidResponse,
    UnknownContract,
    UnknownFunction,
)
from chain_harness.core.receipts import Block, Receipt
from chain_harness.core.types import Address, ContractName, FunctionName
from chain_harness.core.values import ClarityValue, Err, Ok

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chain_harness.config import HarnessConfig
    from chain_harness.core.accounts import AccountRegistry
    from chain_harness.core.contract import Contract
    from chain_harness.core.transactions import ContractCall


class Chain:
    """Single-threaded, deterministic ledger simulator.

    Each ``mine_block`` call applies its transactions in submission order,
    produces exactly one receipt per transaction and advances the height by
    one. A call that returns err has its contract state and events rolled
    back; other transactions in the block are unaffected. If a harness-level
    error interrupts a block, every contract is restored to its state before
    the block and the height does not move.
    """

    def __init__(
        self,
        accounts: AccountRegistry | None = None,
        genesis_height: int = 1,
    ) -> None:
        self._genesis_height = genesis_height
        self._height = genesis_height
        self._contracts: dict[ContractName, Contract] = {}
        self._accounts = accounts
        self._blocks: list[Block] = []
        self._txs_processed: int = 0

    @property
    def block_height(self) -> int:
        return self._height

    @property
    def genesis_height(self) -> int:
        return self._genesis_height

    @property
    def blocks(self) -> list[Block]:
        return list(self._blocks)

    @property
    def txs_processed(self) -> int:
        return self._txs_processed

    @property
    def contracts(self) -> dict[ContractName, Contract]:
        return dict(self._contracts)

    @property
    def accounts(self) -> AccountRegistry:
        if self._accounts is None:
            raise RuntimeError("Chain not configured with accounts")
        return self._accounts

    def contract(self, name: str) -> Contract:
        contract = self._contracts.get(ContractName(name))
        if contract is None:
            raise UnknownContract(name)
        return contract

    def deploy(self, contract: Contract) -> None:
        if contract.name in self._contracts:
            raise ValueError(f"Contract {contract.name} already deployed")
        self._contracts[contract.name] = contract

    def mine_block(self, transactions: Iterable[ContractCall]) -> Block:
        txs = list(transactions)

        # Reject the whole batch before anything executes
        for tx in txs:
            if tx.function not in self.contract(tx.contract).public_functions:
                raise UnknownFunction(tx.contract, tx.function)

        height = self._height + 1
        before_block = {name: _snapshot(c) for name, c in self._contracts.items()}
        try:
            receipts = tuple(self._apply(tx, index, height) for index, tx in enumerate(txs))
        except Exception:
            for name, state in before_block.items():
                _restore(self._contracts[name], state)
            raise

        block = Block(height=height, receipts=receipts)
        self._height = height
        self._blocks.append(block)
        self._txs_processed += len(receipts)
        return block

    def mine_empty_block(self, count: int = 1) -> Block:
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        block = self.mine_block([])
        for _ in range(count - 1):
            block = self.mine_block([])
        return block

    def call_read_only(
        self,
        contract: str,
        function: str,
        args: Iterable[ClarityValue] = (),
        sender: str | None = None,
    ) -> ClarityValue:
        """Evaluate a read-only function against current state."""
        target = self.contract(contract)
        if function not in target.read_only_functions:
            raise UnknownFunction(contract, function)

        if sender is None:
            sender = target.name
        ctx = CallContext(
            contract=target.name,
            sender=Address(sender),
            block_height=self._height,
        )
        value = target.on_read_only(ctx, FunctionName(function), tuple(args))
        if not isinstance(value, ClarityValue):
            raise InvalidResponse(contract, function, value)
        return value

    def _apply(self, tx: ContractCall, index: int, height: int) -> Receipt:
        contract = self._contracts[tx.contract]
        snapshot = _snapshot(contract)
        ctx = CallContext(contract=tx.contract, sender=tx.sender, block_height=height)

        result = contract.on_call(ctx, tx.function, tx.args)

        match result:
            case Ok():
                events = tuple(ctx.events)
            case Err():
                _restore(contract, snapshot)
                events = ()
            case _:
                raise InvalidResponse(tx.contract, tx.function, result)

        return Receipt(result=result, tx=tx, index=index, events=events)

    @classmethod
    def build(cls, config: HarnessConfig | None = None) -> Chain:
        """Build a chain at genesis with accounts and default contracts deployed."""
        from chain_harness.config import HarnessConfig
        from chain_harness.contracts import create_contract
        from chain_harness.core.accounts import AccountRegistry

        if config is None:
            config = HarnessConfig()

        accounts = AccountRegistry.build(
            config.account_labels,
            seed=config.seed,
            balance=config.initial_balance,
        )
        chain = cls(accounts=accounts, genesis_height=config.genesis_height)

        for name in config.contracts:
            chain.deploy(create_contract(name))

        return chain


def _snapshot(contract: Contract) -> dict[str, Any]:
    return copy.deepcopy(vars(contract))


def _restore(contract: Contract, state: dict[str, Any]) -> None:
    # Object identity is preserved
    contract.__dict__.clear()
    contract.__dict__.update(state)
