"""In-process ``arbitrage-tracker`` contract.

Stores strategy records and execution records. Only id allocation and the
existence check on execution are enforced; frequency, risk level and
allocation are recorded as given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chain_harness.core.contract import CallContext, Contract
from chain_harness.core.types import Address, ContractName, FunctionName
from chain_harness.core.values import Ascii, Err, Ok, UInt, Utf8

if TYPE_CHECKING:
    from chain_harness.core.values import ClarityValue, Response

CONTRACT_NAME = ContractName("arbitrage-tracker")

CREATE_STRATEGY = FunctionName("create-arbitrage-strategy")
EXECUTE_STRATEGY = FunctionName("execute-arbitrage-strategy")
GET_STRATEGY = FunctionName("get-strategy")
GET_STRATEGY_COUNT = FunctionName("get-strategy-count")

ERR_BAD_ARGUMENTS = UInt(400)
ERR_STRATEGY_NOT_FOUND = UInt(404)


@dataclass
class Strategy:
    strategy_id: int
    owner: Address
    name: str
    description: str
    source_chain: str
    target_chain: str
    frequency: int
    risk_level: int
    max_allocation: int
    created_at: int  # block height
    executions: int = 0


@dataclass
class Execution:
    execution_id: int
    strategy_id: int
    executor: Address
    amount: int
    notes: str
    block_height: int


class ArbitrageTracker(Contract):
    public_functions = frozenset({CREATE_STRATEGY, EXECUTE_STRATEGY})
    read_only_functions = frozenset({GET_STRATEGY, GET_STRATEGY_COUNT})

    def __init__(self, name: ContractName = CONTRACT_NAME) -> None:
        super().__init__(name)
        self._strategies: dict[int, Strategy] = {}
        self._executions: list[Execution] = []

    @property
    def strategies(self) -> dict[int, Strategy]:
        return self._strategies

    @property
    def executions(self) -> list[Execution]:
        return self._executions

    def on_call(
        self, ctx: CallContext, function: FunctionName, args: tuple[ClarityValue, ...]
    ) -> Response:
        match function:
            case "create-arbitrage-strategy":
                return self._create_strategy(ctx, args)
            case "execute-arbitrage-strategy":
                return self._execute_strategy(ctx, args)
            case _:
                return Err(ERR_BAD_ARGUMENTS)

    def on_read_only(
        self, ctx: CallContext, function: FunctionName, args: tuple[ClarityValue, ...]
    ) -> ClarityValue:
        match function, args:
            case "get-strategy-count", ():
                return UInt(len(self._strategies))
            case "get-strategy", (UInt(value=strategy_id),):
                strategy = self._strategies.get(strategy_id)
                if strategy is None:
                    return Err(ERR_STRATEGY_NOT_FOUND)
                return Ok(Ascii(strategy.name))
            case _:
                return Err(ERR_BAD_ARGUMENTS)

    def _create_strategy(self, ctx: CallContext, args: tuple[ClarityValue, ...]) -> Response:
        match args:
            case (
                Ascii(value=name),
                Utf8(value=description),
                Ascii(value=source_chain),
                Ascii(value=target_chain),
                UInt(value=frequency),
                UInt(value=risk_level),
                UInt(value=max_allocation),
            ):
                pass
            case _:
                return Err(ERR_BAD_ARGUMENTS)

        strategy_id = len(self._strategies) + 1
        self._strategies[strategy_id] = Strategy(
            strategy_id=strategy_id,
            owner=ctx.sender,
            name=name,
            description=description,
            source_chain=source_chain,
            target_chain=target_chain,
            frequency=frequency,
            risk_level=risk_level,
            max_allocation=max_allocation,
            created_at=ctx.block_height,
        )
        ctx.print(UInt(strategy_id))
        return Ok(UInt(strategy_id))

    def _execute_strategy(self, ctx: CallContext, args: tuple[ClarityValue, ...]) -> Response:
        match args:
            case (UInt(value=strategy_id), UInt(value=amount), Utf8(value=notes)):
                pass
            case _:
                return Err(ERR_BAD_ARGUMENTS)

        strategy = self._strategies.get(strategy_id)
        if strategy is None:
            return Err(ERR_STRATEGY_NOT_FOUND)

        execution_id = len(self._executions) + 1
        self._executions.append(
            Execution(
                execution_id=execution_id,
                strategy_id=strategy_id,
                executor=ctx.sender,
                amount=amount,
                notes=notes,
                block_height=ctx.block_height,
            )
        )
        strategy.executions += 1
        ctx.print(UInt(execution_id))
        return Ok(UInt(execution_id))
