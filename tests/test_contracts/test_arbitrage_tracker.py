"""Tests for the arbitrage-tracker contract."""

from chain_harness.contracts.arbitrage_tracker import (
    ERR_BAD_ARGUMENTS,
    ERR_STRATEGY_NOT_FOUND,
    ArbitrageTracker,
)
from chain_harness.core.accounts import Account, AccountRegistry
from chain_harness.core.chain import Chain
from chain_harness.core.transactions import ContractCall, contract_call
from chain_harness.core.values import Ascii, Err, Ok, UInt, Utf8
from chain_harness.scenarios.arbitrage import CREATE_STRATEGY_ARGS, execute_strategy_args
from chain_harness.testing.assertions import assert_block, assert_receipt, expect_err


def create_strategy(sender: Account) -> ContractCall:
    return contract_call(
        "arbitrage-tracker", "create-arbitrage-strategy", CREATE_STRATEGY_ARGS, sender
    )


def execute_strategy(sender: Account, strategy_id: int = 1) -> ContractCall:
    return contract_call(
        "arbitrage-tracker",
        "execute-arbitrage-strategy",
        execute_strategy_args(strategy_id),
        sender,
    )


def tracker(chain: Chain) -> ArbitrageTracker:
    contract = chain.contract("arbitrage-tracker")
    assert isinstance(contract, ArbitrageTracker)
    return contract


class TestCreateStrategy:
    def test_create_arbitrage_strategy(self, chain: Chain, deployer: Account) -> None:
        block = chain.mine_block([create_strategy(deployer)])

        assert_block(block, height=2, receipt_count=1)
        assert_receipt(block.receipts[0], Ok(UInt(1)))

    def test_ids_increase_by_one(self, chain: Chain, deployer: Account) -> None:
        block = chain.mine_block([create_strategy(deployer), create_strategy(deployer)])

        assert_receipt(block.receipts[0], Ok(UInt(1)))
        assert_receipt(block.receipts[1], Ok(UInt(2)))
        assert chain.call_read_only("arbitrage-tracker", "get-strategy-count") == UInt(2)

    def test_record_stored_as_given(self, chain: Chain, deployer: Account) -> None:
        chain.mine_block([create_strategy(deployer)])

        strategy = tracker(chain).strategies[1]
        assert strategy.owner == deployer.address
        assert strategy.name == "Eth-Btc Cross-Chain"
        assert strategy.source_chain == "ethereum"
        assert strategy.target_chain == "bitcoin"
        assert (strategy.frequency, strategy.risk_level, strategy.max_allocation) == (2, 1, 1000)
        assert strategy.created_at == 2

    def test_wrong_arguments(self, chain: Chain, deployer: Account) -> None:
        tx = contract_call(
            "arbitrage-tracker", "create-arbitrage-strategy", [Ascii("only a name")], deployer
        )
        block = chain.mine_block([tx])

        assert_receipt(block.receipts[0], Err(ERR_BAD_ARGUMENTS))
        assert tracker(chain).strategies == {}

    def test_get_strategy(self, chain: Chain, deployer: Account) -> None:
        chain.mine_block([create_strategy(deployer)])

        assert chain.call_read_only("arbitrage-tracker", "get-strategy", [UInt(1)]) == Ok(
            Ascii("Eth-Btc Cross-Chain")
        )
        assert chain.call_read_only("arbitrage-tracker", "get-strategy", [UInt(9)]) == Err(
            ERR_STRATEGY_NOT_FOUND
        )


class TestExecuteStrategy:
    def test_execute_arbitrage_strategy(self, chain: Chain, deployer: Account) -> None:
        chain.mine_block([create_strategy(deployer)])
        block = chain.mine_block([execute_strategy(deployer)])

        assert_block(block, height=3, receipt_count=1)
        assert_receipt(block.receipts[0], Ok(UInt(1)))

    def test_unknown_strategy(self, chain: Chain, deployer: Account) -> None:
        block = chain.mine_block([execute_strategy(deployer, strategy_id=7)])

        assert expect_err(block.receipts[0]) == ERR_STRATEGY_NOT_FOUND
        assert tracker(chain).executions == []

    def test_create_and_execute_in_one_block(self, chain: Chain, deployer: Account) -> None:
        block = chain.mine_block([create_strategy(deployer), execute_strategy(deployer)])

        assert_block(block, height=2, receipt_count=2)
        assert_receipt(block.receipts[1], Ok(UInt(1)))

    def test_execution_recorded(self, chain: Chain, accounts: AccountRegistry) -> None:
        deployer = accounts.get("deployer")
        wallet = accounts.get("wallet_1")
        chain.mine_block([create_strategy(deployer)])
        chain.mine_block([execute_strategy(wallet), execute_strategy(wallet)])

        contract = tracker(chain)
        assert [e.execution_id for e in contract.executions] == [1, 2]
        assert contract.executions[0].executor == wallet.address
        assert contract.executions[0].amount == 500
        assert contract.executions[0].block_height == 3
        assert contract.strategies[1].executions == 2

    def test_wrong_argument_tag(self, chain: Chain, deployer: Account) -> None:
        chain.mine_block([create_strategy(deployer)])
        tx = contract_call(
            "arbitrage-tracker",
            "execute-arbitrage-strategy",
            [UInt(1), UInt(500), Ascii("notes must be utf8")],
            deployer,
        )
        block = chain.mine_block([tx])

        assert_receipt(block.receipts[0], Err(ERR_BAD_ARGUMENTS))

    def test_events_emitted_on_success(self, chain: Chain, deployer: Account) -> None:
        chain.mine_block([create_strategy(deployer)])
        block = chain.mine_block([execute_strategy(deployer)])

        assert [e.value for e in block.receipts[0].events] == [UInt(1)]

    def test_err_emits_no_events(self, chain: Chain, deployer: Account) -> None:
        block = chain.mine_block([execute_strategy(deployer, strategy_id=2)])

        assert block.receipts[0].events == ()

    def test_held_contract_sees_state_after_err(self, chain: Chain, deployer: Account) -> None:
        held = tracker(chain)

        failed = chain.mine_block([execute_strategy(deployer, strategy_id=9)])
        chain.mine_block([create_strategy(deployer)])

        assert_receipt(failed.receipts[0], Err(ERR_STRATEGY_NOT_FOUND))
        assert held is tracker(chain)
        assert list(held.strategies) == [1]


def test_utf8_description_accepts_non_ascii(chain: Chain, deployer: Account) -> None:
    args = list(CREATE_STRATEGY_ARGS)
    args[1] = Utf8("Ethereum → Bitcoin")
    tx = contract_call("arbitrage-tracker", "create-arbitrage-strategy", args, deployer)

    block = chain.mine_block([tx])

    assert_receipt(block.receipts[0], Ok(UInt(1)))
