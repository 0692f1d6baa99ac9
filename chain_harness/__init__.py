"""Contract-test harness: build transactions, mine blocks, assert on receipts."""

from chain_harness.config import HarnessConfig
from chain_harness.core.chain import Chain
from chain_harness.core.transactions import contract_call
from chain_harness.testing.assertions import assert_block, assert_receipt

__all__ = [
    "Chain",
    "HarnessConfig",
    "assert_block",
    "assert_receipt",
    "contract_call",
]
