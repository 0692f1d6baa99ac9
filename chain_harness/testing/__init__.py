"""Receipt and block assertions for tests."""

from chain_harness.testing.assertions import (
    ReceiptAssertionError,
    assert_block,
    assert_receipt,
    assert_receipts,
    expect_err,
    expect_ok,
)

__all__ = [
    "ReceiptAssertionError",
    "assert_block",
    "assert_receipt",
    "assert_receipts",
    "expect_err",
    "expect_ok",
]
