"""Core ledger infrastructure."""

from chain_harness.core.accounts import Account, AccountRegistry, UnknownAccount
from chain_harness.core.chain import Chain
from chain_harness.core.contract import (
    CallContext,
    Contract,
    InvalidResponse,
    UnknownContract,
    UnknownFunction,
)
from chain_harness.core.receipts import Block, ContractEvent, Receipt
from chain_harness.core.transactions import ContractCall, MalformedTransaction, contract_call
from chain_harness.core.types import AccountLabel, Address, ContractName, FunctionName
from chain_harness.core.values import (
    Ascii,
    Bool,
    ClarityValue,
    Err,
    Int,
    Ok,
    Principal,
    Response,
    UInt,
    Utf8,
    serialize,
)

__all__ = [
    "Account",
    "AccountLabel",
    "AccountRegistry",
    "Address",
    "Ascii",
    "Block",
    "Bool",
    "CallContext",
    "Chain",
    "ClarityValue",
    "Contract",
    "ContractCall",
    "ContractEvent",
    "ContractName",
    "Err",
    "FunctionName",
    "Int",
    "InvalidResponse",
    "MalformedTransaction",
    "Ok",
    "Principal",
    "Receipt",
    "Response",
    "UInt",
    "UnknownAccount",
    "UnknownContract",
    "UnknownFunction",
    "Utf8",
    "contract_call",
    "serialize",
]
