"""Core type aliases for the harness."""

from typing import NewType

# Standard principal - "ST" followed by a base32 encoded hash
Address = NewType("Address", str)

# Name a contract is deployed under, e.g. "arbitrage-tracker"
ContractName = NewType("ContractName", str)

# Public or read-only entry point of a contract
FunctionName = NewType("FunctionName", str)

# Human-readable account label, e.g. "deployer"
AccountLabel = NewType("AccountLabel", str)
