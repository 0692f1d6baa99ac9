"""Test accounts and the label registry."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chain_harness.core.types import AccountLabel, Address

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

C32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ADDRESS_PREFIX = "ST"
ADDRESS_BODY_LENGTH = 39  # 20-byte hash + 4-byte checksum in base32

DEPLOYER = AccountLabel("deployer")


def derive_address(label: str, seed: int) -> Address:
    """Derive a stable testnet-style address for a label."""
    digest = hashlib.sha256(f"{seed}:{label}".encode()).digest()[:20]
    checksum = hashlib.sha256(hashlib.sha256(digest).digest()).digest()[:4]
    number = int.from_bytes(digest + checksum, "big")

    chars: list[str] = []
    while number:
        number, rem = divmod(number, 32)
        chars.append(C32_ALPHABET[rem])
    body = "".join(reversed(chars)).rjust(ADDRESS_BODY_LENGTH, "0")
    return Address(ADDRESS_PREFIX + body)


@dataclass(frozen=True)
class Account:
    label: AccountLabel
    address: Address
    balance: int = 0  # micro-units


class UnknownAccount(KeyError):
    """Lookup of a label that was never registered."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Unknown account: {label}")


class AccountRegistry:
    """Fixed label -> Account mapping prepared before any scenario runs."""

    def __init__(self, accounts: Iterable[Account]) -> None:
        self._by_label: dict[AccountLabel, Account] = {}
        for account in accounts:
            if account.label in self._by_label:
                raise ValueError(f"Account {account.label} already registered")
            self._by_label[account.label] = account

    @classmethod
    def build(
        cls,
        labels: Iterable[str],
        seed: int = 0,
        balance: int = 0,
    ) -> AccountRegistry:
        return cls(
            Account(
                label=AccountLabel(label),
                address=derive_address(label, seed),
                balance=balance,
            )
            for label in labels
        )

    def get(self, label: str) -> Account:
        account = self._by_label.get(AccountLabel(label))
        if account is None:
            raise UnknownAccount(label)
        return account

    def __getitem__(self, label: str) -> Account:
        return self.get(label)

    def __contains__(self, label: object) -> bool:
        return label in self._by_label

    def __iter__(self) -> Iterator[Account]:
        return iter(self._by_label.values())

    def __len__(self) -> int:
        return len(self._by_label)

