"""Signing identities that private connections are bound to."""

from __future__ import annotations

from typing import Protocol, cast

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..exceptions import ValidationError
from ..types import Address


class SigningIdentity(Protocol):
    """Anything able to report its current address asynchronously."""

    async def get_address(self) -> Address: ...


class AccountIdentity:
    """Signing identity backed by an in-memory ``LocalAccount``."""

    def __init__(self, account: LocalAccount) -> None:
        self.account = account

    @classmethod
    def from_key(cls, private_key: str) -> AccountIdentity:
        try:
            account = cast(LocalAccount, Account.from_key(private_key))
        except Exception as exc:
            raise ValidationError(
                "Failed to derive signer account from provided private key",
                field="private_key",
                details={"error": str(exc)},
            ) from exc
        return cls(account)

    async def get_address(self) -> Address:
        return self.account.address
