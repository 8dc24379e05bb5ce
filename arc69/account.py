"""Signing account used to authorise asset configuration transactions."""

from __future__ import annotations

from dataclasses import dataclass, field

from algosdk import account, mnemonic
from algosdk.error import WrongChecksumError, WrongMnemonicLengthError


@dataclass(frozen=True)
class SigningAccount:
    address: str
    private_key: str = field(repr=False)

    @classmethod
    def from_private_key(cls, private_key: str) -> "SigningAccount":
        key = private_key.strip()
        try:
            address = account.address_from_private_key(key)
        except (ValueError, TypeError) as e:
            raise ValueError("Invalid private key") from e
        return cls(address=address, private_key=key)

    @classmethod
    def from_mnemonic(cls, words: str) -> "SigningAccount":
        normalized = " ".join(words.split()).lower()
        try:
            private_key = mnemonic.to_private_key(normalized)
        except (
            WrongChecksumError,
            WrongMnemonicLengthError,
            ValueError,
            KeyError,
        ) as e:
            raise ValueError("Invalid mnemonic") from e
        return cls.from_private_key(private_key)

    @classmethod
    def generate(cls) -> "SigningAccount":
        private_key, address = account.generate_account()
        return cls(address=address, private_key=private_key)

    def to_mnemonic(self) -> str:
        return mnemonic.from_private_key(self.private_key)
