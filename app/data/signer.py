from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from typing import Optional

from eth_account import Account
from eth_account.messages import encode_defunct


def generate_public_key() -> str:
    """Placeholder key material shown in the signature request (2000 hex digits)."""
    return "0x" + "".join(secrets.choice("0123456789abcdef") for _ in range(2000))


@dataclass(frozen=True)
class SignatureRequest:
    public_key: str
    contract_address: str
    chain_id: int
    start_timestamp: int = field(default_factory=lambda: int(time.time()))
    duration_days: int = 30

    def message(self) -> str:
        return (
            f"publickey:{self.public_key}\n"
            f"contractAddresses:{self.contract_address}\n"
            f"contractsChainId:{self.chain_id}\n"
            f"startTimestamp:{self.start_timestamp}\n"
            f"durationDays:{self.duration_days}"
        )


class Signer:
    """An institution's credential: an Ethereum account that signs personal messages."""

    def __init__(self, account):
        self._account = account

    @property
    def address(self) -> str:
        return self._account.address

    def sign_message(self, text: str) -> str:
        signed = self._account.sign_message(encode_defunct(text=text))
        return "0x" + bytes(signed.signature).hex()


def load_signer(private_key: Optional[str] = None) -> Signer:
    if private_key:
        return Signer(Account.from_key(private_key))
    return Signer(Account.create())


def recover_signer(text: str, signature: str) -> str:
    return Account.recover_message(encode_defunct(text=text), signature=signature)


def is_owner(address: Optional[str], institution: str) -> bool:
    return bool(address) and address.lower() == institution.lower()
