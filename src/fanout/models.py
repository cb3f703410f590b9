"""Transaction and outcome data structures."""

from dataclasses import dataclass, field
from typing import Any

from fanout.constants import ErrorKind


@dataclass(frozen=True, slots=True)
class UnsignedTransaction:
    """Legacy (pre-1559) transfer, amounts in wei."""

    nonce: int
    to: str  # checksummed
    value: int
    gas: int
    gas_price: int
    data: bytes = b""

    def to_signable(self, chain_id: int) -> dict[str, Any]:
        """Field dict in the shape eth_account expects for an EIP-155 legacy txn."""
        return {
            "nonce": self.nonce,
            "to": self.to,
            "value": self.value,
            "gas": self.gas,
            "gasPrice": self.gas_price,
            "data": "0x" + self.data.hex(),
            "chainId": chain_id,
        }


@dataclass(frozen=True, slots=True)
class SignedTransaction:
    txn: UnsignedTransaction
    chain_id: int
    raw: bytes = field(repr=False)
    tx_hash: str  # 0x-prefixed keccak of raw

    @property
    def raw_hex(self) -> str:
        return "0x" + self.raw.hex()


@dataclass(frozen=True, slots=True)
class Success:
    index: int
    address: str
    tx_hash: str


@dataclass(frozen=True, slots=True)
class Failure:
    index: int
    address: str  # empty when the key never resolved
    kind: ErrorKind
    detail: str


Outcome = Success | Failure
