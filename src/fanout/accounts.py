"""Private key -> address + signer."""

import logging
import re
from dataclasses import dataclass, field

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_keys import constants as eth_constants

from fanout.constants import ErrorKind
from fanout.errors import DispatchError

log = logging.getLogger("fanout.accounts")

SECP256K1_N = eth_constants.SECPK1_N

_HEX64 = re.compile(r"[0-9a-fA-F]{64}")


@dataclass(frozen=True)
class ResolvedAccount:
    address: str  # checksummed
    signer: LocalAccount = field(repr=False, compare=False)


def _strip_0x(s: str) -> str:
    return s[2:] if s[:2] in ("0x", "0X") else s


def resolve_account(secret: str) -> ResolvedAccount:
    """Derive the account for a hex private key (optional 0x prefix).

    Raises DispatchError(InvalidKey) unless the secret is 32 bytes of hex in
    the range [1, n) of secp256k1. Never touches the network.
    """
    if not isinstance(secret, str):
        raise DispatchError(ErrorKind.INVALID_KEY, f"private key must be a string, got {type(secret).__name__}")
    key_hex = _strip_0x(secret.strip())
    if not _HEX64.fullmatch(key_hex):
        raise DispatchError(ErrorKind.INVALID_KEY, f"private key must be 64 hex characters, got {len(key_hex)}")
    if not 0 < int(key_hex, 16) < SECP256K1_N:
        raise DispatchError(ErrorKind.INVALID_KEY, "private key is outside the secp256k1 range")
    try:
        acct = Account.from_key(bytes.fromhex(key_hex))
    except ValueError as e:
        raise DispatchError(ErrorKind.INVALID_KEY, f"cannot load private key: {e}") from e
    log.debug("Resolved key to %s", acct.address)
    return ResolvedAccount(address=acct.address, signer=acct)
