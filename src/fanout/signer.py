"""EIP-155 signing: the chain id is folded into v, so the signed txn is only
valid on that chain."""

from eth_utils import ValidationError, to_hex
from rlp.exceptions import RLPException

import fanout.constants as C
from fanout.accounts import ResolvedAccount
from fanout.constants import ErrorKind
from fanout.errors import DispatchError
from fanout.models import SignedTransaction, UnsignedTransaction


def _check_ranges(txn: UnsignedTransaction, chain_id: int) -> None:
    """Field widths of a legacy txn; rlp would encode anything non-negative."""
    limits = (
        ("nonce", txn.nonce, C.UINT64_MAX),
        ("gas", txn.gas, C.UINT64_MAX),
        ("gas_price", txn.gas_price, C.UINT256_MAX),
        ("value", txn.value, C.UINT256_MAX),
    )
    for name, value, upper in limits:
        if not 0 <= value <= upper:
            raise ValueError(f"{name} {value} outside [0, {upper}]")
    if not 1 <= chain_id <= C.UINT64_MAX:
        raise ValueError(f"chain id {chain_id} outside [1, {C.UINT64_MAX}]")


def sign_transaction(txn: UnsignedTransaction, chain_id: int, account: ResolvedAccount) -> SignedTransaction:
    try:
        _check_ranges(txn, chain_id)
        signed = account.signer.sign_transaction(txn.to_signable(chain_id))
    except (ValueError, TypeError, ValidationError, RLPException) as e:
        raise DispatchError(ErrorKind.SIGNING_FAILED, f"signing failed: {e}", account.address) from e
    return SignedTransaction(
        txn=txn,
        chain_id=chain_id,
        raw=bytes(signed.raw_transaction),
        tx_hash=to_hex(signed.hash),
    )
