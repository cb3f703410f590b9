import binascii
import logging
import re

from eth_utils import decode_hex, to_checksum_address

from fanout.accounts import ResolvedAccount
from fanout.config import DispatchConfig
import fanout.constants as C
from fanout.constants import ErrorKind
from fanout.errors import DispatchError, LedgerError
from fanout.ledger import LedgerClient
from fanout.models import UnsignedTransaction

log = logging.getLogger("fanout.builder")

_DECIMAL = re.compile(r"[0-9]+")
_UINT256_DIGITS = len(str(C.UINT256_MAX))


def parse_base_units(text: str, kind: ErrorKind) -> int:
    """Base-10, non-negative, at most uint256. Empty string is zero."""
    if text == "":
        return 0
    if not _DECIMAL.fullmatch(text):
        raise DispatchError(kind, f"not a non-negative base-10 integer: {text!r}")
    # int() refuses very long strings, so bound the digit count first
    digits = text.lstrip("0") or "0"
    if len(digits) > _UINT256_DIGITS or int(digits) > C.UINT256_MAX:
        raise DispatchError(kind, f"does not fit in 256 bits: {text[:20]}... ({len(text)} digits)")
    return int(digits)


def decode_call_data(text: str) -> bytes:
    """Hex call data with optional 0x prefix. Empty yields no payload."""
    if not text:
        return b""
    try:
        return decode_hex(text)
    except (binascii.Error, ValueError) as e:
        raise DispatchError(ErrorKind.INVALID_DATA, f"malformed hex data: {e}") from e


async def build_transaction(
    account: ResolvedAccount,
    config: DispatchConfig,
    ledger: LedgerClient,
) -> UnsignedTransaction:
    addr = account.address

    try:
        nonce = await ledger.pending_nonce(addr)
    except LedgerError as e:
        raise DispatchError(ErrorKind.NONCE_QUERY_FAILED, f"nonce lookup failed: {e}", addr) from e

    try:
        value = parse_base_units(config.value, ErrorKind.INVALID_AMOUNT)
        if config.gas_price:
            gas_price = parse_base_units(config.gas_price, ErrorKind.INVALID_GAS_PRICE)
        else:
            try:
                gas_price = await ledger.suggested_gas_price()
            except LedgerError as e:
                raise DispatchError(ErrorKind.GAS_PRICE_QUERY_FAILED, f"gas price lookup failed: {e}") from e
        data = decode_call_data(config.data)
    except DispatchError as e:
        e.address = addr
        raise

    log.debug("%s nonce=%d value=%d gas=%d gas_price=%d data=%dB",
              addr, nonce, value, config.gas_limit, gas_price, len(data))
    return UnsignedTransaction(
        nonce=nonce,
        to=to_checksum_address(config.to_address),
        value=value,
        gas=config.gas_limit,
        gas_price=gas_price,
        data=data,
    )
