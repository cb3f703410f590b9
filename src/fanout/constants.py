from typing import Final
from enum import StrEnum


class ErrorKind(StrEnum):
    INVALID_KEY            = "InvalidKey"
    NONCE_QUERY_FAILED     = "NonceQueryFailed"
    GAS_PRICE_QUERY_FAILED = "GasPriceQueryFailed"
    INVALID_AMOUNT         = "InvalidAmount"
    INVALID_GAS_PRICE      = "InvalidGasPrice"
    INVALID_DATA           = "InvalidData"
    SIGNING_FAILED         = "SigningFailed"
    SUBMIT_FAILED          = "SubmitFailed"
    UNEXPECTED             = "Unexpected"


DEFAULT_CONFIG_FILE: Final = "config.json"
DEFAULT_GAS_LIMIT: Final = 21_000
RPC_TIMEOUT: Final = 10.0
STAGGER: Final = 0.1  # seconds between worker launches

# Legacy txn field widths
UINT64_MAX: Final = 2**64 - 1
UINT256_MAX: Final = 2**256 - 1

# Exit codes
EXIT_OK: Final = 0
EXIT_FATAL: Final = 1
EXIT_PARTIAL: Final = 2
EXIT_INTERRUPTED: Final = 130

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_GAS_LIMIT",
    "EXIT_FATAL",
    "EXIT_INTERRUPTED",
    "EXIT_OK",
    "EXIT_PARTIAL",
    "RPC_TIMEOUT",
    "STAGGER",
    "UINT256_MAX",
    "UINT64_MAX",

    ######
    "ErrorKind",
]
