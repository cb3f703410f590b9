"""Send one signed transfer per private key to a single address, concurrently."""

from fanout.accounts import ResolvedAccount, resolve_account
from fanout.config import DispatchConfig, load_config
from fanout.constants import ErrorKind
from fanout.dispatcher import Dispatcher
from fanout.errors import ConfigError, DispatchError, FanoutError, LedgerError, PreflightError
from fanout.ledger import JsonRpcLedgerClient, LedgerClient
from fanout.models import Failure, Outcome, SignedTransaction, Success, UnsignedTransaction
from fanout.report import Summary

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DispatchConfig",
    "DispatchError",
    "Dispatcher",
    "ErrorKind",
    "Failure",
    "FanoutError",
    "JsonRpcLedgerClient",
    "LedgerClient",
    "LedgerError",
    "Outcome",
    "PreflightError",
    "ResolvedAccount",
    "SignedTransaction",
    "Success",
    "Summary",
    "UnsignedTransaction",
    "load_config",
    "resolve_account",
]
