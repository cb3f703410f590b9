"""Exception types raised across the dispatcher.

Only ConfigError and PreflightError abort a run. DispatchError is raised by
the per-account pipeline stages and is always turned into a Failure outcome
at the worker boundary.
"""

from fanout.constants import ErrorKind


class FanoutError(Exception):
    """Base class for all fanout errors."""


class ConfigError(FanoutError):
    """The configuration file is missing, unreadable or invalid."""


class PreflightError(FanoutError):
    """The RPC node could not be reached or did not report its chain id."""


class LedgerError(FanoutError):
    """A JSON-RPC call failed: transport, HTTP status, RPC error object or timeout."""

    def __init__(self, method: str, message: str, code: int | None = None):
        self.method = method
        self.message = message
        self.code = code
        super().__init__(f"{method}: {message}" if code is None else f"{method}: {message} (code {code})")


class DispatchError(FanoutError):
    def __init__(self, kind: ErrorKind, detail: str, address: str = ""):
        self.kind = kind
        self.detail = detail
        self.address = address
        super().__init__(f"[{kind}] {detail}")
