"""JSON-RPC access to the EVM node.

The dispatcher only needs four calls. LedgerClient is the shape it depends on;
JsonRpcLedgerClient is the httpx implementation. One AsyncClient is shared by
every worker, each call is an independent POST.
"""

import asyncio
import itertools
import logging
from typing import Any, Protocol

import httpx

import fanout.constants as C
from fanout.errors import LedgerError
from fanout.models import SignedTransaction

log = logging.getLogger("fanout.ledger")


class LedgerClient(Protocol):
    async def network_identity(self) -> int: ...
    async def pending_nonce(self, address: str) -> int: ...
    async def suggested_gas_price(self) -> int: ...
    async def submit(self, signed: SignedTransaction) -> str: ...


def _quantity(method: str, value: Any) -> int:
    if not isinstance(value, str) or not value.startswith("0x"):
        raise LedgerError(method, f"expected hex quantity, got {value!r}")
    try:
        return int(value, 16)
    except ValueError as e:
        raise LedgerError(method, f"expected hex quantity, got {value!r}") from e


class JsonRpcLedgerClient:
    def __init__(self, url: str, *, timeout: float = C.RPC_TIMEOUT, http: httpx.AsyncClient | None = None):
        self.url = url
        self.timeout = timeout
        self._http = http or httpx.AsyncClient(timeout=timeout)
        self._ids = itertools.count(1)

    async def __aenter__(self) -> "JsonRpcLedgerClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _rpc(self, method: str, params: list | None = None) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params or []}
        try:
            r = await asyncio.wait_for(self._http.post(self.url, json=payload), timeout=self.timeout)
            r.raise_for_status()
            body = r.json()
        except asyncio.TimeoutError as e:
            raise LedgerError(method, f"timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise LedgerError(method, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise LedgerError(method, f"{e.__class__.__name__}: {e}") from e
        except ValueError as e:
            raise LedgerError(method, "response is not JSON") from e

        if not isinstance(body, dict):
            raise LedgerError(method, f"unexpected response {body!r}")
        if (err := body.get("error")) is not None:
            if isinstance(err, dict):
                raise LedgerError(method, str(err.get("message", err)), err.get("code"))
            raise LedgerError(method, str(err))
        if "result" not in body:
            raise LedgerError(method, "response has neither result nor error")
        return body["result"]

    async def network_identity(self) -> int:
        return _quantity("eth_chainId", await self._rpc("eth_chainId"))

    async def pending_nonce(self, address: str) -> int:
        return _quantity("eth_getTransactionCount", await self._rpc("eth_getTransactionCount", [address, "pending"]))

    async def suggested_gas_price(self) -> int:
        return _quantity("eth_gasPrice", await self._rpc("eth_gasPrice"))

    async def submit(self, signed: SignedTransaction) -> str:
        srv_hash = await self._rpc("eth_sendRawTransaction", [signed.raw_hex])
        if isinstance(srv_hash, str) and srv_hash.lower() != signed.tx_hash.lower():
            log.warning("Node returned hash %s for locally computed %s", srv_hash, signed.tx_hash)
        return srv_hash if isinstance(srv_hash, str) else signed.tx_hash
