"""Fan-out of one transfer per configured key, fan-in into the report.

    preflight()  eth_chainId once, before any worker exists
    run()        TaskGroup of workers -> asyncio.Queue -> collect()

Each worker runs resolve -> build -> sign -> submit in sequence and always
puts exactly one outcome on the queue. Nothing escapes a worker, so the
TaskGroup never cancels siblings because of one account's failure.
"""

import asyncio
import logging
from typing import Callable

from fanout.accounts import resolve_account
from fanout.config import DispatchConfig
from fanout.constants import ErrorKind
from fanout.errors import DispatchError, LedgerError, PreflightError
from fanout.ledger import LedgerClient
from fanout.models import Failure, Outcome, Success
from fanout.report import CLOSED, Summary, collect
from fanout.signer import sign_transaction
from fanout.txn_builder import build_transaction

log = logging.getLogger("fanout.dispatcher")


class Dispatcher:
    def __init__(self, config: DispatchConfig, ledger: LedgerClient, *, emit: Callable[[str], None] = print):
        self.config = config
        self.ledger = ledger
        self.emit = emit
        self.warnings: list[str] = []
        self.observed_chain_id: int | None = None

    async def preflight(self) -> int:
        """Connectivity and chain-identity check. A mismatch only warns."""
        try:
            chain_id = await self.ledger.network_identity()
        except LedgerError as e:
            raise PreflightError(f"cannot get chain id from {self.config.rpc_url}: {e}") from e

        self.observed_chain_id = chain_id
        if chain_id != self.config.chain_id:
            msg = f"configured chain id ({self.config.chain_id}) does not match the node's chain id ({chain_id})"
            log.warning(msg)
            self.warnings.append(msg)

        log.info("Connected to %s, chain id %d", self.config.rpc_url, chain_id)
        log.info("Preparing to send %d transactions...", len(self.config.private_keys))
        return chain_id

    async def send_one(self, index: int, secret: str) -> Outcome:
        """Whole pipeline for one key. Always returns, never raises."""
        address = ""
        try:
            account = resolve_account(secret)
            address = account.address
            txn = await build_transaction(account, self.config, self.ledger)
            signed = sign_transaction(txn, self.config.chain_id, account)
            try:
                tx_hash = await self.ledger.submit(signed)
            except LedgerError as e:
                raise DispatchError(ErrorKind.SUBMIT_FAILED, f"submit failed: {e}", address) from e
        except DispatchError as e:
            log.debug("worker %d: %s %s", index + 1, address or "<no address>", e)
            return Failure(index=index, address=e.address or address, kind=e.kind, detail=e.detail)
        except Exception as e:
            log.exception("worker %d: unexpected error for %s", index + 1, address or "<no address>")
            return Failure(index=index, address=address, kind=ErrorKind.UNEXPECTED, detail=f"{e.__class__.__name__}: {e}")

        log.info("worker %d: %s sent, hash %s", index + 1, address, tx_hash)
        return Success(index=index, address=address, tx_hash=tx_hash)

    async def _worker(self, index: int, secret: str, queue: asyncio.Queue) -> None:
        await queue.put(await self.send_one(index, secret))

    async def run(self) -> Summary:
        keys = self.config.private_keys
        queue: asyncio.Queue = asyncio.Queue()

        async with asyncio.TaskGroup() as tg:
            collector = tg.create_task(collect(queue, len(keys), self.emit))

            async with asyncio.TaskGroup() as workers:
                for i, secret in enumerate(keys):
                    workers.create_task(self._worker(i, secret, queue))
                    # Heuristic only: spreads RPC load, correctness does not depend on it.
                    if self.config.stagger and i < len(keys) - 1:
                        await asyncio.sleep(self.config.stagger)

            # every worker has put its outcome
            await queue.put(CLOSED)

        return collector.result()
