"""Outcome aggregation.

collect() is the single consumer of the outcome queue. It blocks until the
dispatcher closes the queue (puts CLOSED) after every worker has finished.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable

from fanout.models import Failure, Outcome, Success

log = logging.getLogger("fanout.report")

CLOSED = object()  # end-of-stream marker on the outcome queue

RESULTS_HEADER = "=== Transaction results ==="
SUMMARY_HEADER = "=== Summary ==="


@dataclass
class Summary:
    outcomes: list[Outcome] = field(default_factory=list)
    successes: int = 0
    failures: int = 0

    @property
    def total(self) -> int:
        return self.successes + self.failures

    def add(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)
        match outcome:
            case Success():
                self.successes += 1
            case Failure():
                self.failures += 1
            case _:
                raise TypeError(f"not an outcome: {outcome!r}")

    def lines(self) -> list[str]:
        return [
            SUMMARY_HEADER,
            f"Succeeded: {self.successes}",
            f"Failed: {self.failures}",
            f"Total: {self.total}",
        ]


def format_outcome(outcome: Outcome) -> str:
    match outcome:
        case Success(address=address, tx_hash=tx_hash):
            return f"✅ {address}: success - tx hash: {tx_hash}"
        case Failure(index=index, address=address, kind=kind, detail=detail):
            who = address or f"<unresolved key #{index + 1}>"
            return f"❌ {who}: failed - [{kind}] {detail}"
    raise TypeError(f"not an outcome: {outcome!r}")


async def collect(queue: asyncio.Queue, expected: int, emit: Callable[[str], None] = print) -> Summary:
    # one outcome per key index is a dispatcher invariant, not a user error
    summary = Summary()
    seen: set[int] = set()
    emit(RESULTS_HEADER)
    while (item := await queue.get()) is not CLOSED:
        summary.add(item)
        if item.index in seen:
            raise RuntimeError(f"duplicate outcome for key #{item.index + 1}")
        seen.add(item.index)
        emit(format_outcome(item))

    if missing := sorted(set(range(expected)) - seen):
        raise RuntimeError(f"expected {expected} outcomes, missing keys {[i + 1 for i in missing]}")
    if summary.total != expected:
        raise RuntimeError(f"expected {expected} outcomes, received {summary.total}")

    emit("")
    for line in summary.lines():
        emit(line)
    log.debug("Collected %d outcomes (%d ok, %d failed)", summary.total, summary.successes, summary.failures)
    return summary
