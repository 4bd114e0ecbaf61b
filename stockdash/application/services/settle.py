"""
Settle-all fan-out/fan-in helper.
Runs awaitables concurrently, waits for every one to finish, and partitions
the outcomes into successes and failures without letting one failure cancel
its siblings.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Generic, Hashable, Iterable, TypeVar

from stockdash.domain.errors import AggregateRetrievalError

T = TypeVar("T")


@dataclass
class Settled(Generic[T]):
    """Outcome of settle_all.

    ok:     (key, value) pairs of the awaitables that succeeded, in input order.
    failed: (key, exception) pairs of the ones that raised, in input order.
    """

    ok: list[tuple[Hashable, T]] = field(default_factory=list)
    failed: list[tuple[Hashable, BaseException]] = field(default_factory=list)

    @property
    def values(self) -> list[T]:
        return [value for _, value in self.ok]

    @property
    def error_messages(self) -> list[str]:
        return [str(exc) or "failed" for _, exc in self.failed]


async def settle_all(tasks: Iterable[tuple[Hashable, Awaitable[T]]]) -> Settled[T]:
    """Await every (key, awaitable) pair concurrently and partition the results."""
    pairs = list(tasks)
    if not pairs:
        return Settled()

    outcomes: list[Any] = await asyncio.gather(
        *(awaitable for _, awaitable in pairs), return_exceptions=True
    )

    settled: Settled[T] = Settled()
    for (key, _), outcome in zip(pairs, outcomes):
        # CancelledError is a BaseException; let it propagate.
        if isinstance(outcome, asyncio.CancelledError):
            raise outcome
        if isinstance(outcome, Exception):
            settled.failed.append((key, outcome))
        else:
            settled.ok.append((key, outcome))
    return settled


async def gather_partial(
    tasks: Iterable[tuple[Hashable, Awaitable[T]]],
    error_prefix: str,
) -> Settled[T]:
    """settle_all, but raise when nothing succeeded.

    Raises:
        AggregateRetrievalError: if at least one task ran and all of them failed.
    """
    settled = await settle_all(tasks)
    if not settled.ok and settled.failed:
        raise AggregateRetrievalError(error_prefix, settled.error_messages)
    return settled
