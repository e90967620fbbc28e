from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict

logger = logging.getLogger(__name__)


class InflightRequests:
    """
    Single-flight registry: at most one outstanding fetch per key.

    Callers that arrive while a fetch for the same key is pending await the
    same task and see its exact outcome, value or exception. The entry is
    dropped as soon as the task settles, so the next caller starts fresh.

    There is no timeout here; a producer that never settles keeps its key
    registered and every waiter suspended.
    """
    def __init__(self):
        self._pending: Dict[str, asyncio.Task] = {}

    async def fetch_once(self, key: str, producer: Callable[[], Awaitable[Any]]) -> Any:
        task = self._pending.get(key)
        if task is None or task.done():
            # registered before the first await below
            task = asyncio.ensure_future(producer())
            self._pending[key] = task
            task.add_done_callback(lambda t, k=key: self._forget(k, t))
        else:
            logger.debug("joining in-flight fetch for %s", key)
        # a cancelled waiter must not cancel the fetch for the others
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if not task.cancelled():
            task.exception()  # observed, even if every waiter was cancelled
        if self._pending.get(key) is task:
            del self._pending[key]

    def is_pending(self, key: str) -> bool:
        task = self._pending.get(key)
        return task is not None and not task.done()

    def __len__(self) -> int:
        return len(self._pending)
