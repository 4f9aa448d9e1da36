from __future__ import annotations

import asyncio
import logging
from functools import partial
from pathlib import Path
from typing import Coroutine, Any

from src.dumper.services.outcomes import WriteOutcome

logger = logging.getLogger("solrdump")


class CompletionSynchronizer:
    """
    Учёт фоновых задач записи.

    Исход каждой задачи фиксируется done-callback'ом, который выполняется
    в потоке event loop, поэтому общий статус меняет только он.
    """

    def __init__(self) -> None:
        self._tasks: list[asyncio.Task[WriteOutcome]] = []
        self._outcomes: dict[int, WriteOutcome] = {}

    @property
    def tracked(self) -> int:
        return len(self._tasks)

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if not t.done())

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self._outcomes.values())

    def track(
        self,
        index: int,
        path: Path,
        coro: Coroutine[Any, Any, WriteOutcome],
    ) -> asyncio.Task[WriteOutcome]:
        task = asyncio.create_task(coro, name=f"write-page-{index}")
        task.add_done_callback(partial(self._record, index, path))
        self._tasks.append(task)
        return task

    def _record(self, index: int, path: Path, task: asyncio.Task[WriteOutcome]) -> None:
        if task.cancelled():
            outcome = WriteOutcome(index=index, path=path, error=asyncio.CancelledError())
            logger.error("Write task cancelled: page=%d file=%s", index, path)
        elif task.exception() is not None:
            exc = task.exception()
            logger.error(
                "Unexpected failure while writing page=%d file=%s",
                index, path, exc_info=exc,
            )
            outcome = WriteOutcome(index=index, path=path, error=exc)
        else:
            outcome = task.result()
        self._outcomes[index] = outcome

    async def wait_all(self) -> tuple[WriteOutcome, ...]:
        """Дождаться всех задач записи. Возвращает исходы по возрастанию номера."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        return tuple(self._outcomes[i] for i in sorted(self._outcomes))
