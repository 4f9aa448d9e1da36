from __future__ import annotations

import logging
from typing import AsyncIterable

from src.app.core.enums import ConsumerState
from src.dumper.orchestration.context import DumpContext
from src.dumper.orchestration.synchronizer import CompletionSynchronizer
from src.dumper.ports.results import Page, Result, ResultError
from src.dumper.ports.writer import PageWriter
from src.dumper.services.logctx import ctx_prefix
from src.dumper.services.outcomes import DumpReport

logger = logging.getLogger("solrdump")


class ResultStreamConsumer:
    """
    Вычитывает поток результатов и раздаёт страницы на запись.

    DRAINING -> FINISHING (поток закрыт) -> DONE (все записи завершились).
    Номер файла = порядок получения страницы, а не порядок завершения записи.
    """

    def __init__(
        self,
        ctx: DumpContext,
        writer: PageWriter,
        synchronizer: CompletionSynchronizer | None = None,
    ) -> None:
        self._ctx = ctx
        self._writer = writer
        self._sync = synchronizer or CompletionSynchronizer()
        self._state = ConsumerState.DRAINING

    @property
    def state(self) -> ConsumerState:
        return self._state

    async def consume(self, results: AsyncIterable[Result]) -> DumpReport:
        ctx_str = ctx_prefix(pattern=self._ctx.name_pattern)
        pages = 0
        stream_errors = 0

        try:
            async for res in results:
                match res:
                    case Page():
                        pages += 1
                        path = self._ctx.page_path(pages)
                        # не ждём запись: следующий запрос идёт параллельно
                        self._sync.track(pages, path, self._writer.write(pages, res, path))
                        logger.info(
                            "%s dispatched docs=%d file=%s",
                            ctx_prefix(pattern=self._ctx.name_pattern, index=pages),
                            len(res),
                            path.name,
                        )
                    case ResultError():
                        stream_errors += 1
                        logger.error("%s %s", ctx_str, res)
        except Exception:
            # поток оборвался: считаем как ошибку потока, уже запущенные записи дожидаемся
            stream_errors += 1
            logger.exception("%s result stream failed after pages=%d", ctx_str, pages)

        self._state = ConsumerState.FINISHING
        logger.info(
            "%s stream closed pages=%d errors=%d, waiting for %d write(s)",
            ctx_str, pages, stream_errors, self._sync.pending,
        )

        outcomes = await self._sync.wait_all()
        self._state = ConsumerState.DONE

        return DumpReport(
            dump_dir=self._ctx.dump_dir,
            pages=pages,
            stream_errors=stream_errors,
            outcomes=outcomes,
        )
