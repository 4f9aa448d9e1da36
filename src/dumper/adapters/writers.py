from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from src.app.core.exceptions import WriteError
from src.dumper.ports.results import Page
from src.dumper.services.outcomes import WriteOutcome
from src.dumper.services.transform import serialize_page

logger = logging.getLogger("solrdump")


class JsonFileWriter:
    """Пишет страницу JSON-массивом в отдельный файл (create/truncate)."""

    def __init__(self, *, strip_reserved: bool) -> None:
        self._strip_reserved = strip_reserved

    def _write_sync(self, page: Page, path: Path) -> int:
        data = serialize_page(page.docs, strip_reserved=self._strip_reserved)
        with open(path, "wb") as dst:
            dst.write(data)
        return len(data)

    async def write(self, index: int, page: Page, path: Path) -> WriteOutcome:
        try:
            # сериализация + файловый I/O в отдельном потоке, loop не блокируем
            size = await asyncio.to_thread(self._write_sync, page, path)
        except (OSError, TypeError, ValueError) as exc:
            err = WriteError(path, repr(exc))
            err.__cause__ = exc
            logger.error("%s", err)
            return WriteOutcome(index=index, path=path, error=err)

        logger.debug("Saved page=%d docs=%d bytes=%d file=%s", index, len(page), size, path)
        return WriteOutcome(index=index, path=path)
