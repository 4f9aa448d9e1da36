from __future__ import annotations

from pathlib import Path
from typing import Protocol

from src.dumper.ports.results import Page
from src.dumper.services.outcomes import WriteOutcome


class PageWriter(Protocol):
    """Writer пишет одну страницу в свой файл и никогда не бросает наружу."""

    async def write(self, index: int, page: Page, path: Path) -> WriteOutcome:
        ...
