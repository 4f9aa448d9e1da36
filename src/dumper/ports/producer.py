from __future__ import annotations

from typing import AsyncIterator, Protocol

from src.dumper.ports.results import Result


class ResultProducer(Protocol):
    """Producer отдаёт страницы (или ошибки) по одной, в порядке выдачи."""

    async def open(self) -> AsyncIterator[Result]:
        """Запустить выборку и вернуть поток результатов.

        Ошибка старта (первый запрос) поднимается отсюда, а не из потока.
        """
        ...
