from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

Document = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class Page:
    """Одна страница выдачи. Номер ей присваивает consumer, не producer."""

    docs: Sequence[Document]

    def __len__(self) -> int:
        return len(self.docs)


@dataclass(frozen=True, slots=True)
class ResultError:
    message: str
    cause: BaseException | None = None

    def __str__(self) -> str:
        return self.message


Result = Union[Page, ResultError]
