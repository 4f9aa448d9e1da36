from __future__ import annotations

from pathlib import Path


class DumpError(Exception):
    """Базовая ошибка дампа коллекции."""


class MalformedEndpointError(DumpError):
    """Ссылка на коллекцию Solr не разбирается."""

    def __init__(self, link: str, reason: str) -> None:
        super().__init__(f"wrong http link to a solr collection {link!r}: {reason}")
        self.link = link
        self.reason = reason


class MissingSchemeError(MalformedEndpointError):
    """В ссылке нет схемы (http/https)."""


class UnsupportedSchemeError(MalformedEndpointError):
    """Схема отличается от http/https."""


class MissingHostError(MalformedEndpointError):
    """В ссылке нет адреса сервера."""


class InvalidPortError(MalformedEndpointError):
    """Порт не число или вне диапазона."""


class MissingCollectionError(MalformedEndpointError):
    """Путь не вида /solr/<collection>."""


class DirectoryCreationError(DumpError):
    """Не удалось создать каталог дампа."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"output error. cannot create {str(path)!r}: {reason}")
        self.path = path


class QueryError(DumpError):
    """Не удалось запустить cursor-запрос (первая страница)."""


class WriteError(DumpError):
    """Ошибка записи одной страницы в файл."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"error of writing to {str(path)!r}: {reason}")
        self.path = path
