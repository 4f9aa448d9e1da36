from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from src.app.core.constants import RESERVED_FIELD

_SEPARATORS = (",", ":")


def _encode(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=_SEPARATORS, allow_nan=False)


def strip_reserved_field(doc: Mapping[str, Any]) -> dict[str, Any]:
    """Копия документа без _version_. Если поля нет - просто копия."""
    out = dict(doc)
    out.pop(RESERVED_FIELD, None)
    return out


def serialize_page(docs: Iterable[Mapping[str, Any]], *, strip_reserved: bool) -> bytes:
    """
    Страница -> JSON-массив + перевод строки.

    strip_reserved=True: каждый документ кодируется отдельно (без _version_),
    документы склеиваются через ',' внутри '[' ']'.
    strip_reserved=False: весь список кодируется целиком.
    """
    if strip_reserved:
        encoded = [_encode(strip_reserved_field(d)) for d in docs]
        data = "[" + ",".join(encoded) + "]\n"
    else:
        data = _encode(list(docs)) + "\n"
    return data.encode("utf-8")
