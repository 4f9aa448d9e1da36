from __future__ import annotations

from src.app.schemas.dump import DumpParams


def build_query_params(params: DumpParams) -> dict[str, str]:
    """Параметры select-запроса: q, sort, fl (если задан), rows."""
    qp: dict[str, str] = {
        "q": params.query,
        "sort": params.sort,
    }
    if params.field_list:
        qp["fl"] = params.field_list
    qp["rows"] = str(params.rows)
    return qp
