from __future__ import annotations

import logging
import sys
from typing import Any, AsyncIterator, Mapping, Sequence

import httpx

from src.app.core.constants import APP_NAME, APP_VERSION
from src.app.core.exceptions import QueryError
from src.dumper.ports.results import Page, Result, ResultError
from src.dumper.services.endpoint import Endpoint

logger = logging.getLogger("solrdump")

CURSOR_START = "*"


class SolrResponseError(ValueError):
    """Solr ответил, но не тем, что ждали (HTTP-ошибка или чужой JSON)."""


def default_headers() -> dict[str, str]:
    return {
        "User-Agent": f"{APP_NAME}/{APP_VERSION} ({sys.platform})",
        "Accept": "application/json",
        "Accept-Encoding": "gzip, deflate",
    }


def _solr_error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
        msg = (body.get("error") or {}).get("msg")
    except ValueError:
        msg = None
    return f"HTTP {resp.status_code}: {msg or resp.reason_phrase}"


class SolrCursorProducer:
    """Cursor select по коллекции Solr: по одной странице на каждый шаг курсора."""

    def __init__(
        self,
        endpoint: Endpoint,
        query_params: Mapping[str, str],
        *,
        user: str = "",
        password: str = "",
        timeout: float = 180,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._query_params = dict(query_params)
        self._auth = httpx.BasicAuth(user, password) if user else None
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=default_headers(),
            auth=self._auth,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        cursor_mark: str,
    ) -> tuple[Sequence[dict[str, Any]], str]:
        params = {**self._query_params, "cursorMark": cursor_mark, "wt": "json"}
        resp = await client.get(self._endpoint.select_url, params=params)
        if resp.is_error:
            raise SolrResponseError(_solr_error_message(resp))

        body = resp.json()
        try:
            docs = body["response"]["docs"]
            next_mark = body["nextCursorMark"]
        except (KeyError, TypeError) as exc:
            raise SolrResponseError(f"unexpected Solr response: missing {exc}") from exc
        return docs, next_mark

    async def open(self) -> AsyncIterator[Result]:
        client = self._client()
        try:
            first = await self._fetch(client, CURSOR_START)
        except (httpx.HTTPError, ValueError) as exc:
            await client.aclose()
            raise QueryError(f"wrong query. {exc}") from exc

        logger.info(
            "Cursor opened: %s q=%r sort=%r rows=%s",
            self._endpoint.select_url,
            self._query_params.get("q"),
            self._query_params.get("sort"),
            self._query_params.get("rows"),
        )
        return self._stream(client, first)

    async def _stream(
        self,
        client: httpx.AsyncClient,
        first: tuple[Sequence[dict[str, Any]], str],
    ) -> AsyncIterator[Result]:
        mark = CURSOR_START
        docs, next_mark = first
        try:
            while True:
                if docs:
                    yield Page(docs=tuple(docs))

                # курсор не сдвинулся - выдача закончилась
                if next_mark == mark:
                    return

                mark = next_mark
                try:
                    docs, next_mark = await self._fetch(client, mark)
                except (httpx.HTTPError, ValueError) as exc:
                    # без ответа нет следующего cursorMark, дальше идти некуда
                    yield ResultError(f"query error. {exc}", cause=exc)
                    return
        finally:
            await client.aclose()
