import base64

import httpx
import pytest

from src.app.core.exceptions import QueryError
from src.dumper.adapters.solr_cursor import SolrCursorProducer
from src.dumper.ports.results import Page, ResultError
from src.dumper.services.endpoint import parse_endpoint

ENDPOINT = parse_endpoint("http://solr01:8983/solr/films")
QP = {"q": "*:*", "sort": "id asc", "rows": "2"}


def _solr_body(docs, next_mark):
    return {
        "responseHeader": {"status": 0},
        "response": {"numFound": 3, "start": 0, "docs": docs},
        "nextCursorMark": next_mark,
    }


def _cursor_handler(pages, seen):
    """pages: cursorMark -> (docs, nextCursorMark) или готовый httpx.Response."""

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        item = pages[request.url.params["cursorMark"]]
        if isinstance(item, httpx.Response):
            return item
        docs, next_mark = item
        return httpx.Response(200, json=_solr_body(docs, next_mark))

    return handler


def _producer(handler, **kwargs) -> SolrCursorProducer:
    return SolrCursorProducer(ENDPOINT, QP, transport=httpx.MockTransport(handler), **kwargs)


async def _collect(stream):
    return [item async for item in stream]


@pytest.mark.asyncio
async def test_pages_until_cursor_stops_moving():
    seen: list[httpx.Request] = []
    pages = {
        "*": ([{"id": "1"}, {"id": "2"}], "AoE1"),
        "AoE1": ([{"id": "3"}], "AoE2"),
        "AoE2": ([], "AoE2"),
    }
    stream = await _producer(_cursor_handler(pages, seen)).open()
    results = await _collect(stream)

    assert results == [
        Page(docs=({"id": "1"}, {"id": "2"})),
        Page(docs=({"id": "3"},)),
    ]
    assert [r.url.params["cursorMark"] for r in seen] == ["*", "AoE1", "AoE2"]


@pytest.mark.asyncio
async def test_request_params_and_headers():
    seen: list[httpx.Request] = []
    pages = {"*": ([{"id": "1"}], "*")}
    stream = await _producer(_cursor_handler(pages, seen), user="reader", password="s3cret").open()
    await _collect(stream)

    (req,) = seen
    assert req.url.path == "/solr/films/select"
    assert req.url.params["q"] == "*:*"
    assert req.url.params["sort"] == "id asc"
    assert req.url.params["rows"] == "2"
    assert req.url.params["wt"] == "json"
    assert "fl" not in req.url.params
    assert req.headers["User-Agent"].startswith("solrdump/")
    assert req.headers["Accept"] == "application/json"
    expected = base64.b64encode(b"reader:s3cret").decode()
    assert req.headers["Authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
async def test_no_auth_header_without_user():
    seen: list[httpx.Request] = []
    stream = await _producer(_cursor_handler({"*": ([], "*")}, seen)).open()
    assert await _collect(stream) == []
    assert "Authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_first_request_failure_is_query_error():
    seen: list[httpx.Request] = []
    bad = httpx.Response(
        400, json={"error": {"msg": "Cursor functionality requires a sort containing a uniqueKey field tie breaker"}}
    )
    with pytest.raises(QueryError) as e:
        await _producer(_cursor_handler({"*": bad}, seen)).open()
    assert "uniqueKey" in str(e.value)


@pytest.mark.asyncio
async def test_first_request_not_json_is_query_error():
    seen: list[httpx.Request] = []
    html = httpx.Response(200, text="<html>proxy login</html>")
    with pytest.raises(QueryError):
        await _producer(_cursor_handler({"*": html}, seen)).open()


@pytest.mark.asyncio
async def test_connection_error_on_open_is_query_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(QueryError) as e:
        await _producer(handler).open()
    assert "connection refused" in str(e.value)


@pytest.mark.asyncio
async def test_failure_mid_stream_yields_error_and_closes():
    seen: list[httpx.Request] = []
    pages = {
        "*": ([{"id": "1"}], "AoE1"),
        "AoE1": httpx.Response(500, text="oops"),
    }
    stream = await _producer(_cursor_handler(pages, seen)).open()
    results = await _collect(stream)

    assert results[0] == Page(docs=({"id": "1"},))
    assert isinstance(results[1], ResultError)
    assert "HTTP 500" in str(results[1])
    assert len(results) == 2


@pytest.mark.asyncio
async def test_unexpected_body_mid_stream_is_error():
    seen: list[httpx.Request] = []
    pages = {
        "*": ([{"id": "1"}], "AoE1"),
        "AoE1": httpx.Response(200, json={"responseHeader": {"status": 0}}),
    }
    stream = await _producer(_cursor_handler(pages, seen)).open()
    results = await _collect(stream)

    assert isinstance(results[-1], ResultError)
    assert "nextCursorMark" in str(results[-1]) or "response" in str(results[-1])
