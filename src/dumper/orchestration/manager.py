from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Mapping

from src.app.core.enums import ExitCode
from src.app.core.exceptions import (
    DirectoryCreationError,
    MalformedEndpointError,
    QueryError,
)
from src.app.schemas.dump import DumpParams
from src.dumper.adapters.solr_cursor import SolrCursorProducer
from src.dumper.adapters.writers import JsonFileWriter
from src.dumper.orchestration.consumer import ResultStreamConsumer
from src.dumper.orchestration.context import DumpContext
from src.dumper.ports.producer import ResultProducer
from src.dumper.ports.results import Result
from src.dumper.services.dump_dir import make_dump_dir
from src.dumper.services.endpoint import Endpoint, derive_name_pattern, parse_endpoint
from src.dumper.services.outcomes import DumpReport
from src.dumper.services.query_params import build_query_params

logger = logging.getLogger("solrdump")

ProducerFactory = Callable[..., ResultProducer]


def _solr_producer(
    endpoint: Endpoint,
    query_params: Mapping[str, str],
    params: DumpParams,
) -> ResultProducer:
    return SolrCursorProducer(
        endpoint,
        query_params,
        user=params.user,
        password=params.password,
        timeout=params.http_timeout,
    )


@dataclass(frozen=True, slots=True)
class RunResult:
    exit_code: ExitCode
    report: DumpReport | None = None


async def _close_stream(results: AsyncIterator[Result]) -> None:
    aclose: Any = getattr(results, "aclose", None)
    if aclose is not None:
        await aclose()


class DumpManager:
    """Один прогон дампа: endpoint -> курсор -> каталог -> страницы в файлы."""

    def __init__(self, producer_factory: ProducerFactory = _solr_producer) -> None:
        self._producer_factory = producer_factory

    async def run(self, params: DumpParams) -> RunResult:
        try:
            endpoint = parse_endpoint(params.collection_link)
        except MalformedEndpointError as exc:
            logger.error("%s", exc)
            return RunResult(ExitCode.BAD_ARGS)

        query_params = build_query_params(params)
        producer = self._producer_factory(endpoint, query_params, params)

        try:
            results = await producer.open()
        except QueryError as exc:
            logger.error("%s", exc)
            return RunResult(ExitCode.QUERY_FAILED)

        try:
            name_pattern = derive_name_pattern(endpoint.url, endpoint.collection)
            dump_dir = make_dump_dir(params.dst_dir, name_pattern, params.dir_perms)
        except (MalformedEndpointError, DirectoryCreationError) as exc:
            logger.error("%s", exc)
            await _close_stream(results)
            return RunResult(ExitCode.OUTPUT_FAILED)

        ctx = DumpContext(
            dump_dir=dump_dir,
            name_pattern=name_pattern,
            strip_reserved=params.all_fields,
        )
        consumer = ResultStreamConsumer(
            ctx, JsonFileWriter(strip_reserved=ctx.strip_reserved)
        )
        report = await consumer.consume(results)

        logger.info(
            "Dump finished dir=%s pages=%d written=%d failed=%d stream_errors=%d",
            report.dump_dir,
            report.pages,
            report.written,
            len(report.failed_files),
            report.stream_errors,
        )
        if not report.ok:
            for path in report.failed_files:
                logger.error("Page file not written: %s", path)
            return RunResult(ExitCode.WRITE_FAILED, report)

        return RunResult(ExitCode.OK, report)
