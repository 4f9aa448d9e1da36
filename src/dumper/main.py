from __future__ import annotations

import asyncio
import logging
import sys
from typing import Sequence

import click
from pydantic import ValidationError

from src.app.core.constants import APP_NAME, APP_VERSION
from src.app.core.enums import ExitCode
from src.app.schemas.dump import DumpParams
from src.config import get_settings
from src.dumper.orchestration.manager import DumpManager

logger = logging.getLogger("solrdump")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] [dump] %(message)s",
    )


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "params"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


@click.command(
    name=APP_NAME,
    help=f"{APP_NAME} dumps and saves documents from a Solr collection in json format",
)
@click.option("-c", "--colllink", "collection_link", required=True,
              help="http link to a Solr collection like http[s]://address[:port]/solr/collection")
@click.option("-q", "--query", default=lambda: get_settings().default_query,
              help="Q parameter")
@click.option("-f", "--fieldlist", "field_list", default="",
              help="Fields list. All fields of documents are exported by default")
@click.option("-s", "--sort", required=True, help="Sort field with asc|desc")
@click.option("-r", "--rows", type=int, default=lambda: get_settings().default_rows,
              help="Amount of docs that will be requested by one query and saved in one file")
@click.option("-d", "--dst", "dst_dir", default=lambda: get_settings().default_dst_dir,
              help="Path to place the dump directory")
@click.option("-u", "--user", default="",
              help="User name. That can be also set by SOLRUSER environment variable")
@click.option("-p", "--password", default="",
              help="User password. That can be also set by SOLRPASSW environment variable")
@click.option("-t", "--httpTimeout", "http_timeout", type=int,
              default=lambda: get_settings().default_http_timeout,
              help="http timeout in seconds")
@click.option("-m", "--perms", "dir_perms", default=lambda: get_settings().default_dir_perms,
              help="Permissions for the dump directory")
@click.version_option(APP_VERSION, prog_name=APP_NAME)
def cli(
    collection_link: str,
    query: str,
    field_list: str,
    sort: str,
    rows: int,
    dst_dir: str,
    user: str,
    password: str,
    http_timeout: int,
    dir_perms: str,
) -> int:
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        params = DumpParams.from_settings(
            settings,
            collection_link=collection_link,
            query=query,
            field_list=field_list,
            sort=sort,
            rows=rows,
            dst_dir=dst_dir,
            user=user or None,
            password=password or None,
            http_timeout=http_timeout,
            dir_perms=dir_perms,
        )
    except ValidationError as exc:
        logger.error("wrong arguments. %s", _format_validation_error(exc))
        return int(ExitCode.BAD_ARGS)

    result = asyncio.run(DumpManager().run(params))
    return int(result.exit_code)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        rv = cli.main(args=list(argv) if argv is not None else None,
                      prog_name=APP_NAME, standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return int(ExitCode.BAD_ARGS)
    except click.Abort:
        return 1
    return int(rv or 0)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
