from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from src.app.core.constants import (
    ALLOWED_SCHEMES,
    COLLECTION_ALLOWED_CHARS,
    SOLR_PATH_PREFIX,
)
from src.app.core.exceptions import (
    InvalidPortError,
    MalformedEndpointError,
    MissingCollectionError,
    MissingHostError,
    MissingSchemeError,
    UnsupportedSchemeError,
)


@dataclass(frozen=True, slots=True)
class Endpoint:
    scheme: str
    host: str
    port: int | None
    collection: str
    url: str

    @property
    def netloc(self) -> str:
        return self.host if self.port is None else f"{self.host}:{self.port}"

    @property
    def select_url(self) -> str:
        return f"{self.url}/select"


def parse_endpoint(link: str) -> Endpoint:
    """
    Разобрать ссылку вида http[s]://host[:port]/solr/<collection>[/].

    Каждая причина отказа - свой подкласс MalformedEndpointError.
    """
    raw = (link or "").strip()
    if "://" not in raw:
        raise MissingSchemeError(raw, "missing scheme (http:// or https://)")

    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as exc:
        raise InvalidPortError(raw, str(exc)) from exc

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise UnsupportedSchemeError(raw, f"unsupported scheme {parts.scheme!r}")

    host = (parts.hostname or "").lower()
    if not host:
        raise MissingHostError(raw, "missing host")
    if ":" in host:
        # IPv6-литерал: в имени каталога остались бы ':'
        raise MalformedEndpointError(raw, "IPv6 literal hosts are not supported")

    if parts.query or parts.fragment:
        raise MalformedEndpointError(raw, "query string and fragment are not allowed")

    segments = parts.path.strip("/").split("/") if parts.path.strip("/") else []
    if len(segments) != 2 or segments[0] != SOLR_PATH_PREFIX:
        raise MissingCollectionError(raw, "path must be /solr/<collection>")

    collection = segments[1]
    if not set(collection) <= COLLECTION_ALLOWED_CHARS:
        raise MissingCollectionError(raw, f"bad collection name {collection!r}")

    netloc = host if port is None else f"{host}:{port}"
    return Endpoint(
        scheme=scheme,
        host=host,
        port=port,
        collection=collection,
        url=f"{scheme}://{netloc}/{SOLR_PATH_PREFIX}/{collection}",
    )


def derive_name_pattern(endpoint_link: str, collection: str) -> str:
    """host:port -> host.port, затем '<host>.<collection>.'"""
    try:
        netloc = urlsplit(endpoint_link).netloc
    except ValueError as exc:
        raise MalformedEndpointError(endpoint_link, str(exc)) from exc
    if not netloc:
        raise MalformedEndpointError(endpoint_link, "cannot extract host")

    host = netloc.replace(":", ".", 1)
    if ":" in host:
        raise MalformedEndpointError(endpoint_link, "host is not filesystem-safe")
    return f"{host}.{collection}."
