from .dump_dir import make_dump_dir
from .endpoint import Endpoint, derive_name_pattern, parse_endpoint
from .query_params import build_query_params
from .transform import serialize_page, strip_reserved_field

__all__ = [
    "Endpoint",
    "build_query_params",
    "derive_name_pattern",
    "make_dump_dir",
    "parse_endpoint",
    "serialize_page",
    "strip_reserved_field",
]
