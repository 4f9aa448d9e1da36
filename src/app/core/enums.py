from __future__ import annotations

from enum import Enum, IntEnum


class ConsumerState(str, Enum):
    DRAINING = "DRAINING"
    FINISHING = "FINISHING"
    DONE = "DONE"


class ExitCode(IntEnum):
    OK = 0
    OUTPUT_FAILED = 2
    QUERY_FAILED = 3
    WRITE_FAILED = 10
    BAD_ARGS = 11
