from __future__ import annotations

from .enums import ConsumerState, ExitCode
from .constants import RESERVED_FIELD

__all__ = [
    "ConsumerState",
    "ExitCode",
    "RESERVED_FIELD",
]
