from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class WriteOutcome:
    index: int
    path: Path
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class DumpReport:
    dump_dir: Path
    pages: int
    stream_errors: int
    outcomes: tuple[WriteOutcome, ...] = field(default_factory=tuple)

    @property
    def written(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed_files(self) -> tuple[Path, ...]:
        return tuple(o.path for o in self.outcomes if not o.ok)

    @property
    def ok(self) -> bool:
        return not self.failed_files
