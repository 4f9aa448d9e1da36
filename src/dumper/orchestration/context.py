from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from src.app.core.constants import PAGE_FILE_SUFFIX


@dataclass(frozen=True, slots=True)
class DumpContext:
    dump_dir: Path
    name_pattern: str
    strip_reserved: bool

    def page_path(self, index: int) -> Path:
        return self.dump_dir / f"{self.name_pattern}{index}{PAGE_FILE_SUFFIX}"
