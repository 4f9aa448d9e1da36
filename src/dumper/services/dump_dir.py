from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from src.app.core.exceptions import DirectoryCreationError
from src.dumper.services.time_utils import dump_timestamp

logger = logging.getLogger("solrdump")


def make_dump_dir(
    dst_dir: str | Path,
    name_pattern: str,
    perms: int,
    *,
    now: datetime | None = None,
) -> Path:
    """Создать каталог <dst>/<name_pattern><timestamp>. Без него дамп не начинается."""
    full_path = Path(dst_dir) / f"{name_pattern}{dump_timestamp(now)}"

    if full_path.exists() and not full_path.is_dir():
        raise DirectoryCreationError(full_path, "path exists and is not a directory")

    # как MkdirAll: perms (с учётом umask) получает каждый создаваемый каталог
    missing = [p for p in (full_path, *full_path.parents) if not p.exists()]
    try:
        for path in reversed(missing):
            path.mkdir(mode=perms, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(full_path, exc.strerror or repr(exc)) from exc

    logger.info("Dump directory ready: %s (perms=%o)", full_path, perms)
    return full_path
