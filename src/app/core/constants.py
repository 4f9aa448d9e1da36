from __future__ import annotations

APP_NAME = "solrdump"
APP_VERSION = "0.1.0"

# 20060102-150405: сортируемое имя каталога дампа
DUMP_TIME_FMT = "%Y%m%d-%H%M%S"

# служебное поле Solr, пользователю не нужно
RESERVED_FIELD = "_version_"

SOLR_PATH_PREFIX = "solr"
ALLOWED_SCHEMES: frozenset[str] = frozenset({"http", "https"})
COLLECTION_ALLOWED_CHARS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-"
)

PAGE_FILE_SUFFIX = ".json"
