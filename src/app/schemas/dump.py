from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config import Settings

_SORT_CLAUSE_RE = re.compile(r"^\S+\s+(asc|desc)$", re.IGNORECASE)


class DumpParams(BaseModel):
    """Параметры одного дампа. Собираются один раз из CLI + Settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    collection_link: str
    query: str
    field_list: str = ""
    sort: str
    rows: int = Field(gt=0)
    dst_dir: str
    user: str = ""
    password: str = ""
    http_timeout: int = Field(gt=0)
    dir_perms: int

    @classmethod
    def from_settings(cls, settings: Settings, **values: Any) -> DumpParams:
        """Значения по умолчанию берём из Settings; None в values = "не задано"."""
        data: dict[str, Any] = {
            "query": settings.default_query,
            "rows": settings.default_rows,
            "dst_dir": settings.default_dst_dir,
            "http_timeout": settings.default_http_timeout,
            "dir_perms": settings.default_dir_perms,
            "user": settings.solr_user,
            "password": settings.solr_password,
        }
        data.update({k: v for k, v in values.items() if v is not None})
        return cls(**data)

    @field_validator("collection_link", "query")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("field_list")
    @classmethod
    def _strip_field_list(cls, v: str) -> str:
        return v.strip()

    @field_validator("sort")
    @classmethod
    def _sort_has_direction(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("sort is required (unique key field with asc|desc)")
        for clause in v.split(","):
            if not _SORT_CLAUSE_RE.match(clause.strip()):
                raise ValueError(
                    f"sort clause {clause.strip()!r} must look like '<field> asc|desc'"
                )
        return v

    @field_validator("dir_perms", mode="before")
    @classmethod
    def _parse_octal_perms(cls, v: object) -> object:
        # "0755" -> 0o755; int оставляем как есть
        if isinstance(v, str):
            try:
                v = int(v.strip(), 8)
            except ValueError:
                raise ValueError("wrong directory permissions") from None
        return v

    @field_validator("dir_perms")
    @classmethod
    def _perms_in_range(cls, v: int) -> int:
        if not 0 <= v <= 0o7777:
            raise ValueError("wrong directory permissions")
        return v

    @property
    def all_fields(self) -> bool:
        """Пустой fl: Solr отдаёт все поля, включая _version_."""
        return self.field_list == ""
