from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field("INFO", validation_alias="SOLRDUMP_LOG_LEVEL")

    # credentials, если не заданы в командной строке
    solr_user: str = Field("", validation_alias="SOLRUSER")
    solr_password: str = Field("", validation_alias="SOLRPASSW")

    # значения по умолчанию для CLI
    default_query: str = "*:*"
    default_rows: int = 100_000
    default_dst_dir: str = "."
    default_http_timeout: int = 180
    default_dir_perms: str = "0755"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
