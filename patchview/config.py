from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .path_filter import PathFilter


class Settings(BaseSettings):
    log_level: str = Field("info", alias="LOG_LEVEL")
    # newline or comma separated glob rules, `!` prefix excludes
    path_filters: str = Field("", alias="PATH_FILTERS")
    max_files: int = Field(0, alias="MAX_FILES")
    language: str = Field("en-US", alias="REVIEW_LANGUAGE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def path_filter(self) -> PathFilter:
        rules = self.path_filters.replace(",", "\n").splitlines()
        return PathFilter(rules)


@lru_cache
def get_settings() -> Settings:
    return Settings()
