"""
Settings
Client configuration read from the environment or a .env file.

  SEQRE_SERVER     base URL of the server that stores envelopes
  SEQRE_LOG_LEVEL  logging level for the command line tool
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERVER = "http://localhost:8080"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEQRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    server: str = DEFAULT_SERVER
    log_level: str = "WARNING"

    @field_validator("server")
    @classmethod
    def _check_server(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("SEQRE_SERVER must be an http(s) URL")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value!r}")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
