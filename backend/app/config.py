import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    debug_endpoints: bool = Field(False, alias="REALTY_COACH_DEBUG_ENDPOINTS")
    database_url: Optional[str] = Field(None, alias="REALTY_COACH_DATABASE_URL")
    database_pool_size: int = Field(10, alias="REALTY_COACH_DATABASE_POOL_SIZE")
    database_max_overflow: int = Field(10, alias="REALTY_COACH_DATABASE_MAX_OVERFLOW")
    database_echo: bool = Field(False, alias="REALTY_COACH_DATABASE_ECHO")
    api_base_url: str = Field("http://127.0.0.1:8000", alias="REALTY_COACH_API_BASE_URL")
    api_timeout_seconds: float = Field(10.0, alias="REALTY_COACH_API_TIMEOUT_SECONDS")
    capabilities_cache_ttl: float = Field(10.0, ge=0, alias="REALTY_COACH_CAPABILITIES_CACHE_TTL")
    publication_threshold: int = Field(70, ge=0, le=100, alias="REALTY_COACH_PUBLICATION_THRESHOLD")

    class Config:
        env_file = os.getenv("ENV_FILE", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()  # type: ignore[arg-type]
    except ValidationError as exc:
        raise RuntimeError(f"Invalid backend configuration: {exc}") from exc
