"""Settings for the staff records service, read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

DB_URL_TEMPLATE = "postgresql+psycopg://{user}:{pwd}@{host}:{port}/{db}"


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_base_db_url() -> str:
    return DB_URL_TEMPLATE.format(
        user=os.getenv("POSTGRES_USER", "hr"),
        pwd=os.getenv("POSTGRES_PASSWORD", "hr"),
        host=os.getenv("POSTGRES_HOST", "postgres"),
        port=os.getenv("POSTGRES_PORT", "5432"),
        db=os.getenv("POSTGRES_DB", "hr"),
    )


@dataclass(frozen=True)
class Settings:
    service_name: str
    environment: str
    database_url: str
    db_echo: bool
    db_pool_size: int
    db_max_overflow: int
    log_level: str
    json_logs: bool


def load_settings() -> Settings:
    return Settings(
        service_name=os.getenv("SERVICE_NAME", "records-svc"),
        environment=os.getenv("ENVIRONMENT", "development"),
        database_url=os.getenv("DATABASE_URL") or get_base_db_url(),
        db_echo=_parse_bool(os.getenv("DB_ECHO"), False),
        db_pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
        db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "20")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        json_logs=_parse_bool(os.getenv("JSON_LOGS"), True),
    )


settings = load_settings()
