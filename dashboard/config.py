# dashboard/config.py

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    database_sslmode: str
    database_echo: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///db.sqlite").strip(),
        database_sslmode=os.getenv("DATABASE_SSLMODE", "require").strip(),
        database_echo=_as_bool(os.getenv("DATABASE_ECHO", "false")),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
