# dashboard/db/engine.py

from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from dashboard.config import get_settings


def build_engine(url: str, sslmode: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Create an engine for `url`. PostgreSQL connections get `sslmode`
    so the transport is encrypted.
    """
    connect_args = {}
    if sslmode and make_url(url).get_backend_name() == "postgresql":
        connect_args["sslmode"] = sslmode

    return create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


@lru_cache
def get_engine() -> Engine:
    # One pool per process; handed to actions through Depends(get_engine)
    settings = get_settings()
    return build_engine(
        settings.database_url,
        sslmode=settings.database_sslmode,
        echo=settings.database_echo,
    )
