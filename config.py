"""
Process configuration.

Values come from the environment. DATABASE_URL and JWT_SECRET are required;
the application refuses to start without them.
"""
import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    database_url: str
    database_name: str
    jwt_secret: str
    jwt_expires_hours: int = 72
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    database_url = os.getenv("DATABASE_URL")
    jwt_secret = os.getenv("JWT_SECRET")

    missing = [name for name, value in (("DATABASE_URL", database_url), ("JWT_SECRET", jwt_secret)) if not value]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

    return Settings(
        database_url=database_url,
        database_name=os.getenv("DATABASE_NAME", "storefront"),
        jwt_secret=jwt_secret,
        jwt_expires_hours=int(os.getenv("JWT_EXPIRES_HOURS", "72")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once."""
    root = logging.getLogger()
    root.setLevel(level)
    if root.hasHandlers():
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - [%(levelname)-7s] - %(message)s"))
    root.addHandler(handler)
