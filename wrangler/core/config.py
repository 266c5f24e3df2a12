"""Application settings.

Values are read from the environment (and an optional ``.env`` file) once at
import time; tests construct their own ``Settings`` instead of mutating the
module singleton.
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the connection store.

    Attributes:
        ENVIRONMENT: Deployment name (``local``, ``dev``, ``prd``, ...).
        DEBUG: Enables verbose error output.
        LOG_LEVEL: Root level for the ``wrangler`` logger.
        LOG_FORMAT: ``text`` for humans, ``json`` for log shippers.
        DATABASE_URL: SQLAlchemy URL of the database holding the connections table.
        DB_ECHO: Echo emitted SQL through the SQLAlchemy engine logger.
        DB_POOL_PRE_PING: Test pooled connections before handing them out.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=True)

    ENVIRONMENT: str = "local"
    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["text", "json"] = "text"

    DATABASE_URL: str = "sqlite:///./data/wrangler.db"
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level and reject names the logging module does not know."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{v}'")
        return level


settings = Settings()
