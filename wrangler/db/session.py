"""SQLAlchemy engine construction."""

from pathlib import Path
from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from wrangler.core.config import Settings, settings


def build_engine(config: Optional[Settings] = None) -> Engine:
    """Create the engine for ``config.DATABASE_URL``.

    File-backed SQLite databases get their parent directory created. In-memory
    SQLite shares one connection across the process, otherwise every checkout
    would see a fresh, empty database.
    """
    config = config or settings
    url = make_url(config.DATABASE_URL)

    if url.get_backend_name() == "sqlite":
        database = url.database
        if not database or database == ":memory:":
            return create_engine(
                url,
                echo=config.DB_ECHO,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)

    return create_engine(url, echo=config.DB_ECHO, pool_pre_ping=config.DB_POOL_PRE_PING)
