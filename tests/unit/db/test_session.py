"""Unit tests for engine construction."""

from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from wrangler.core.config import Settings
from wrangler.db.session import build_engine


class TestBuildEngine:
    """Tests for build_engine."""

    def test_in_memory_sqlite_shares_one_connection(self):
        engine = build_engine(Settings(_env_file=None, DATABASE_URL="sqlite://"))
        try:
            assert isinstance(engine.pool, StaticPool)
            with engine.begin() as conn:
                conn.execute(text("CREATE TABLE t (x INTEGER)"))
            with engine.connect() as conn:
                assert conn.execute(text("SELECT count(*) FROM t")).scalar() == 0
        finally:
            engine.dispose()

    def test_file_sqlite_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "wrangler.db"
        engine = build_engine(Settings(_env_file=None, DATABASE_URL=f"sqlite:///{path}"))
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            assert path.parent.is_dir()
        finally:
            engine.dispose()
