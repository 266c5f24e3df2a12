from wrangler.models._base import Base
from wrangler.models.connection import Connection

__all__ = ["Base", "Connection"]
