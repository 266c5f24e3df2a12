"""Connection model."""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from wrangler.models._base import Base


class Connection(Base):
    """One row per connection, keyed by (namespace, id).

    ``type`` holds the ConnectionType member name and ``properties`` a JSON
    object; both are decoded by the store, not by the ORM.
    """

    __tablename__ = "connections"

    namespace: Mapped[str] = mapped_column(String, primary_key=True)
    id: Mapped[str] = mapped_column(String, primary_key=True)
    type: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")
    properties: Mapped[str] = mapped_column(String, nullable=False, default="{}")
    created: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated: Mapped[int] = mapped_column(BigInteger, nullable=False)
