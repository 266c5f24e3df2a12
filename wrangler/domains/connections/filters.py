"""Ready-made predicates for ``ConnectionStore.list``.

Any ``Callable[[Connection], bool]`` works; these cover the common cases.
"""

from typing import Callable

from wrangler.core.shared_models import ConnectionType
from wrangler.schemas.connection import Connection

ConnectionFilter = Callable[[Connection], bool]


def match_all(connection: Connection) -> bool:
    """Keep every connection."""
    return True


def match_none(connection: Connection) -> bool:
    """Keep nothing."""
    return False


def by_type(*types: ConnectionType) -> ConnectionFilter:
    """Keep connections whose type is one of ``types``."""
    wanted = frozenset(types)

    def _matches(connection: Connection) -> bool:
        return connection.type in wanted

    return _matches
