"""Clock protocol.

Lets the store stamp ``created``/``updated`` without reading the wall clock
directly. Production uses ``SystemClock``; tests inject ``FakeClock``.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time at second resolution."""

    def now(self) -> int:
        """Return the current time as whole seconds since the epoch."""
        ...
