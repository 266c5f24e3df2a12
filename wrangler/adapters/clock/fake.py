"""Fake Clock for testing."""


class FakeClock:
    """Manually driven clock implementing the Clock protocol.

    Usage:
        clock = FakeClock(1_700_000_000)
        clock.advance(5)
        assert clock.now() == 1_700_000_005
    """

    def __init__(self, start: int = 1_700_000_000) -> None:
        self._now = start
        self.calls: int = 0

    def now(self) -> int:
        self.calls += 1
        return self._now

    # -- test helpers --

    def set(self, value: int) -> None:
        """Jump to an absolute time."""
        self._now = value

    def advance(self, seconds: int = 1) -> None:
        """Move the clock forward."""
        self._now += seconds
