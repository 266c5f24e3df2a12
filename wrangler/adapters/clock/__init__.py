"""Clock adapters."""

from wrangler.adapters.clock.fake import FakeClock
from wrangler.adapters.clock.system import SystemClock

__all__ = ["FakeClock", "SystemClock"]
