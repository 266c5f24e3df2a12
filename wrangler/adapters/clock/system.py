"""Wall-clock implementation of the Clock protocol."""

import time

from wrangler.core.protocols.clock import Clock


class SystemClock(Clock):
    """Reads ``time.time()`` and truncates to whole seconds."""

    def now(self) -> int:
        return int(time.time())
