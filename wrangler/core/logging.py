"""Logging for the connection store.

A single ``logger`` is exported. Call sites attach dimensions with
``logger.with_context(namespace=..., connection_id=...)`` and log through the
returned adapter; the dimensions are rendered by both formatters.
"""

import json
import logging
import sys
from typing import Any, MutableMapping, Optional

from wrangler.core.config import Settings, settings

_LOGGER_NAME = "wrangler"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a dict of contextual dimensions."""

    def __init__(self, logger: logging.Logger, dimensions: Optional[dict[str, Any]] = None):
        super().__init__(logger, {})
        self.dimensions: dict[str, Any] = dict(dimensions or {})

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.dimensions, **extra.get("dimensions", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a child logger with ``dimensions`` merged over the current ones."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions})


class JSONFormatter(logging.Formatter):
    """One JSON object per line, dimensions flattened into the record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "dimensions", {}) or {})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    """Plain formatter that appends ``key=value`` dimensions to the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if dimensions:
            rendered = " ".join(f"{k}={v}" for k, v in sorted(dimensions.items()))
            line = f"{line} [{rendered}]"
        return line


def configure_logging(config: Settings = settings) -> logging.Logger:
    """Install a single stderr handler on the ``wrangler`` logger.

    Safe to call more than once; the previous handler is replaced.
    """
    base = logging.getLogger(_LOGGER_NAME)
    for handler in list(base.handlers):
        base.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if config.LOG_FORMAT == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter(_TEXT_FORMAT))

    base.addHandler(handler)
    base.setLevel(config.LOG_LEVEL)
    base.propagate = False
    return base


logger = ContextualLogger(configure_logging())
