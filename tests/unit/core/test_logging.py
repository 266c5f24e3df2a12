"""Unit tests for the contextual logger and formatters."""

import json
import logging

from wrangler.core.config import Settings
from wrangler.core.logging import (
    ContextualLogger,
    JSONFormatter,
    TextFormatter,
    configure_logging,
    logger,
)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _record(message: str = "hello", **dimensions) -> logging.LogRecord:
    record = logging.LogRecord("wrangler", logging.INFO, __file__, 1, message, None, None)
    record.dimensions = dimensions
    return record


class TestContextualLogger:
    """Tests for with_context dimension merging."""

    def test_with_context_merges_and_does_not_mutate_parent(self):
        parent = logger.with_context(namespace="ns1")
        child = parent.with_context(connection_id="my_db_")

        assert isinstance(child, ContextualLogger)
        assert parent.dimensions == {"namespace": "ns1"}
        assert child.dimensions == {"namespace": "ns1", "connection_id": "my_db_"}

    def test_dimensions_reach_the_record(self):
        base = logging.getLogger("wrangler.test.contextual")
        base.propagate = False
        base.setLevel(logging.DEBUG)
        handler = _ListHandler()
        base.addHandler(handler)
        try:
            ContextualLogger(base).with_context(namespace="ns1").info("created")
        finally:
            base.removeHandler(handler)

        assert handler.records[0].dimensions == {"namespace": "ns1"}
        assert handler.records[0].getMessage() == "created"


class TestFormatters:
    """Tests for the text and JSON formatters."""

    def test_json_formatter_flattens_dimensions(self):
        payload = json.loads(JSONFormatter().format(_record(namespace="ns1")))

        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["namespace"] == "ns1"

    def test_text_formatter_appends_dimensions(self):
        line = TextFormatter("%(message)s").format(_record(b="2", a="1"))

        assert line == "hello [a=1 b=2]"

    def test_text_formatter_without_dimensions(self):
        assert TextFormatter("%(message)s").format(_record()) == "hello"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_installs_single_handler(self):
        try:
            base = configure_logging(Settings(_env_file=None, LOG_FORMAT="json", LOG_LEVEL="DEBUG"))
            base = configure_logging(Settings(_env_file=None, LOG_FORMAT="json", LOG_LEVEL="DEBUG"))

            assert len(base.handlers) == 1
            assert isinstance(base.handlers[0].formatter, JSONFormatter)
            assert base.level == logging.DEBUG
        finally:
            configure_logging(Settings(_env_file=None))
