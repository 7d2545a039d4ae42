"""
Tests for structured logging.
"""

import io
import json
import logging

import pytest

from keypage.core.dsl import PageRequest
from keypage.core.errors import MalformedCursorError
from keypage.logging import (
    ContextFilter,
    JSONFormatter,
    TextFormatter,
    configure_logging,
    get_log_context,
    get_logger,
    log_context,
)
from keypage.service import PaginationService
from keypage.stores.memory import InMemoryStore
from keypage.testing import make_products


@pytest.fixture
def stream():
    output = io.StringIO()
    configure_logging(level="DEBUG", format="json", output=output)
    yield output
    logging.getLogger("keypage").handlers.clear()


def entries(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def make_record(msg="msg", level=logging.INFO, args=None, **fields):
    record = logging.LogRecord("keypage.test", level, __file__, 1, msg, args, None)
    record.__dict__.update(fields)
    return record


class TestLogContext:
    def test_scopes_nest_and_restore(self):
        with log_context(request_id="outer"):
            with log_context(route="/api/products"):
                assert get_log_context() == {"request_id": "outer", "route": "/api/products"}
            assert get_log_context() == {"request_id": "outer"}
        assert get_log_context() == {}

    def test_none_values_dropped(self):
        with log_context(request_id="r1", trace_id=None):
            assert get_log_context() == {"request_id": "r1"}

    def test_filter_injects_fields(self):
        record = make_record()
        with log_context(request_id="r2"):
            assert ContextFilter().filter(record) is True
        assert record.request_id == "r2"

    def test_filter_keeps_explicit_fields(self):
        record = make_record(request_id="explicit")
        with log_context(request_id="scoped"):
            ContextFilter().filter(record)
        assert record.request_id == "explicit"


class TestFormatters:
    def test_json_groups_fields(self):
        record = make_record(
            "hello %s", args=("you",), request_id="r3", item_count=4, duration_ms=1.5, cursor_len=12
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "hello you"
        assert data["level"] == "INFO"
        assert data["logger"] == "keypage.test"
        assert data["request_id"] == "r3"
        assert data["page"] == {"item_count": 4, "duration_ms": 1.5}
        assert data["extra"] == {"cursor_len": 12}

    def test_json_without_extra(self):
        data = json.loads(JSONFormatter(include_extra=False).format(make_record(code="X")))
        assert "extra" not in data

    def test_text_line(self):
        record = make_record("careful", level=logging.WARNING, route="/api/products", has_next=True)

        line = TextFormatter(use_colors=False).format(record)

        assert "WARNING" in line
        assert "[route=/api/products] careful" in line
        assert line.endswith("has_next=True")


class TestConfiguredLogging:
    def test_keyword_fields(self, stream):
        get_logger("keypage.test").info("Served", code="X")

        (entry,) = entries(stream)
        assert entry["logger"] == "keypage.test"
        assert entry["extra"] == {"code": "X"}

    def test_level_filters(self):
        output = io.StringIO()
        configure_logging(level="WARNING", format="text", output=output, use_colors=False)
        try:
            get_logger("keypage.test").debug("hidden")
            get_logger("keypage.test").warning("shown")
        finally:
            logging.getLogger("keypage").handlers.clear()

        assert "hidden" not in output.getvalue()
        assert "shown" in output.getvalue()

    @pytest.mark.asyncio
    async def test_service_logs_each_page(self, stream):
        service = PaginationService(InMemoryStore(make_products(20)))

        with log_context(request_id="req-1"):
            await service.paginate(PageRequest(page_size=5))

        (entry,) = entries(stream)
        assert entry["message"] == "Page fetched"
        assert entry["request_id"] == "req-1"
        assert entry["page"]["item_count"] == 5
        assert entry["page"]["has_next"] is True
        assert entry["page"]["has_previous"] is False
        assert "duration_ms" in entry["page"]

    @pytest.mark.asyncio
    async def test_malformed_cursor_logged(self, stream):
        service = PaginationService(InMemoryStore(make_products(5)))

        with pytest.raises(MalformedCursorError):
            await service.paginate(PageRequest(cursor="garbage"))

        (entry,) = entries(stream)
        assert entry["level"] == "WARNING"
        assert entry["message"] == "Rejected malformed cursor"
        assert "reason" in entry["extra"]
