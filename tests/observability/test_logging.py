"""Tests for logging configuration and safe log helpers."""

import logging

from ocrchat.observability import configure_logging
from ocrchat.observability.log_utils import log_exception_with_context, safe_log_value


class TestSafeLogValue:
    """Tests for safe_log_value."""

    def test_short_string_unchanged(self) -> None:
        assert safe_log_value("hello") == "hello"

    def test_whitespace_collapsed(self) -> None:
        assert safe_log_value("a\n\n  b") == "a b"

    def test_bytes_never_logged(self) -> None:
        assert safe_log_value(b"%PDF-1.4") == "<8 bytes>"

    def test_long_string_truncated(self) -> None:
        result = safe_log_value("x" * 100, max_length=10)

        assert result.startswith("x" * 10 + "...")
        assert "100 total" in result

    def test_collections_summarized(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"


class TestLogExceptionWithContext:
    """Tests for log_exception_with_context."""

    def test_logs_error_with_context(self, caplog) -> None:
        logger = logging.getLogger("ocrchat.tests")

        with caplog.at_level(logging.ERROR, logger="ocrchat.tests"):
            try:
                raise RuntimeError("disk full")
            except RuntimeError as e:
                log_exception_with_context(logger, "Upsert failed", e, conversation_id="abc")

        record = caplog.records[-1]
        assert record.getMessage() == "Upsert failed"
        assert record.conversation_id == "abc"
        assert record.error_type == "RuntimeError"
        assert record.exc_info is not None


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_and_quiets_third_party(self) -> None:
        root = logging.getLogger()
        previous_handlers = root.handlers[:]
        previous_level = root.level
        try:
            configure_logging("debug")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert logging.getLogger("botocore").level == logging.WARNING
        finally:
            root.handlers[:] = previous_handlers
            root.setLevel(previous_level)
