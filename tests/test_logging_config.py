"""Tests for logging setup and payload truncation."""

import logging

from common.logging_config import (
    PayloadTruncationFilter,
    resolve_log_level,
    setup_logging,
)


def make_record(msg, args):
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


class TestPayloadTruncationFilter:
    """Test shortening of surface payloads in log arguments."""

    def test_short_string_kept(self):
        record = make_record("payload: %s", ("short",))

        assert PayloadTruncationFilter().filter(record) is True
        assert record.args == ("short",)

    def test_long_string_truncated(self):
        record = make_record("payload: %s", ("x" * 200,))

        PayloadTruncationFilter(max_chars=10).filter(record)

        assert record.args == ("xxxxxxxxxx... (200 chars)",)

    def test_newlines_flattened(self):
        record = make_record("payload: %s", ("a\nb",))

        PayloadTruncationFilter().filter(record)

        assert record.getMessage() == "payload: a\\nb"

    def test_non_string_args_untouched(self):
        record = make_record("%s %d", (None, 3))

        PayloadTruncationFilter().filter(record)

        assert record.args == (None, 3)


class TestSetupLogging:
    """Test logger configuration."""

    def test_level_from_argument(self):
        logger = setup_logging("relay-test-level", log_level="WARNING")

        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert len(logger.handlers) == 1

    def test_debug_flag_overrides_level(self):
        assert resolve_log_level("ERROR", debug=True) == logging.DEBUG

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")

        assert resolve_log_level() == logging.ERROR

    def test_unknown_level_defaults_to_info(self):
        assert resolve_log_level("LOUD") == logging.INFO

    def test_repeat_setup_reuses_handler(self):
        setup_logging("relay-test-repeat", log_level="INFO")
        logger = setup_logging("relay-test-repeat", debug=True)

        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.DEBUG


    def test_format_layout(self):
        logger = setup_logging("relay-test-format")
        record = make_record("hello", ())

        assert logger.handlers[0].format(record).endswith(" - test - INFO - hello")
