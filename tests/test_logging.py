"""
IoTeX Explorer - Logging Tests
================================
Unit tests for formatters and category loggers.
"""

import json
import logging
import sys

from iotex_explorer.logging_setup import (
    ColoredTextFormatter,
    JSONFormatter,
    PerformanceLogger,
    get_logger,
    setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="iotex_explorer.test", level=logging.ERROR, pathname=__file__,
        lineno=1, msg="getVotesByAddress failed", args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Test JSON and text formatters"""

    def test_json_formatter(self):
        payload = json.loads(JSONFormatter().format(_record(extra_data={"id": "io1a"})))

        assert payload["level"] == "ERROR"
        assert payload["logger"] == "iotex_explorer.test"
        assert payload["message"] == "getVotesByAddress failed"
        assert payload["extra_data"] == {"id": "io1a"}
        assert payload["timestamp"].endswith("Z")

    def test_json_formatter_exception(self):
        try:
            raise RuntimeError("gateway down")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())

        payload = json.loads(JSONFormatter().format(record))

        assert "extra_data" not in payload
        assert "RuntimeError: gateway down" in payload["exception"]

    def test_text_formatter_keeps_levelname(self):
        record = _record()

        output = ColoredTextFormatter().format(record)

        assert "getVotesByAddress failed" in output
        assert record.levelname == "ERROR"


class TestLoggers:
    """Test setup and category loggers"""

    def test_category_logger_name(self):
        assert get_logger("gateway").name == "iotex_explorer.gateway"

    def test_setup_writes_files(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path, enable_console=False)
        try:
            get_logger("test").error("gateway down", extra_data={"id": "io1a"})

            assert (tmp_path / "iotex_explorer.log").exists()
            assert "gateway down" in (tmp_path / "iotex_explorer_errors.log").read_text()
        finally:
            setup_logging(log_to_file=False, enable_console=False)

        assert logger.name == "iotex_explorer"

    def test_performance_logger_measures(self):
        with PerformanceLogger(get_logger("test"), "getAddressDetails") as perf:
            pass

        assert perf.elapsed_ms is not None
        assert perf.elapsed_ms >= 0
