"""Tests for logging configuration used by the CLI."""

import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from eml2pdf.logging_utils import SIMPLE_FORMAT, TRACE_FORMAT, AppNameFilter, configure_logging

pytestmark = pytest.mark.usefixtures("restore_root_logger")


def _own_handlers(root):
    return [h for h in root.handlers if any(isinstance(f, AppNameFilter) for f in h.filters)]


@pytest.mark.unit
class TestConfigureLogging:
    def test_console_only(self):
        root = configure_logging("WARNING")

        assert root.level == logging.WARNING
        handlers = _own_handlers(root)
        assert len(handlers) == 1
        assert handlers[0].formatter._fmt == SIMPLE_FORMAT

    def test_trace_mode_uses_detailed_format(self):
        root = configure_logging(logging.DEBUG, trace_mode=True)
        assert _own_handlers(root)[0].formatter._fmt == TRACE_FORMAT

    def test_unknown_level_name_defaults_to_info(self):
        assert configure_logging("chatty").level == logging.INFO

    def test_log_file(self, temp_dir):
        log_file = temp_dir / "run.log"
        root = configure_logging("INFO", log_file=str(log_file), app_name="mailbot")
        logging.getLogger("eml2pdf.tests").info("hello file")

        for handler in root.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "[INFO] [mailbot] [eml2pdf.tests] hello file" in content

    def test_log_dir_rotates_daily(self, temp_dir):
        log_dir = temp_dir / "logs"
        root = configure_logging("INFO", log_dir=str(log_dir), retention_days=3)

        rotating = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(rotating) == 1
        assert rotating[0].backupCount == 3
        assert rotating[0].when == "MIDNIGHT"
        assert (log_dir / "eml2pdf.log").exists()

    def test_unusable_log_file_does_not_raise(self, temp_dir):
        root = configure_logging("INFO", log_file=str(temp_dir / "missing" / "run.log"))
        assert len(_own_handlers(root)) == 1

    def test_app_name_filter(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        assert AppNameFilter("svc").filter(record) is True
        assert record.app == "svc"
