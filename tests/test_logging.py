"""Tests for logging setup."""

import logging
import threading

import pytest
from rich.logging import RichHandler

from wwsync.core.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("paramiko").setLevel(logging.NOTSET)


class TestSetupLogging:

    def test_single_rich_handler(self):
        setup_logging("INFO")
        setup_logging("INFO")
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert logging.getLogger().level == logging.INFO

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging("chatty")
        assert logging.getLogger().level == logging.WARNING

    def test_paramiko_quiet_unless_debug(self):
        setup_logging("INFO")
        assert logging.getLogger("paramiko").level == logging.WARNING
        setup_logging("DEBUG")
        assert logging.getLogger("paramiko").level == logging.DEBUG

    def test_log_file_records_thread_name(self, tmp_path):
        log_file = tmp_path / "logs" / "wwsync.log"
        setup_logging("DEBUG", log_file=log_file)

        thread = threading.Thread(
            target=lambda: get_logger("wwsync.domain.sync.runner").debug("read 4096 bytes"),
            name="rsync-stdout",
        )
        thread.start()
        thread.join()
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip()
        assert " - rsync-stdout - wwsync.domain.sync.runner - DEBUG - read 4096 bytes" in line
