"""
Tests for the queue-based logging setup.
"""

import logging
import logging.handlers

import pytest

from heritage_service.logging_config import NOISY_LOGGERS, ThreadSafeLoggingConfig


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    noisy_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, noisy_level in noisy_levels.items():
        logging.getLogger(name).setLevel(noisy_level)


class TestThreadSafeLoggingConfig:
    """Test listener lifecycle and level handling."""

    def test_setup_installs_queue_handler(self, restore_root_logger):
        config = ThreadSafeLoggingConfig()
        try:
            config.setup_logging()
            root = logging.getLogger()
            assert config.is_running
            assert root.level == logging.INFO
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0], logging.handlers.QueueHandler)
            assert logging.getLogger("urllib3").level == logging.WARNING
        finally:
            config.stop()
        assert not config.is_running

    def test_debug_level(self, restore_root_logger):
        config = ThreadSafeLoggingConfig()
        try:
            config.setup_logging(debug=True)
            assert logging.getLogger().level == logging.DEBUG
        finally:
            config.stop()

    def test_repeated_setup_replaces_listener(self, restore_root_logger):
        config = ThreadSafeLoggingConfig()
        try:
            config.setup_logging()
            first = config._log_listener
            config.setup_logging()
            assert config._log_listener is not first
            assert len(logging.getLogger().handlers) == 1
        finally:
            config.stop()

    def test_stop_without_setup(self):
        config = ThreadSafeLoggingConfig()
        config.stop()
        assert not config.is_running
