import logging

import pytest

from potsweep import logging_config
from potsweep.logging_config import LOGGER_FIELDS, LoggingManager, configure_logging, verbosity_level


@pytest.fixture
def restore_logging(monkeypatch):
    # leave the root handlers pytest installed alone
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in LOGGER_FIELDS:
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_verbosity_levels():
    assert verbosity_level(0) == "WARNING"
    assert verbosity_level(1) == "INFO"
    assert verbosity_level(2) == "DEBUG"
    assert verbosity_level(5) == "DEBUG"


def test_verbosity_sets_app_level(monkeypatch, restore_logging):
    monkeypatch.delenv("LOG_APP_LEVEL", raising=False)
    manager = LoggingManager(verbosity=1)
    assert manager.config.app_level == "INFO"
    assert logging.getLogger("potsweep").level == logging.INFO


def test_environment_wins_over_verbosity(monkeypatch, restore_logging):
    monkeypatch.setenv("LOG_APP_LEVEL", "ERROR")
    manager = LoggingManager(verbosity=2)
    assert manager.get_current_config()["app_level"] == "ERROR"


def test_set_logger_level(monkeypatch, restore_logging):
    monkeypatch.delenv("LOG_APP_LEVEL", raising=False)
    manager = LoggingManager()
    assert manager.set_logger_level("potsweep", "debug")
    assert manager.config.app_level == "DEBUG"
    assert logging.getLogger("potsweep").level == logging.DEBUG
    assert not manager.set_logger_level("potsweep", "loud")


def test_configure_logging_replaces_the_module_manager(monkeypatch, restore_logging):
    monkeypatch.delenv("LOG_APP_LEVEL", raising=False)
    monkeypatch.setattr(logging_config, "_logging_manager", None)
    first = configure_logging(1)
    assert logging_config._logging_manager is first

    second = configure_logging(2)
    assert logging_config._logging_manager is second
    assert second.config.app_level == "DEBUG"
