import logging

import pytest

from verify_backend.config import Settings, get_logger, set_log_level
from verify_backend.config.logging_utils import resolve_level
from verify_backend.main import create_app


@pytest.fixture
def restore_log_level():
    yield
    set_log_level("INFO")


def test_resolve_level():
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level("DEBUG") == logging.DEBUG
    assert resolve_level("not-a-level") == logging.INFO


def test_handler_attached_once():
    first = get_logger("verify_backend.tests.once")
    second = get_logger("verify_backend.tests.once")

    assert first is second
    assert len(second.handlers) == 1


def test_set_log_level_applies_to_service_loggers(restore_log_level):
    logger = get_logger("verify_backend.tests.level")

    assert set_log_level("error") == logging.ERROR
    assert logger.level == logging.ERROR
    assert all(handler.level == logging.ERROR for handler in logger.handlers)


def test_app_settings_drive_log_level(restore_log_level):
    create_app(Settings(log_level="WARNING"))

    service_logger = logging.getLogger("verify_backend.service.verify_service")
    assert service_logger.level == logging.WARNING
