# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-18
# Description: test_logging_utils.py
# -----------------------------------------------------------------------------
import logging
from logging.handlers import RotatingFileHandler

import colorlog
import pytest

import settings
from utility.logging_utils import get_class_logger, get_logger


@pytest.fixture
def fresh_loggers():
    created = []
    yield created
    for logger in created:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_loggers_live_under_configured_namespace(fresh_loggers):
    class Widget:
        pass

    logger = get_class_logger(Widget)
    fresh_loggers.append(logger)

    assert logger.name == f"{settings.LOG_NAMESPACE}.{__name__}.Widget"
    assert get_logger().name == settings.LOG_NAMESPACE
    assert logger.propagate is False


def test_namespace_follows_settings(monkeypatch, fresh_loggers):
    monkeypatch.setattr(settings, "LOG_NAMESPACE", "retail_chat_alt")

    logger = get_logger("namespace-check")
    fresh_loggers.append(logger)

    assert logger.name == "retail_chat_alt.namespace-check"


def test_console_only_when_file_logging_off(monkeypatch, fresh_loggers):
    monkeypatch.setattr(settings, "LOG_TO_FILE", False)

    logger = get_logger("console-only")
    fresh_loggers.append(logger)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, colorlog.ColoredFormatter)
    assert not any(isinstance(h, RotatingFileHandler) for h in logger.handlers)


def test_file_handler_uses_log_settings(monkeypatch, tmp_path, fresh_loggers):
    log_file = tmp_path / "nested" / "retail.log"
    monkeypatch.setattr(settings, "LOG_TO_FILE", True)
    monkeypatch.setattr(settings, "LOG_FILE", str(log_file))
    monkeypatch.setattr(settings, "LOG_MAX_BYTES", 1024)
    monkeypatch.setattr(settings, "LOG_BACKUP_COUNT", 2)
    monkeypatch.setattr(settings, "LOG_LEVEL", "DEBUG")

    logger = get_logger("file-check")
    fresh_loggers.append(logger)
    logger.debug("hello file")

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 1024
    assert file_handlers[0].backupCount == 2
    assert logger.level == logging.DEBUG
    file_handlers[0].flush()
    assert "hello file" in log_file.read_text(encoding="utf-8")


def test_logger_configured_once(monkeypatch, fresh_loggers):
    monkeypatch.setattr(settings, "LOG_TO_FILE", False)

    first = get_logger("configured-once")
    second = get_logger("configured-once")
    fresh_loggers.append(first)

    assert first is second
    assert len(first.handlers) == 1
