from __future__ import annotations

import logging
from pathlib import Path

from shop_manager.logging import get_logger, level_from, set_level


def test_level_names_and_unknown_values() -> None:
    assert level_from("debug") == logging.DEBUG
    assert level_from(" Warn ") == logging.WARNING
    assert level_from(logging.ERROR) == logging.ERROR
    assert level_from("chatty") == logging.WARNING
    assert level_from(None) == logging.WARNING


def test_logger_is_configured_once_and_writes_log_file(tmp_path: Path, monkeypatch) -> None:
    log_file = tmp_path / "shop.log"
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_FILE", str(log_file))
    logger = get_logger("test-file-sink")
    try:
        assert get_logger("test-file-sink") is logger
        assert len(logger.handlers) == 2
        assert logger.name == "shop.test-file-sink"
        logger.info("order 7 stored")
        for handler in logger.handlers:
            handler.flush()
        assert "[shop.test-file-sink] INFO: order 7 stored" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_set_level_retunes_shop_loggers_only(monkeypatch) -> None:
    monkeypatch.delenv("LOG_FILE", raising=False)
    shop_logger = get_logger("test-retune")
    other = logging.getLogger("elsewhere.test-retune")
    other.setLevel(logging.ERROR)
    previous = shop_logger.level
    try:
        set_level("DEBUG")
        assert shop_logger.level == logging.DEBUG
        assert other.level == logging.ERROR
    finally:
        set_level(previous)
