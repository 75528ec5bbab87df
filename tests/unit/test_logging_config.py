"""ロギング設定のテスト"""

import io
import logging
from typing import Iterator

import pytest

from src.shared.logging import config
from src.shared.logging.config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    monkeypatch.setattr(config, "_logger_configured", False)
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_console_log_format() -> None:
    """指定したストリームに書式付きで出力"""
    stream = io.StringIO()

    setup_logging(level="DEBUG", stream=stream)
    get_logger("arrondissement.test").debug("resolved 75116")

    assert " - arrondissement.test - DEBUG - resolved 75116" in stream.getvalue()
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_second_call_is_ignored_unless_forced() -> None:
    """2回目の呼び出しはforce=Trueでのみ再設定される"""
    first, second = io.StringIO(), io.StringIO()

    setup_logging(level="INFO", stream=first)
    setup_logging(level="DEBUG", stream=second)
    assert logging.getLogger().level == logging.INFO

    setup_logging(level="DEBUG", stream=second, force=True)
    get_logger("arrondissement.test").debug("forced")

    assert "forced" in second.getvalue()
    assert "forced" not in first.getvalue()


def test_unknown_level_falls_back_to_info() -> None:
    """不明なログレベルはINFO扱い"""
    setup_logging(level="VERBOSE", stream=io.StringIO())

    assert logging.getLogger().level == logging.INFO
