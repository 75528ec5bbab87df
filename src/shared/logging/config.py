"""ロギング設定"""
import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 詳細ログが多すぎるため WARNING 以上のみ出すライブラリ
QUIET_LOGGERS = ("urllib3", "googlemaps", "google", "asyncio")

# ロガー設定済みフラグ
_logger_configured = False


def _console_handler(level: int, stream: TextIO) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _cloud_handler(level: int, project_id: Optional[str]) -> Optional[logging.Handler]:
    """Cloud Loggingのハンドラーを作成（ライブラリ未導入・認証失敗時はNone）"""
    try:
        from google.cloud import logging as cloud_logging

        client = cloud_logging.Client(project=project_id)
        handler = cloud_logging.handlers.CloudLoggingHandler(client)
    except Exception as e:
        logging.warning(f"Failed to enable Cloud Logging: {e}")
        return None

    handler.setLevel(level)
    return handler


def setup_logging(
    level: str = "INFO",
    enable_cloud_logging: bool = False,
    project_id: Optional[str] = None,
    force: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    ルートロガーを設定

    2回目以降の呼び出しは force=True でない限り何もしない。
    標準出力はCLIのJSON結果に使うため、コンソールログは標準エラー出力に出す

    Args:
        level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_cloud_logging: Cloud Loggingにも送るか
        project_id: GCPプロジェクトID (Cloud Logging用)
        force: 設定済みでも再設定するか（CLIの--log-level上書き用）
        stream: コンソールログの出力先（デフォルト: sys.stderr）
    """
    global _logger_configured

    if _logger_configured and not force:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler(log_level, stream or sys.stderr))

    if enable_cloud_logging:
        cloud_handler = _cloud_handler(log_level, project_id)
        if cloud_handler is not None:
            root_logger.addHandler(cloud_handler)
            logging.info("Cloud Logging enabled")

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger_configured = True
    logging.info(f"Logging configured with level: {level}")


def get_logger(name: str) -> logging.Logger:
    """
    指定名のロガーを取得

    Args:
        name: ロガー名（通常は__name__を指定）

    Returns:
        ロガーインスタンス
    """
    return logging.getLogger(name)
