"""日志配置：控制台/文件两路输出，时间按配置时区渲染，每条记录附带请求 ID。

`setup_logging()` 通过 ``logging.config.dictConfig`` 一次性装配；服务代码只需
``logging.getLogger(__name__)``，`app.*` 下的 logger 统一汇总到 ``app`` 的处理器。
"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Optional

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

# 交由统一处理器输出的 logger；uvicorn 自带的配置会被覆盖
MANAGED_LOGGERS = ("app", "uvicorn", "uvicorn.error", "uvicorn.access")

_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class ZonedFormatter(logging.Formatter):
    """以 Settings.timezone 渲染 `asctime`，默认输出带毫秒的 ISO-8601。"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        stamp = datetime.fromtimestamp(record.created, get_settings().timezone_info)
        if datefmt:
            return stamp.strftime(datefmt)
        return stamp.isoformat(sep=" ", timespec="milliseconds")


class ColorFormatter(ZonedFormatter):
    """终端输出按级别着色；非 TTY 时保持纯文本。"""

    LEVEL_COLORS = {
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "41",
    }

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: Optional[str] = None, use_colors: Optional[bool] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = sys.stderr.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        code = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return f"\033[{code}m{text}\033[0m" if code else text


class JsonFormatter(ZonedFormatter):
    """每条记录一行 JSON，便于采集端解析。"""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", None),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class RequestIdFilter(logging.Filter):
    """把当前上下文中的请求 ID 写入 LogRecord。"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx.get()
        return True


def _formatters() -> dict[str, Any]:
    module = __name__
    return {
        "console": {"()": f"{module}.ColorFormatter", "fmt": LOG_FORMAT},
        "plain": {"()": f"{module}.ZonedFormatter", "fmt": LOG_FORMAT},
        "json": {"()": f"{module}.JsonFormatter"},
    }


def _handlers(settings: Settings) -> dict[str, Any]:
    shared = {"level": settings.log_level, "filters": ["request_id"]}
    return {
        "console": {
            **shared,
            "class": "logging.StreamHandler",
            "formatter": "json" if settings.log_json else "console",
        },
        "file": {
            **shared,
            "class": "logging.handlers.TimedRotatingFileHandler",
            "formatter": "json" if settings.log_json else "plain",
            "filename": str(settings.log_file_path),
            "when": "midnight",
            "backupCount": 14,
            "encoding": "utf-8",
            "delay": True,
        },
    }


def setup_logging() -> None:
    """按当前配置装配日志系统，可重复调用。"""
    settings = get_settings()
    settings.log_directory.mkdir(parents=True, exist_ok=True)
    handler_names = ["console", "file"]

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"request_id": {"()": f"{__name__}.RequestIdFilter"}},
            "formatters": _formatters(),
            "handlers": _handlers(settings),
            "loggers": {
                name: {"handlers": handler_names, "level": settings.log_level, "propagate": False}
                for name in MANAGED_LOGGERS
            },
            "root": {"handlers": handler_names, "level": settings.log_level},
        }
    )


logger = logging.getLogger("app")


def set_request_id(request_id: Optional[str]) -> None:
    _request_id_ctx.set(request_id)