from __future__ import annotations

import json
import logging

from ordermgt.app.core.config import Settings

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# uvicorn installs its own handlers; these get ours instead
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        doc = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            doc["exc"] = self.formatException(record.exc_info)
        return json.dumps(doc, ensure_ascii=False)


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return JsonLineFormatter()
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(settings: Settings) -> logging.Handler:
    """
    Route the root logger and uvicorn's loggers through one stream handler,
    at ORDERMGT_LOG_LEVEL in ORDERMGT_LOG_FORMAT (text|json).
    Returns the installed handler.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(settings.log_format))

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)

    for name in UVICORN_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers = [handler]
        lg.setLevel(level)
        # already handled above; don't repeat through root
        lg.propagate = False
    return handler
