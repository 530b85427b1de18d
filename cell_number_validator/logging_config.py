import json
import logging
import sys
from logging.handlers import RotatingFileHandler

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _file_handler(path: str, max_bytes: int, backup_count: int) -> logging.Handler:
    if max_bytes > 0:
        return RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    return logging.FileHandler(path)


def configure_logging(
    *,
    level: str | int = logging.INFO,
    fmt: str | None = None,
    log_file: str | None = None,
    json_format: bool = False,
    max_bytes: int = 0,
    backup_count: int = 0,
) -> None:
    """Attach handlers to the root logger unless it already has some.

    Records go to stderr, stdout is reserved for verdicts. ``log_file``
    adds a file handler, rotating once it reaches ``max_bytes``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = JsonFormatter() if json_format else logging.Formatter(fmt or DEFAULT_FORMAT, DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(_file_handler(log_file, max_bytes, backup_count))

    root.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
