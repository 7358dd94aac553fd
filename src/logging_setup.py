"""Logging configuration for the terminal front-end."""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional, Union

APP_LOGGERS = ('cli', 'config', 'main', 'models', 'registry', 'table', 'theme', 'user')


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the redrawn screen readable: our own loggers pass, others only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        root_name = record.name.split('.', 1)[0]
        if root_name in APP_LOGGERS:
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    file_level: int = logging.DEBUG,
) -> None:
    """Install a stderr handler and, if ``log_file`` is given, a file handler.

    Call this once, before the first log call. Handlers installed by an
    earlier call are removed first.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(min(level, file_level) if log_file else level)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
