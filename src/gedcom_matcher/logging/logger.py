"""
Logging setup for gedcom-matcher.

Every diagnostic of a run (pass headers, found / NOT FOUND / MULTIPLE lines,
the duplicate summary) goes through loggers obtained here:

* ``logs/gedcom_matcher.log`` receives everything,
* ``logs/<module>.log`` receives one module's records,
* the console handler writes to standard error, because standard output
  carries the merged GEDCOM.

Directory, file name, level and rotation come from the ``logging`` section of
``config/gedcom_matcher.yml``.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

from gedcom_matcher.config import get_config

BASE_LOGGER_NAME = "gedcom_matcher"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROTATE_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5


@dataclass
class _LogSettings:
    level: int = logging.INFO
    log_dir: Path = Path("logs")
    master_file: str = "gedcom_matcher.log"
    rotate: bool = False
    loggers: Dict[str, Logger] = field(default_factory=dict)


_settings: Optional[_LogSettings] = None


def _load_settings() -> _LogSettings:
    cfg = get_config()
    section = cfg.logging

    level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)
    if cfg.debug:
        level = logging.DEBUG

    log_dir = Path(section.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = cfg.base_dir / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    return _LogSettings(
        level=level,
        log_dir=log_dir,
        master_file=section.get("file", "gedcom_matcher.log"),
        rotate=bool(section.get("rotate", False)),
    )


def _file_handler(settings: _LogSettings, filename: str) -> logging.Handler:
    path = settings.log_dir / filename
    if settings.rotate:
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=ROTATE_BYTES, backupCount=ROTATE_BACKUPS, encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(settings.level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _setup() -> _LogSettings:
    """Attach the master file and console handlers to the base logger, once."""
    global _settings
    if _settings is not None:
        return _settings

    settings = _load_settings()
    base = logging.getLogger(BASE_LOGGER_NAME)
    base.setLevel(settings.level)
    base.propagate = False
    base.addHandler(_file_handler(settings, settings.master_file))

    console = StreamHandler(sys.stderr)
    console.setLevel(settings.level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    base.addHandler(console)

    settings.loggers[BASE_LOGGER_NAME] = base
    _settings = settings
    return settings


def get_logger(name: str | None = None) -> Logger:
    """
    Logger for ``name``, placed under the ``gedcom_matcher`` hierarchy.

    Module loggers propagate to the base logger (master file and console) and
    get their own ``logs/<name>.log`` file.
    """
    settings = _setup()
    logger_name = name or BASE_LOGGER_NAME
    if logger_name != BASE_LOGGER_NAME and not logger_name.startswith(BASE_LOGGER_NAME + "."):
        logger_name = f"{BASE_LOGGER_NAME}.{logger_name}"

    logger = settings.loggers.get(logger_name)
    if logger is not None:
        return logger

    logger = logging.getLogger(logger_name)
    logger.setLevel(settings.level)
    logger.propagate = True
    logger.addHandler(_file_handler(settings, f"{logger_name.replace('.', '_')}.log"))

    settings.loggers[logger_name] = logger
    return logger


def set_debug(enabled: bool) -> None:
    """Switch every logger and handler created so far to DEBUG, or back to INFO."""
    settings = _setup()
    settings.level = logging.DEBUG if enabled else logging.INFO
    for logger in settings.loggers.values():
        logger.setLevel(settings.level)
        for handler in logger.handlers:
            handler.setLevel(settings.level)
