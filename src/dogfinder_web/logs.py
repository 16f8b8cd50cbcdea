from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dogfinder_web.config import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger: console output plus an optional rotating file.

    Safe to call more than once; handlers are only added the first time.
    """

    root = logging.getLogger()
    root.setLevel(config.level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    if not config.file:
        return

    # Avoid adding duplicate handlers if reconfigured
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    log_path = Path(config.file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.max_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
