from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from storefront.infrastructure.config import Settings

LOG_FILE_NAME = "storefront.log"


def setup_logging(settings: Settings) -> Path:
    """Configure rotating file logging under DATA_ROOT/logs/storefront.log"""
    log_dir = Path(settings.DATA_ROOT).expanduser() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = (log_dir / LOG_FILE_NAME).resolve()

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # avoid duplicate handlers when the CLI group is invoked more than once
    for existing in root.handlers:
        if getattr(existing, "baseFilename", "") == str(log_path):
            return log_path

    handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    handler.setLevel(level)
    root.addHandler(handler)

    return log_path
