# pdfutils/logging_setup.py

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from pdfutils.settings import config_dir

LOGGER_NAME = "pdfutils"


def setup_logging(log_level_str: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure application logging with a rotating file and the console."""
    log_dir = Path(log_dir) if log_dir else config_dir() / "logs"
    log_file = log_dir / "pdfutils.log"

    logger = logging.getLogger(LOGGER_NAME)
    log_level = getattr(logging, str(log_level_str).upper(), logging.INFO)
    logger.setLevel(log_level)

    # Called again when the level changes
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=2 * 1024 * 1024, backupCount=3, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Error setting up file logging: {e}", file=sys.stderr)

    # No console when frozen into a windowed executable
    if not getattr(sys, 'frozen', False):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        console_handler.setLevel(logging.WARNING)
        logger.addHandler(console_handler)

    logger.debug("Logging initialized, log file: %s", log_file)
    return logger
