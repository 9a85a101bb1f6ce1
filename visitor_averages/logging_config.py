import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES = 10_000_000  # 10MB
LOG_BACKUPS = 5
CONSOLE_HANDLER_NAME = "visitor-averages-console"


def _rotating_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def _prepare_log_dir() -> Optional[Path]:
    """Create LOG_DIR, returning None when the job cannot write there"""
    log_dir = Path(os.getenv("LOG_DIR", "/data/logs"))
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError as e:
        logging.getLogger(__name__).warning(
            f"Cannot use log directory {log_dir}, logging to console only: {e}"
        )
        return None
    return log_dir


def setup_logging(app_name: str = "visitor-averages") -> None:
    """Send job logs to the console and to rotating files under LOG_DIR.

    A run log and an ERROR-only log are kept per app name. When LOG_DIR
    cannot be created only the console handler is installed. Calling this
    again does not add handlers twice.

    Args:
        app_name: Name to use for log files

    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    if not any(h.get_name() == CONSOLE_HANDLER_NAME for h in root_logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        root_logger.addHandler(console_handler)

    log_dir = _prepare_log_dir()
    if log_dir is None:
        return

    log_file = os.path.abspath(log_dir / f"{app_name}.log")
    if any(getattr(h, "baseFilename", None) == log_file for h in root_logger.handlers):
        return

    root_logger.addHandler(_rotating_handler(log_dir / f"{app_name}.log", logging.INFO))
    root_logger.addHandler(_rotating_handler(log_dir / f"{app_name}-error.log", logging.ERROR))
