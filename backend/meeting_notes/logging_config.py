import logging
import os
import sys
from logging.handlers import RotatingFileHandler

# Define log directory and file
LOG_DIR = os.getenv("LOG_DIR") or "logs"
LOG_FILE = os.path.join(LOG_DIR, "meeting_notes.log")


def setup_logging(level: str | None = None) -> None:
    """
    Configures logging for the application.
    Outputs to console and a rotating file with a detailed format.

    Safe to call more than once: handlers are only added when missing.
    """
    os.makedirs(LOG_DIR, exist_ok=True)

    log_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel((level or os.getenv("LOG_LEVEL") or "INFO").upper())

    has_file_handler = any(isinstance(h, RotatingFileHandler) for h in root_logger.handlers)
    if not has_file_handler:
        file_handler = RotatingFileHandler(LOG_FILE, maxBytes=1024 * 1024 * 5, backupCount=2)  # 5MB per file, 2 backups
        file_handler.setFormatter(log_formatter)
        root_logger.addHandler(file_handler)

    has_console_handler = any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout
        for h in root_logger.handlers
    )
    if not has_console_handler:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(log_formatter)
        root_logger.addHandler(console_handler)

    # Third-party loggers
    logging.getLogger("meeting_notes").setLevel(root_logger.level)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info("Logging configured successfully (console and file).")
