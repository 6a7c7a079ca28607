"""Run the API with uvicorn: ``python -m meeting_notes``."""

import logging
import sys

import uvicorn

from meeting_notes.config import ConfigurationError, load_settings
from meeting_notes.logging_config import setup_logging


def main() -> None:
    setup_logging()
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logging.getLogger(__name__).critical("%s Exiting.", exc)
        sys.exit(1)

    uvicorn.run("meeting_notes.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
