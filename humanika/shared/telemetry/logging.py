"""Logging configuration: stdout handler, level from settings, request id on every record."""

import logging
import sys

from humanika.core.config import get_settings
from humanika.shared.context import get_request_context

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    """Attach the current request id (or '-') as record.request_id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_context().request_id or "-"
        return True


def setup_logging() -> None:
    """Configure root logging once per process.

    DEBUG when settings.debug, otherwise settings.log_level. The SQLAlchemy
    engine logger stays at WARNING unless database_echo is on.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format=LOG_FORMAT,
        handlers=[handler],
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; call with __name__."""
    return logging.getLogger(name)
