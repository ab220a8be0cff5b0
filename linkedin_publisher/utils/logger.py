import logging
import re
import sys
from typing import List, Optional
from pathlib import Path
from ..config import Settings, get_settings

FALLBACK_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# access_token=..., "access_token": "...", Bearer ...
_TOKEN_PATTERN = re.compile(
    r'(Bearer\s+|access_token["\']?\s*[:=]\s*["\']?|client_secret["\']?\s*[:=]\s*["\']?)'
    r'([A-Za-z0-9\-._~+/]{8})[A-Za-z0-9\-._~+/]*=*'
)


class RedactTokensFilter(logging.Filter):
    """Truncate bearer tokens and client secrets before a record is emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _TOKEN_PATTERN.sub(r'\1\2...', message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _build_handlers(settings: Settings) -> List[logging.Handler]:
    log_dir = Path('logs')
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / settings.LOG_FILE

    handlers = [logging.StreamHandler(sys.stdout), logging.FileHandler(str(log_path))]
    formatter = logging.Formatter(settings.LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a module logger writing to stdout and to logs/<LOG_FILE>.

    Loggers are configured once; later calls with the same name return the
    existing instance. If the log file cannot be opened the logger degrades
    to stdout at DEBUG level.
    """
    logger = logging.getLogger(name or __name__)
    if logger.handlers:
        return logger

    if not any(isinstance(f, RedactTokensFilter) for f in logger.filters):
        logger.addFilter(RedactTokensFilter())

    try:
        settings = get_settings()
        level = getattr(logging, settings.LOG_LEVEL.upper())
        for handler in _build_handlers(settings):
            logger.addHandler(handler)
        logger.setLevel(level)
    except (OSError, ValueError, AttributeError) as e:
        fallback = logging.StreamHandler(sys.stdout)
        fallback.setFormatter(logging.Formatter(FALLBACK_FORMAT))
        logger.addHandler(fallback)
        logger.setLevel(logging.DEBUG)
        logger.error(f"File logging unavailable, using stdout only: {str(e)}")

    return logger
