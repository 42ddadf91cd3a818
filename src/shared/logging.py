"""Logging for the Atelier domains.

Every domain module calls ``configure_logging(<domain>)`` at import time.
The first call builds the shared pipeline:

- stdout, ``logs/atelier.log`` and ``logs/errors.log`` on the root logger
- structlog rendering JSON in production/staging, Rich-formatted console
  output elsewhere

Each call also gives the domain its own ``logs/<domain>.log``, fed by the
loggers under the domain's package (``marketplace.order.placement`` and
so on).
"""

import logging
import logging.handlers
import os
import sys
from contextlib import contextmanager
from pathlib import Path

import structlog

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_NOISY_LIBRARIES = ("urllib3", "asyncio", "protean", "sqlalchemy.engine")

_pipeline_ready = False
_domains_with_files: set[str] = set()


def current_env() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def log_level() -> str:
    """LOG_LEVEL wins; otherwise the level follows the environment."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_env(), "INFO"))


def _file_handler(filename: str, level) -> logging.Handler:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        LOG_DIR / filename, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _renderer():
    if current_env() in ("production", "staging"):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
    )


def _build_pipeline(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        logging.StreamHandler(sys.stdout),
        _file_handler("atelier.log", level),
        _file_handler("errors.log", logging.ERROR),
    ]
    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(domain_name: str, level: str | None = None) -> None:
    """Set up the shared pipeline once and the domain's own log file."""
    global _pipeline_ready
    level = level or log_level()
    if not _pipeline_ready:
        _build_pipeline(level)
        _pipeline_ready = True

    if domain_name not in _domains_with_files:
        logging.getLogger(domain_name).addHandler(_file_handler(f"{domain_name}.log", level))
        _domains_with_files.add(domain_name)


@contextmanager
def request_context(**values):
    """Bind values (request path, acting user) to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(**values):
        yield
