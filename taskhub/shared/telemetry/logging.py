"""Logging configuration for the application.

Audit-log write failures are emitted under AUDIT_LOGGER_NAME so operators
can route them separately from business-rule failures.
"""

import logging
import sys

from taskhub.core.config import get_settings

AUDIT_LOGGER_NAME = "taskhub.audit"


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. Output goes
    to stdout. SQLAlchemy engine logging stays at WARNING unless
    database_echo is on.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    # Audit failures are always visible, even when the root level is raised.
    logging.getLogger(AUDIT_LOGGER_NAME).setLevel(min(log_level, logging.ERROR))


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
