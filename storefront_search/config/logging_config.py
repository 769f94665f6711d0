# storefront_search/config/logging_config.py

"""Run log for storefront_search.

A launch writes ``logs/run_YYYYMMDD_HHMMSS.log`` and attaches it to the
``storefront_search`` logger, so the GraphQL client, search logic and CLI
share one file.  The console handler writes to stderr at WARNING and
above; stdout belongs to the CLI's JSON or table output.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from storefront_search.config.settings import Settings

_PROJECT_LOGGER = "storefront_search"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | "
    "%(message)s"
)
_STDERR_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def file_log_level(name: str | None = None) -> int:
    """Resolve a level name such as ``"info"``; unknown names mean DEBUG."""
    level = getattr(logging, (name or Settings.LOG_LEVEL).upper(), None)
    return level if isinstance(level, int) else logging.DEBUG


def _attached_log_file(logger: logging.Logger) -> Path | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging() -> Path:
    """Attach the run log and stderr handlers, once per process.

    Returns:
        Path of the log file the project logger writes to.  A second call
        returns the file opened by the first.
    """
    project = logging.getLogger(_PROJECT_LOGGER)
    project.setLevel(logging.DEBUG)

    existing = _attached_log_file(project)
    if existing is not None:
        return existing

    Settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    log_file = (
        Settings.LOGS_DIR / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"
    )

    to_file = logging.FileHandler(log_file, encoding="utf-8")
    to_file.setLevel(file_log_level())
    to_file.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))
    project.addHandler(to_file)

    to_stderr = logging.StreamHandler(sys.stderr)
    to_stderr.setLevel(logging.WARNING)
    to_stderr.setFormatter(logging.Formatter(_STDERR_FORMAT))
    project.addHandler(to_stderr)

    project.info("Run log opened at %s", log_file)
    return log_file
