"""Logging set-up for jirafield.

Step output goes to stderr so it lands in the build log next to the other
steps. A copy can be kept in a file for later inspection.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path

DEFAULT_LOG_LEVEL = "INFO"

# Build logs carry their own timestamps
CONSOLE_FORMAT = "%(levelname)-7s %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

# Category prefix for build step output
STEP_PREFIX = "[Jira][ArrayFieldAdd]"


def setup_logging(
    level: str | None = None,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Configure the jirafield logger for one step invocation.

    Args:
        level: Log level name. Defaults to JIRAFIELD_LOG_LEVEL, else INFO.
        log_file: Also append records to this file. Defaults to
                  JIRAFIELD_LOG_FILE; no file is written when neither is set.

    Returns:
        The root jirafield logger.
    """
    level = level or os.environ.get("JIRAFIELD_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)
    log_file = log_file or os.environ.get("JIRAFIELD_LOG_FILE") or None

    logger = logging.getLogger("jirafield")
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def sanitize_for_log(text: str) -> str:
    """Remove credentials from text before it is logged.

    Remote error bodies and request descriptions can echo back the
    Authorization header or token query parameters.

    Args:
        text: Text that may contain sensitive data.

    Returns:
        Sanitized text safe for logging.
    """
    patterns = [
        (r"Basic [A-Za-z0-9+/=]+", "Basic [REDACTED]"),
        (r"Bearer [a-zA-Z0-9._-]+", "Bearer [REDACTED]"),
        (r"ATATT[a-zA-Z0-9_=-]+", "[JIRA_TOKEN]"),  # Atlassian API token
        (r"token=[a-zA-Z0-9._-]+", "token=[REDACTED]"),
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result
