from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default

LOGGER_NAME = "firstboot_installer"
LINE_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure installer logging.

    Every record goes to the log file (opened for append, never truncated)
    and, unless disabled, to the console, one line per event:

        [YYYY-MM-DD HH:MM:SS] <message>

    Notes:
    - If the requested path cannot be opened we fall back to a file in the
      current working directory, and log both paths so operators can find it.
    - Calling again with the same path is a no-op. Calling with a different
      path replaces the handlers installed by the previous call.

    Returns the actual file path being used, or None when no file could be
    opened and records only reach the console.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if getattr(logger, "_firstboot_log_requested", None) == log_path:
        return getattr(logger, "_firstboot_log_path", log_path)

    for h in list(getattr(logger, "_firstboot_handlers", [])):
        logger.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=LINE_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = []

    chosen_path: Optional[str] = None
    for candidate in (log_path, str(Path.cwd() / PATHS.fallback_log_name)):
        try:
            Path(os.path.dirname(candidate) or ".").mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(candidate, mode="a", encoding="utf-8")
        except OSError:
            continue
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)
        chosen_path = candidate
        break

    # Without any writable file the console is the only record left.
    if also_console or chosen_path is None:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_firstboot_handlers", handlers)
    setattr(logger, "_firstboot_log_requested", log_path)
    setattr(logger, "_firstboot_log_path", chosen_path)

    if chosen_path is None:
        logger.warning("No writable log file (tried %s and the working directory), logging to console only", log_path)
    elif chosen_path != log_path:
        logger.warning("Log path %s not writable, logging to %s instead", log_path, chosen_path)
    return chosen_path


def close_logging() -> None:
    """Flush and detach the handlers installed by configure_logging()."""

    logger = logging.getLogger(LOGGER_NAME)
    for h in list(getattr(logger, "_firstboot_handlers", [])):
        logger.removeHandler(h)
        h.close()
    setattr(logger, "_firstboot_handlers", [])
    setattr(logger, "_firstboot_log_requested", None)
    setattr(logger, "_firstboot_log_path", None)
