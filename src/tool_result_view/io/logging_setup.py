"""Logging bootstrap for the tool-result-view command.

Diagnostics go to stderr so they never mix with the rendered result on
stdout. A log file is written only when TOOL_RESULT_VIEW_LOG_FILE names
one; runs append to it and it rotates at 1 MB.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "tool_result_view"
LEVEL_ENV = "TOOL_RESULT_VIEW_LOG_LEVEL"
FILE_ENV = "TOOL_RESULT_VIEW_LOG_FILE"


@dataclass(frozen=True)
class LoggingRuntime:
    level: int
    file_path: str | None = None

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


_RUNTIME: LoggingRuntime | None = None


def level_from_env(default: int = logging.WARNING) -> int:
    """Level named by TOOL_RESULT_VIEW_LOG_LEVEL; unknown names give default."""
    name = os.environ.get(LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def configure(level: int | None = None) -> LoggingRuntime:
    """Attach handlers to the package logger once per process.

    An explicit level (the CLI's --verbose) wins over the environment.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    resolved = level if level is not None else level_from_env()
    file_path = os.environ.get(FILE_ENV) or None

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False
    logger.handlers.clear()

    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter("tool-result-view: %(levelname)s %(message)s"))
    logger.addHandler(stream)

    if file_path is not None:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(file_path, maxBytes=1024 * 1024, backupCount=2, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S")
        )
        logger.addHandler(file_handler)

    _RUNTIME = LoggingRuntime(level=resolved, file_path=file_path)
    return _RUNTIME
