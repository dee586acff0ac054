"""
Logging utilities for the interpreter.

Messages go to stderr, filtered by the InterpreterContext log level.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from bl_context import InterpreterContext, LogLevel

_LEVEL_TAGS = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARNING: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
}


def log(context: Optional[InterpreterContext], log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context admits its level.

    Args:
        context:    The interpreter context; None falls back to the defaults.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        context = InterpreterContext.default()
    if context.log_level < log_level:
        return
    prefix = ""
    if context.log_rich_format and log_level in _LEVEL_TAGS:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = f"{timestamp} [{_LEVEL_TAGS[log_level]}] "
    print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[InterpreterContext], message: str) -> None:
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[InterpreterContext], message: str) -> None:
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[InterpreterContext], message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[InterpreterContext], message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[InterpreterContext], stage: str, detail: Optional[str] = None) -> None:
    """
    Log the start of a pipeline stage.

    Args:
        context: The interpreter context containing logging flags.
        stage: The name of the stage (e.g., "Lexing", "Parsing").
        detail: Optional extra text, e.g. where the source came from.
    """
    if detail:
        log(context, LogLevel.INFO, f"{stage} {detail}")
    else:
        log(context, LogLevel.INFO, f"{stage}...")
