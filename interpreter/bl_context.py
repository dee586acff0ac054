"""
Interpreter context for cross-cutting options.

This module defines the InterpreterContext dataclass which holds options
that affect more than one stage (parsing, evaluation, the REPL and the CLI).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for the interpreter."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages (-v)
    DEBUG = 30      # Detailed diagnostic information (-vvv)


@dataclass
class InterpreterContext:
    """
    Holds cross-cutting interpreter options.

    Attributes:
        log_rich_format:    If True, emit logs in rich format: timestamp and level prefix.
        log_level:          Current logging level.
        prompt:             Prompt printed by the REPL before each line.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING
    prompt: str = ">> "

    @staticmethod
    def default() -> 'InterpreterContext':
        """Create an InterpreterContext with default settings."""
        return InterpreterContext(log_level=LogLevel.WARNING)
