"""
Structured logging for the explanation grid.

Provides configurable log levels (silent, normal, verbose, debug)
with consistent formatting for click handling, reported conditions,
and grid statistics.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Dict, TextIO


class LogLevel(Enum):
    """
    Logging levels for the grid engine.

    SILENT:  No output at all.
    NORMAL:  Warnings only.
    VERBOSE: Click progress and statistics.
    DEBUG:   Detailed per-node traversal output.
    """

    SILENT = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


class GridLogger:
    """
    Structured logger for the explanation grid engine.

    Provides consistent formatting for debug information, warnings,
    click outcomes and statistics. Output is filtered by the
    configured log level.

    Attributes:
        level: The minimum log level to display.
        stream: The output stream (defaults to stdout).
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.NORMAL,
        stream: TextIO = sys.stdout,
    ) -> None:
        """
        Initialize logger with level and output stream.

        Args:
            level: Minimum log level to display.
            stream: Output stream (default: sys.stdout).
        """
        self.level: LogLevel = level
        self.stream: TextIO = stream

    def debug(self, message: str, **kwargs: Any) -> None:
        """
        Log a debug message (only shown at DEBUG level).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.level.value >= LogLevel.DEBUG.value:
            self._write(f"[DEBUG] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log an info message (shown at VERBOSE and DEBUG levels).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write(f"[INFO] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def warning(self, message: str, **kwargs: Any) -> None:
        """
        Log a warning (shown at NORMAL level and above).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.level.value >= LogLevel.NORMAL.value:
            self._write(f"[WARN] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def condition(self, condition: Exception) -> None:
        """Log a recoverable condition reported by a traversal."""
        self.warning(f"{type(condition).__name__}: {condition}")

    def click_processed(self, tp: int, updated: int, conditions: int) -> None:
        """
        Log the outcome of a root-cell click (shown at VERBOSE level).

        Args:
            tp: Time point of the clicked row.
            updated: Number of cells written by the batch.
            conditions: Number of recoverable conditions reported.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write(
                f"[CLICK] tp={tp}: {updated} cell(s) updated, "
                f"{conditions} condition(s)"
            )

    def statistics(self, stats: Dict[str, Any]) -> None:
        """
        Log grid statistics (shown at VERBOSE level and above).

        Args:
            stats: Dictionary of statistic names to values.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write("=== Statistics ===")
            for key, value in stats.items():
                label = key.replace("_", " ").title()
                self._write(f"  {label}: {value}")

    def _write(self, message: str) -> None:
        """Write a line to the output stream."""
        self.stream.write(message + "\n")
