"""Console logging utilities for the CHIP-8 emulator.

Provides a small levelled logger with optional colours and timestamps, used
by the driver loop and the frontend to report ROM loading, unknown opcodes,
fatal errors and instruction traces.
"""

import time
import sys
from typing import Dict, Optional, TextIO

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


def _check_level(log_level: str) -> str:
    level = log_level.upper()
    if level not in LEVELS:
        raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
    return level


class ConsoleLogger:
    """Levelled console logger for emulator runs.

    Messages go to ``stream``, or to whatever ``sys.stdout`` is at the time of
    the call when no stream is given.
    """

    def __init__(
        self,
        name: str = "Chippy",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.name = name
        self.log_level = _check_level(log_level)
        self.stream = stream
        target = stream or sys.stdout
        self.use_colors = use_colors and hasattr(target, "isatty") and target.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def set_level(self, log_level: str):
        self.log_level = _check_level(log_level)

    def is_enabled_for(self, level: str) -> bool:
        """Whether a message at ``level`` would be printed."""
        return LEVELS.index(level.upper()) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{_COLORS[level]}{level_str}{_RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        level = _check_level(level)
        if self.is_enabled_for(level):
            print(self._format_message(level, message), file=self.stream or sys.stdout, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "Chippy", log_level: Optional[str] = None, **kwargs) -> ConsoleLogger:
    """Return the shared logger for ``name``, creating it on first use.

    A ``log_level`` given for an existing logger replaces its current level.
    """
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(name, log_level=log_level or "INFO", **kwargs)
    elif log_level is not None:
        _loggers[name].set_level(log_level)
    return _loggers[name]
