"""Levelled, coloured console logging on top of the printf-style formatter.

Each message is prefixed with ``[LEVEL][file:line]``. The file and line are
those of the code that called the logger. A message is written only when the
logger's level is at least the message's level.
"""

from __future__ import annotations

import argparse
import enum
import sys
from typing import Any, TextIO

from tinyfmt.printf import printf

__all__ = ["LogLevel", "TinyLogger", "parse_level", "main"]

_RESET = "\033[0m"


class LogLevel(enum.IntEnum):
    """Verbosity levels, from silent to everything."""

    NONE = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    ALL = 5


_LEVEL_NAMES = {
    "none": LogLevel.NONE,
    "error": LogLevel.ERROR,
    "warn": LogLevel.WARN,
    "info": LogLevel.INFO,
    "debug": LogLevel.DEBUG,
    "all": LogLevel.ALL,
}


def parse_level(name: str) -> LogLevel:
    """Return the level called ``name`` (none, error, warn, info, debug, all)."""
    try:
        return _LEVEL_NAMES[name.strip().lower()]
    except KeyError:
        choices = ", ".join(_LEVEL_NAMES)
        raise ValueError(f"unknown log level {name!r}; expected one of: {choices}") from None


class TinyLogger:
    """Writes levelled messages formatted with printf-style rules."""

    def __init__(
        self, level: LogLevel | int | str = LogLevel.INFO, stream: TextIO | None = None
    ) -> None:
        self.level = parse_level(level) if isinstance(level, str) else LogLevel(level)
        self.stream = stream

    def error(self, fmt: str, *args: Any) -> int:
        """Log an error in red; return the number of characters written."""
        return self._emit(LogLevel.ERROR, "ERROR", "\033[31m", _RESET, fmt, args)

    def warn(self, fmt: str, *args: Any) -> int:
        """Log a warning in yellow; return the number of characters written."""
        return self._emit(LogLevel.WARN, "WARN ", "\033[33m", _RESET, fmt, args)

    def info(self, fmt: str, *args: Any) -> int:
        """Log information in green; return the number of characters written."""
        return self._emit(LogLevel.INFO, "INFO ", "\033[32m", _RESET, fmt, args)

    def debug(self, fmt: str, *args: Any) -> int:
        """Log a debug message in blue; return the number of characters written."""
        return self._emit(LogLevel.DEBUG, "DEBUG", "\033[34m", _RESET, fmt, args)

    def log(self, fmt: str, *args: Any) -> int:
        """Log an uncoloured message, shown unless logging is off."""
        return self._emit(LogLevel.ERROR, "LOG  ", "", "", fmt, args)

    def _emit(
        self,
        level: LogLevel,
        name: str,
        color_start: str,
        color_end: str,
        fmt: str,
        args: tuple[Any, ...],
    ) -> int:
        if self.level < level:
            return 0
        caller = sys._getframe(2)
        return printf(
            "[%s][%s:%d] " + color_start + fmt + color_end,
            name,
            caller.f_code.co_filename,
            caller.f_lineno,
            *args,
            stream=self.stream,
        )


def main(argv: list[str] | None = None) -> int:
    """Print one message at every level, then the shutdown notice."""
    parser = argparse.ArgumentParser(
        prog="tinyfmt", description="Demonstrate levelled log output."
    )
    parser.add_argument(
        "--log",
        default="info",
        choices=list(_LEVEL_NAMES),
        help="lowest level of message to show (default: info)",
    )
    parser.add_argument(
        "--vm-version", default="null", help="version string shown in the greeting"
    )
    options = parser.parse_args(argv)

    logger = TinyLogger(parse_level(options.log))
    logger.error("This is an ERROR message - always shown unless LOG=none\n")
    logger.warn("This is a WARN message - shown when LOG=warn,info,debug,all\n")
    logger.info(
        "Hello, ARM Tiny VM [%s]! - shown when LOG=info,debug,all\n", options.vm_version
    )
    logger.debug("This is a DEBUG message - only shown when LOG=debug,all\n")
    logger.log("This is a generic LOG message\n")
    logger.info("LOG control system test completed!\n")
    logger.warn("Shutting down system...\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())