# common/core_utils.py
# -*- coding: utf-8 -*-
"""
Logging setup for the installer.

Console output is coloured with the Dracula palette and prefixed with a
per-level symbol; file output uses the same layout without colours.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from installer.config import COLORS
from installer.config_models import SYMBOLS_DEFAULT

module_logger = logging.getLogger(__name__)

SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER = (
    "{log_prefix}%(asctime)s - %(levelname)s - %(symbol)s %(message)s"
)
SIMPLE_LOG_FORMAT_NO_PREFIX = "%(asctime)s - %(levelname)s - %(symbol)s %(message)s"

LEVEL_COLORS: Dict[int, str] = {
    logging.DEBUG: "cyan",
    logging.INFO: "purple",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class SymbolFormatter(logging.Formatter):
    """
    A formatter that adds a symbol to each record based on its level and,
    when `use_color` is set, wraps the line in an ANSI colour.

    Records logged with extra={"success": True} use the success symbol and
    green; records with extra={"header": True} are rendered bold cyan.
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        validate=True,
        symbols=None,
        use_color: bool = False,
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT
        self.use_color = use_color

    def format(self, record):
        if getattr(record, "success", False):
            record.symbol = self.symbols.get("success", "✅")
        elif getattr(record, "header", False):
            record.symbol = self.symbols.get("step", "➡️")
        elif record.levelno == logging.DEBUG:
            record.symbol = self.symbols.get("debug", "🐛")
        elif record.levelno == logging.INFO:
            record.symbol = self.symbols.get("info", "ℹ️")
        elif record.levelno == logging.WARNING:
            record.symbol = self.symbols.get("warning", "⚠️")
        elif record.levelno == logging.ERROR:
            record.symbol = self.symbols.get("error", "❌")
        elif record.levelno == logging.CRITICAL:
            record.symbol = self.symbols.get("critical", "🔥")
        else:
            record.symbol = ""

        formatted = super().format(record)
        if not self.use_color:
            return formatted

        if getattr(record, "success", False):
            color = COLORS["green"]
        elif getattr(record, "header", False):
            color = COLORS["bold"] + COLORS["cyan"]
        else:
            color = COLORS[LEVEL_COLORS.get(record.levelno, "purple")]
        return f"{color}{formatted}{COLORS['reset']}"


def log_header(title: str, current_logger: Optional[logging.Logger] = None) -> None:
    """Log a section header ("==> title")."""
    (current_logger or module_logger).info(
        f"==> {title}", extra={"header": True}
    )


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
    log_prefix: Optional[str] = None,
    use_color: Optional[bool] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures the root logger.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO.
    log_file: Optional[str]
        Path of a log file to append to, if any.
    log_to_console: bool
        Whether to log to stdout. Defaults to True.
    log_format_str: Optional[str]
        A custom format string; "{log_prefix}" is substituted if present.
    log_prefix: Optional[str]
        An optional prefix for every line.
    use_color: Optional[bool]
        Colour console output. Defaults to True when stdout is a terminal.
    symbols: Optional[Dict[str, str]]
        Per-level symbols; defaults to the built-in set.
    """
    handlers: List[logging.Handler] = []
    file_handler: Optional[logging.Handler] = None
    console_handler: Optional[logging.Handler] = None
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file_path, mode="a")
            handlers.append(file_handler)
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        handlers.append(console_handler)

    if not handlers:  # pragma: no cover
        console_handler = logging.StreamHandler(sys.stdout)
        handlers.append(console_handler)
        if log_level > logging.INFO:
            log_level = logging.INFO

    actual_prefix = (
        (log_prefix.strip() + " ")
        if log_prefix and log_prefix.strip()
        else ""
    )

    if log_format_str:
        if "{log_prefix}" in log_format_str:
            final_format_str = log_format_str.format(log_prefix=actual_prefix)
        else:
            final_format_str = actual_prefix + log_format_str
    elif actual_prefix:
        final_format_str = SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER.format(
            log_prefix=actual_prefix
        )
    else:
        final_format_str = SIMPLE_LOG_FORMAT_NO_PREFIX

    if use_color is None:
        use_color = sys.stdout.isatty()

    for handler in handlers:
        handler.setFormatter(
            SymbolFormatter(
                fmt=final_format_str,
                datefmt="%Y-%m-%d %H:%M:%S",
                symbols=symbols,
                use_color=use_color and handler is console_handler,
            )
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    for handler in handlers:
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. Format: '{final_format_str}'"
    )
