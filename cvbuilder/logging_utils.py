"""
Logging helpers for cvbuilder.

Defines the package logger and simple utilities for configuring
console and optional file logging.
"""

from __future__ import annotations

import logging
from typing import List, Optional

LOG = logging.getLogger("cvbuilder")

# Verbosity levels
VERBOSITY_QUIET = 0    # Warnings and errors only (default)
VERBOSITY_NORMAL = 1   # Commit/rejection events with level prefix
VERBOSITY_VERBOSE = 2  # Selection events, stale reads, watcher traffic

def setup_logging(debug: bool, log_file: Optional[str] = None, verbosity: int = VERBOSITY_QUIET) -> None:
    """
    Setup logging with verbosity control.

    Args:
        debug: Forces VERBOSITY_VERBOSE when set
        log_file: Optional log file path
        verbosity: Verbosity level (0=quiet, 1=normal, 2=verbose)
    """
    if debug:
        verbosity = VERBOSITY_VERBOSE

    if verbosity >= VERBOSITY_VERBOSE:
        level = logging.DEBUG
    elif verbosity >= VERBOSITY_NORMAL:
        level = logging.INFO
    else:
        level = logging.WARNING

    if verbosity >= VERBOSITY_NORMAL:
        console_format = logging.Formatter("%(levelname)s: %(message)s")
    else:
        console_format = logging.Formatter("%(message)s")

    # Handlers installed by a host (pytest, an embedding app) are reused
    if logging.root.handlers:
        for handler in logging.root.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)
                handler.setFormatter(console_format)
        logging.root.setLevel(level)
    else:
        handlers: List[logging.Handler] = []
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(console_format)
        handlers.append(console)
        logging.basicConfig(level=level, handlers=handlers, force=True)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # always full detail in file
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logging.root.addHandler(file_handler)

    # docxtpl pulls in jinja2 and python-docx
    logging.getLogger("docxtpl").setLevel(logging.WARNING)
    logging.getLogger("docx").setLevel(logging.WARNING)

def fmt_issues(errors: List[str], warnings: List[str]) -> str:
    """
    Compact error/warning string for one-line summaries.
    """
    parts: List[str] = []
    if errors:
        parts.append("errors: " + ", ".join(errors))
    if warnings:
        parts.append("warnings: " + ", ".join(warnings))
    return " | ".join(parts) if parts else "-"
