"""Logging setup for the pricing command line tools.

Only entrypoints configure logging, through `setup_logging`; library modules
just create ``logging.getLogger(__name__)`` and the pricing core never logs.

Console records carry ``%(shortname)s``, the last dotted part of the logger
name, so ``equity_options.apps.price_option`` prints as ``price_option``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# ANSI escape per level; file output stays plain.
_ANSI_RESET = "\033[0m"
_ANSI_BY_LEVEL: dict[int, str] = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def _add_shortname(record: logging.LogRecord) -> bool:
    record.shortname = record.name.rpartition(".")[2]
    return True


class _AnsiLevelFormatter(logging.Formatter):
    def formatMessage(self, record: logging.LogRecord) -> str:
        ansi = _ANSI_BY_LEVEL.get(record.levelno)
        if ansi is None:
            return super().formatMessage(record)
        # Colour a copy so other handlers still see the plain level name.
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{ansi}{record.levelname}{_ANSI_RESET}"
        return super().formatMessage(tinted)


def coerce_level(level: int | str) -> int:
    """Turn ``"info"``, ``"20"`` or ``20`` into a logging level int.

    Raises ``ValueError`` for blank or unknown names.
    """
    if isinstance(level, int):
        return level

    name = str(level).strip().upper()
    if name.isdigit():
        return int(name)
    known = logging.getLevelNamesMapping()
    if name not in known:
        raise ValueError(f"Unknown logging level: {level!r}")
    return known[name]


def _console_handler(fmt: str, datefmt: str, colored: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.addFilter(_add_shortname)
    formatter_cls = _AnsiLevelFormatter if colored else logging.Formatter
    handler.setFormatter(formatter_cls(fmt=fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str | Path, fmt: str, datefmt: str) -> logging.Handler:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    return handler


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = DEFAULT_FORMAT,
    fmt_file: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
) -> None:
    """Route all records to the console and, if given, to ``log_file``.

    Calling it again replaces the handlers installed by a previous call.
    ``module_levels`` sets levels on individual loggers, e.g.
    ``{"equity_options.market": "DEBUG"}``.
    """
    root_level = coerce_level(level)
    overrides = {
        name: coerce_level(lvl) for name, lvl in (module_levels or {}).items()
    }

    handlers = [_console_handler(fmt_console, datefmt, colored)]
    if log_file is not None:
        handlers.append(_file_handler(log_file, fmt_file, datefmt))
    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    for name, lvl in overrides.items():
        logging.getLogger(name).setLevel(lvl)
