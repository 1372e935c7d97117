from __future__ import annotations

from typing import Any, Mapping

from equity_options.cli.config import resolve_path
from equity_options.utils.logging_config import setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": False,
}


def add_logging_args(parser) -> None:
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (e.g., INFO, DEBUG).",
    )
    group.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file.",
    )
    group.add_argument(
        "--log-format",
        type=str,
        default=None,
        help="Console log format string.",
    )
    group.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Colour console log levels.",
    )
    group.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Plain console logs.",
    )
    parser.set_defaults(log_color=None)


def collect_logging_overrides(args) -> dict[str, Any]:
    """Map parsed ``--log-*`` flags onto keys of the ``logging`` section."""
    overrides: dict[str, Any] = {}
    if getattr(args, "log_level", None):
        overrides["level"] = args.log_level
    if getattr(args, "log_file", None):
        overrides["file"] = args.log_file
    if getattr(args, "log_format", None):
        overrides["format"] = args.log_format
    if getattr(args, "log_color", None) is not None:
        overrides["color"] = args.log_color
    return overrides


def _normalize_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    merged = dict(DEFAULT_LOGGING)
    for key in DEFAULT_LOGGING:
        if config and config.get(key) is not None:
            merged[key] = config[key]
    return merged


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=resolve_path(log_cfg["file"]),
        colored=bool(log_cfg["color"]),
    )
