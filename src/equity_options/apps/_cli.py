"""Shared helpers for app entrypoints."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np


def add_print_config_arg(parser) -> None:
    """Add a `--print-config` flag to a parser."""
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print merged config (JSON) and exit.",
    )


def to_jsonable(obj: Any) -> Any:
    """Convert paths, numpy scalars, mappings and sequences for `json.dumps`."""
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [to_jsonable(v) for v in obj]
    return obj


def print_json(payload: Mapping[str, Any]) -> None:
    """Pretty-print a mapping as deterministic JSON."""
    print(json.dumps(to_jsonable(payload), indent=2, sort_keys=True))
