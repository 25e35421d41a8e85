"""
Structured logging helpers for clustering runs.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import numpy as np


def _json_default(value: Any) -> Any:
    """Make numpy scalars and arrays JSON-friendly; fall back to ``str``."""
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    return str(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.

    Skips serialization entirely when ``level`` is disabled for ``logger``.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=_json_default, sort_keys=True))
