"""Environment-variable settings shared by the API and the command line tools."""

from __future__ import annotations

import logging
import os
from typing import TypeVar

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T", int, float)


def env_value(name: str, default: _T) -> _T:
    """Read an environment variable, converting to the same type as *default*."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return type(default)(raw)
    except (TypeError, ValueError):
        _LOGGER.warning("Unsupported %s=%s, fallback to %s", name, raw, default)
        return default
