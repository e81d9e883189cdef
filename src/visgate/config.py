"""Environment-driven defaults for comparison thresholds."""

from __future__ import annotations

import logging
import os

from visgate.image_compare import DEFAULT_THRESHOLD

log = logging.getLogger(__name__)

DEFAULT_MAX_DIFF_RATIO = 0.20

THRESHOLD_ENV = "VISGATE_THRESHOLD"
MAX_DIFF_RATIO_ENV = "VISGATE_MAX_DIFF_RATIO"


def _unit_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning("ignoring %s=%r: not a number", name, raw)
        return default
    if not 0.0 <= value <= 1.0:
        log.warning("ignoring %s=%r: must be within [0, 1]", name, raw)
        return default
    return value


def threshold() -> float:
    """Per-pixel color threshold, from VISGATE_THRESHOLD or the default."""
    return _unit_float(THRESHOLD_ENV, DEFAULT_THRESHOLD)


def max_diff_ratio() -> float:
    """Largest passing diff ratio, from VISGATE_MAX_DIFF_RATIO or the default."""
    return _unit_float(MAX_DIFF_RATIO_ENV, DEFAULT_MAX_DIFF_RATIO)
