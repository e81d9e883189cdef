"""Shared options and output helpers for comparison commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from visgate import config
from visgate.image_compare import ComparisonResult

F = TypeVar("F", bound=Callable[..., Any])

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_ERROR = 2


def gate_options(fn: F) -> F:
    """Attach the threshold and gate options shared by comparison commands."""
    options = [
        click.option(
            "--threshold",
            default=None,
            type=click.FloatRange(0.0, 1.0),
            help="Per-pixel color threshold 0-1 (default: $VISGATE_THRESHOLD or 0.15).",
        ),
        click.option(
            "--max-diff-ratio",
            default=None,
            type=click.FloatRange(0.0, 1.0),
            help="Largest passing diff ratio 0-1 (default: $VISGATE_MAX_DIFF_RATIO or 0.20).",
        ),
        click.option(
            "--exclude-aa",
            is_flag=True,
            help="Do not count anti-aliased edge pixels as differences.",
        ),
        click.option(
            "--allow-size-mismatch",
            is_flag=True,
            help="Report size mismatches without failing.",
        ),
        click.option("--json", "use_json", is_flag=True, help="JSON output."),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def resolve_gate(threshold: float | None, max_diff_ratio: float | None) -> tuple[float, float]:
    """Fill unset CLI values from the environment defaults."""
    if threshold is None:
        threshold = config.threshold()
    if max_diff_ratio is None:
        max_diff_ratio = config.max_diff_ratio()
    return threshold, max_diff_ratio


def result_dict(result: ComparisonResult) -> dict[str, Any]:
    return {
        "diff_ratio": result.diff_ratio,
        "diff_pixels": result.diff_pixels,
        "total_pixels": result.total_pixels,
        "aa_pixels": result.aa_pixels,
        "size_mismatch": result.size_mismatch,
        "diff_image": str(result.diff_image),
        "threshold": result.threshold,
    }


def summary_line(result: ComparisonResult) -> str:
    if result.size_mismatch:
        return f"size mismatch (side-by-side: {result.diff_image})"
    return (
        f"diff: {result.diff_pixels}/{result.total_pixels} pixels "
        f"({result.diff_ratio * 100:.2f}%)"
    )
