"""Pass/fail decision for a comparison result."""

from __future__ import annotations

from enum import Enum

from visgate.image_compare import ComparisonResult


class Verdict(Enum):
    PASS = "pass"
    REGRESSION = "regression"
    SIZE_MISMATCH = "size-mismatch"
    MISSING = "missing"
    ERROR = "error"


def evaluate(result: ComparisonResult, max_diff_ratio: float) -> Verdict:
    """Classify *result*; a ratio equal to *max_diff_ratio* still passes."""
    if result.size_mismatch:
        return Verdict.SIZE_MISMATCH
    if result.diff_ratio <= max_diff_ratio:
        return Verdict.PASS
    return Verdict.REGRESSION


def is_failure(verdict: Verdict, *, strict_size: bool = True) -> bool:
    """Return True if *verdict* should fail the run.

    With ``strict_size=False`` a size mismatch is only reported.
    """
    if verdict is Verdict.SIZE_MISMATCH:
        return strict_size
    return verdict is not Verdict.PASS
