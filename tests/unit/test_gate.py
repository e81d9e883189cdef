"""Tests for the pass/fail gate."""

from __future__ import annotations

from pathlib import Path

import pytest

from visgate.gate import Verdict, evaluate, is_failure
from visgate.image_compare import ComparisonResult


def _result(ratio: float, *, mismatch: bool = False) -> ComparisonResult:
    total = 100
    return ComparisonResult(
        diff_ratio=ratio,
        diff_pixels=int(ratio * total),
        total_pixels=total,
        size_mismatch=mismatch,
        diff_image=Path("x-diff.png"),
        threshold=0.15,
    )


class TestEvaluate:
    def test_below_limit_passes(self) -> None:
        assert evaluate(_result(0.1), 0.2) is Verdict.PASS

    def test_limit_is_inclusive(self) -> None:
        assert evaluate(_result(0.2), 0.2) is Verdict.PASS

    def test_above_limit_regresses(self) -> None:
        assert evaluate(_result(0.21), 0.2) is Verdict.REGRESSION

    def test_size_mismatch(self) -> None:
        assert evaluate(_result(1.0, mismatch=True), 1.0) is Verdict.SIZE_MISMATCH


class TestIsFailure:
    @pytest.mark.parametrize(
        ("verdict", "failed"),
        [
            (Verdict.PASS, False),
            (Verdict.REGRESSION, True),
            (Verdict.SIZE_MISMATCH, True),
            (Verdict.MISSING, True),
            (Verdict.ERROR, True),
        ],
    )
    def test_strict(self, verdict: Verdict, failed: bool) -> None:
        assert is_failure(verdict) is failed

    def test_lenient_size(self) -> None:
        assert is_failure(Verdict.SIZE_MISMATCH, strict_size=False) is False
        assert is_failure(Verdict.REGRESSION, strict_size=False) is True
