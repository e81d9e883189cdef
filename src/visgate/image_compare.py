"""File-level image comparison: decode, diff, persist the diff artifact."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from visgate.codec import read_png, write_png
from visgate.differ import DiffOptions, diff
from visgate.pixel_buffer import PixelBuffer

log = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.15
DIFF_SUFFIX = "-diff"


@dataclass(frozen=True)
class ComparisonResult:
    """Result of comparing a reference image with a candidate image."""

    diff_ratio: float
    diff_pixels: int
    total_pixels: int
    size_mismatch: bool
    diff_image: Path
    threshold: float
    aa_pixels: int = 0


def diff_artifact_path(candidate: Path) -> Path:
    """Return where the diff image for *candidate* is written.

    ``shots/button.png`` becomes ``shots/button-diff.png``.
    """
    candidate = Path(candidate)
    return candidate.with_name(f"{candidate.stem}{DIFF_SUFFIX}{candidate.suffix}")


def side_by_side(left: PixelBuffer, right: PixelBuffer) -> PixelBuffer:
    """Place *left* and *right* on a white canvas of ``(2 * max_w, max_h)``."""
    max_w = max(left.width, right.width)
    max_h = max(left.height, right.height)
    canvas = np.full((max_h, max_w * 2, 4), 255, dtype=np.uint8)
    canvas[: left.height, : left.width] = left.to_array()
    canvas[: right.height, max_w : max_w + right.width] = right.to_array()
    return PixelBuffer.from_array(canvas)


def compare_images(
    reference: Path,
    candidate: Path,
    threshold: float = DEFAULT_THRESHOLD,
    *,
    include_aa: bool = True,
    diff_output: Path | None = None,
) -> ComparisonResult:
    """Compare two PNG files and write a diff visualization.

    A diff image is always written, to *diff_output* or next to the
    candidate (see :func:`diff_artifact_path`). When the dimensions
    differ no pixel comparison is attempted: the artifact shows both
    images side by side and the ratio is reported as 1.0.

    Args:
        reference: Path to the expected image.
        candidate: Path to the actual image.
        threshold: Per-pixel color threshold within [0, 1].
        include_aa: Count anti-aliased pixels as differences.
        diff_output: Override for the diff artifact location.

    Returns:
        ComparisonResult with comparison details.

    Raises:
        FileNotFoundError: If either path does not exist.
        DecodeError: If either file is not a valid PNG image.
        ValidationError: If the threshold is out of range or an image is empty.
        OSError: If the diff image cannot be written.
    """
    options = DiffOptions(threshold=threshold, include_aa=include_aa)
    ref = read_png(Path(reference))
    cand = read_png(Path(candidate))
    out_path = Path(diff_output) if diff_output is not None else diff_artifact_path(candidate)

    if ref.size != cand.size:
        log.warning(
            "size mismatch: %s %dx%d vs %s %dx%d",
            reference,
            ref.width,
            ref.height,
            candidate,
            cand.width,
            cand.height,
        )
        write_png(out_path, side_by_side(ref, cand))
        total = max(ref.width, cand.width) * max(ref.height, cand.height)
        return ComparisonResult(
            diff_ratio=1.0,
            diff_pixels=total,
            total_pixels=total,
            size_mismatch=True,
            diff_image=out_path,
            threshold=threshold,
        )

    outcome = diff(ref, cand, options)
    write_png(out_path, outcome.image)
    total = ref.pixel_count
    result = ComparisonResult(
        diff_ratio=outcome.diff_pixels / total,
        diff_pixels=outcome.diff_pixels,
        total_pixels=total,
        size_mismatch=False,
        diff_image=out_path,
        threshold=threshold,
        aa_pixels=outcome.aa_pixels,
    )
    log.debug("compared %s with %s: ratio %.6f", reference, candidate, result.diff_ratio)
    return result
