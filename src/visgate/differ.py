"""Per-pixel perceptual image diff.

The comparison itself is delegated to pixelmatch: pixels are compared
by their distance in YIQ space after blending translucent pixels
against white, and differences caused by anti-aliased edges can be
recognized from each pixel's 3x3 neighborhood and left out of the
count.

On top of the library this module pins down both threshold ends. At 0
every pair that is not bit identical counts, including translucent
pixels whose blended colors coincide. At 1 nothing counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from pixelmatch import pixelmatch

from visgate.errors import ValidationError
from visgate.pixel_buffer import CHANNELS, PixelBuffer

log = logging.getLogger(__name__)

Color = tuple[int, int, int]

_Y_WEIGHTS = np.array([0.29889531, 0.58662247, 0.11448223])


@dataclass(frozen=True)
class DiffOptions:
    """Tuning knobs for :func:`diff`.

    ``threshold`` is the fraction of the maximum YIQ distance below which
    two pixels count as equal. With ``include_aa`` False, pixels detected
    as anti-aliasing are painted ``aa_color`` and not counted.
    ``diff_color_alt`` marks differences where the candidate is darker.
    """

    threshold: float = 0.1
    include_aa: bool = True
    alpha: float = 0.1
    aa_color: Color = (255, 255, 0)
    diff_color: Color = (255, 0, 0)
    diff_color_alt: Color | None = None
    diff_mask: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.threshold <= 1.0:
            raise ValidationError(f"threshold must be within [0, 1], got {self.threshold}")
        if not 0.0 <= self.alpha <= 1.0:
            raise ValidationError(f"alpha must be within [0, 1], got {self.alpha}")


@dataclass(frozen=True)
class DiffOutcome:
    """Pixel counts and visualization produced by :func:`diff`."""

    diff_pixels: int
    aa_pixels: int
    image: PixelBuffer


def _blended(arr: np.ndarray) -> np.ndarray:
    """RGB of *arr* composited over white, as float64."""
    f = arr.astype(np.float64)
    return 255.0 + (f[..., :3] - 255.0) * (f[..., 3:] / 255.0)


def _run(
    a: bytes,
    b: bytes,
    width: int,
    height: int,
    out: bytearray | None,
    opts: DiffOptions,
    include_aa: bool,
) -> int:
    return pixelmatch(
        a,
        b,
        width,
        height,
        out,  # type: ignore[arg-type]
        threshold=opts.threshold,
        includeAA=include_aa,
        alpha=opts.alpha,
        aa_color=opts.aa_color,
        diff_color=opts.diff_color,
        diff_mask=opts.diff_mask,
    )


def diff(
    a: PixelBuffer,
    b: PixelBuffer,
    options: DiffOptions | None = None,
) -> DiffOutcome:
    """Compare two equally sized buffers pixel by pixel.

    Args:
        a: Reference buffer.
        b: Candidate buffer.
        options: Threshold, anti-aliasing handling and output colors.

    Returns:
        DiffOutcome with the count of differing pixels, the count of
        pixels classified as anti-aliasing, and a visualization buffer.

    Raises:
        ValidationError: If the buffers differ in size.
    """
    opts = options or DiffOptions()
    if a.size != b.size:
        raise ValidationError(f"size mismatch: {a.size} vs {b.size}")

    w, h = a.size
    out = bytearray(len(a.data))
    # nothing exceeds the largest threshold, compare the reference with itself
    candidate = a.data if opts.threshold >= 1.0 else b.data
    diff_pixels = _run(a.data, candidate, w, h, out, opts, opts.include_aa)

    aa_pixels = 0
    if not opts.include_aa and diff_pixels < a.pixel_count and candidate != a.data:
        aa_pixels = _run(a.data, candidate, w, h, None, opts, True) - diff_pixels

    arr = np.frombuffer(out, dtype=np.uint8).reshape(h, w, CHANNELS)
    if candidate != a.data:
        arr_a = a.to_array()
        arr_b = b.to_array()
        identical = np.all(arr_a == arr_b, axis=2)
        blend_a = _blended(arr_a)
        blend_b = _blended(arr_b)

        if opts.threshold == 0.0:
            hidden = ~identical & np.all(blend_a == blend_b, axis=2)
            arr[hidden] = (*opts.diff_color, 255)
            diff_pixels += int(np.count_nonzero(hidden))

        if opts.diff_color_alt is not None:
            painted = ~identical & np.all(arr == (*opts.diff_color, 255), axis=2)
            darker = painted & (blend_b @ _Y_WEIGHTS < blend_a @ _Y_WEIGHTS)
            arr[darker] = (*opts.diff_color_alt, 255)

    log.debug(
        "diff %dx%d: %d differing, %d anti-aliased (threshold=%s)",
        w,
        h,
        diff_pixels,
        aa_pixels,
        opts.threshold,
    )
    return DiffOutcome(
        diff_pixels=diff_pixels, aa_pixels=aa_pixels, image=PixelBuffer.from_array(arr)
    )


def diff_arrays(
    img1: bytes | bytearray | memoryview,
    img2: bytes | bytearray | memoryview,
    output: bytearray | memoryview | np.ndarray | None,
    width: int,
    height: int,
    options: DiffOptions | None = None,
) -> int:
    """Raw-buffer form of :func:`diff`.

    Writes the visualization into *output* in place when given and
    returns the number of differing pixels.
    """
    a = PixelBuffer(width=width, height=height, data=bytes(img1))
    b = PixelBuffer(width=width, height=height, data=bytes(img2))
    expected = width * height * CHANNELS
    dst: np.ndarray | None
    if output is None:
        dst = None
    elif isinstance(output, np.ndarray):
        dst = output
    else:
        dst = np.frombuffer(output, dtype=np.uint8)
    if dst is not None and dst.size != expected:
        raise ValidationError(f"output buffer has {dst.size} bytes, expected {expected}")
    outcome = diff(a, b, options)
    if dst is not None:
        # copyto also reaches non-contiguous views, where reshape would copy
        np.copyto(dst, outcome.image.to_array().reshape(dst.shape), casting="unsafe")
    return outcome.diff_pixels
