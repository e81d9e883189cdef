"""Decoded RGBA raster held in memory."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from visgate.errors import ValidationError

CHANNELS = 4


@dataclass(frozen=True)
class PixelBuffer:
    """Interleaved RGBA bytes, row-major, top to bottom."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValidationError(f"empty image: {self.width}x{self.height}")
        expected = self.width * self.height * CHANNELS
        if len(self.data) != expected:
            raise ValidationError(
                f"buffer length {len(self.data)} does not match "
                f"{self.width}x{self.height} RGBA ({expected} bytes)"
            )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def to_array(self) -> np.ndarray:
        """Return a read-only ``(height, width, 4)`` uint8 view of the data."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS
        )

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PixelBuffer:
        """Build a buffer from a ``(height, width, 4)`` array."""
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise ValidationError(f"expected (height, width, 4) array, got {arr.shape}")
        height, width = int(arr.shape[0]), int(arr.shape[1])
        data = np.ascontiguousarray(arr, dtype=np.uint8).tobytes()
        return cls(width=width, height=height, data=data)

    @classmethod
    def blank(
        cls, width: int, height: int, fill: tuple[int, int, int, int] = (0, 0, 0, 0)
    ) -> PixelBuffer:
        """Return a buffer with every pixel set to *fill*."""
        if width <= 0 or height <= 0:
            raise ValidationError(f"empty image: {width}x{height}")
        return cls(width=width, height=height, data=bytes(fill) * (width * height))
