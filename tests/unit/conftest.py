"""Shared helpers for unit tests."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from visgate.pixel_buffer import PixelBuffer

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def write_solid(
    tmp_path: Path,
    name: str,
    color: tuple[int, ...],
    size: tuple[int, int] = (4, 4),
    mode: str = "RGBA",
) -> Path:
    """Create a solid-color PNG and return its path."""
    p = tmp_path / name
    Image.new(mode, size, color).save(p)
    return p


def solid_buffer(
    color: tuple[int, int, int, int], size: tuple[int, int] = (4, 4)
) -> PixelBuffer:
    return PixelBuffer.blank(size[0], size[1], color)


def edge_pair() -> tuple[PixelBuffer, PixelBuffer]:
    """5x5 black|white images whose middle column is grey in one and white in the other.

    The grey column is a typical anti-aliased edge.
    """
    a = Image.new("RGBA", (5, 5), WHITE)
    b = Image.new("RGBA", (5, 5), WHITE)
    for y in range(5):
        for x in range(2):
            a.putpixel((x, y), BLACK)
            b.putpixel((x, y), BLACK)
        a.putpixel((2, y), (128, 128, 128, 255))
    return (
        PixelBuffer(5, 5, a.tobytes()),
        PixelBuffer(5, 5, b.tobytes()),
    )
