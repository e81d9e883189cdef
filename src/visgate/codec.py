"""PNG decode/encode backed by Pillow."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from visgate.errors import DecodeError
from visgate.pixel_buffer import PixelBuffer

log = logging.getLogger(__name__)


def decode(data: bytes) -> PixelBuffer:
    """Decode PNG bytes into an RGBA PixelBuffer.

    Grayscale, palette and RGB images are normalized to RGBA.

    Raises:
        DecodeError: If *data* is not a readable PNG image or exceeds
            Pillow's decompression-bomb limit.
        ValidationError: If the image has a zero dimension.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.format != "PNG":
                raise DecodeError(f"unsupported image format: {img.format}")
            img.load()
            rgba = img.convert("RGBA")
    except DecodeError:
        raise
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as exc:
        raise DecodeError(f"cannot decode PNG: {exc}") from exc

    with rgba:
        return PixelBuffer(width=rgba.width, height=rgba.height, data=rgba.tobytes())


def encode(buffer: PixelBuffer) -> bytes:
    """Encode *buffer* as lossless RGBA PNG bytes."""
    img = Image.frombytes("RGBA", buffer.size, buffer.data)
    out = io.BytesIO()
    with img:
        img.save(out, format="PNG")
    return out.getvalue()


def read_png(path: Path) -> PixelBuffer:
    """Read and decode a PNG file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        DecodeError: If the file is not a readable PNG image.
    """
    data = Path(path).read_bytes()
    try:
        return decode(data)
    except DecodeError as exc:
        raise DecodeError(f"{path}: {exc}") from exc


def write_png(path: Path, buffer: PixelBuffer) -> Path:
    """Encode *buffer* and write it to *path*; OSError propagates."""
    path = Path(path)
    path.write_bytes(encode(buffer))
    log.debug("wrote %dx%d png to %s", buffer.width, buffer.height, path)
    return path
