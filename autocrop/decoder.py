"""Image decoding and encoding using pyvips.

Converts image files to and from `PixelBuffer`. Everything here is a thin
collaborator around the crop core; the core itself never touches files.
"""

from __future__ import annotations

import contextlib
from typing import Any

import numpy as np

from autocrop.logger import get_logger
from autocrop.pixels import RGB_CHANNELS, RGBA_CHANNELS, PixelBuffer

_logger = get_logger("decoder")

_pyvips: Any | None = None


def _get_pyvips_module() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        _pyvips = pyvips
    return _pyvips


def _configure_cache(pyvips: Any) -> None:
    # Configure pyvips caches to avoid memory growth
    with contextlib.suppress(Exception):
        pyvips.cache_set_max(0)
        pyvips.cache_set_max_mem(0)
        pyvips.cache_set_max_files(0)


def load_pixel_buffer(path: str) -> PixelBuffer:
    """Decode an image file into a non-premultiplied sRGB + alpha buffer."""
    pyvips = _get_pyvips_module()
    _configure_cache(pyvips)

    image = pyvips.Image.new_from_file(path, access="sequential")
    if image.interpretation not in ("srgb", "b-w") or image.format != "uchar":
        image = image.colourspace("srgb")
    if image.bands < RGB_CHANNELS:
        # Grey (+ alpha): replicate the grey band, keep alpha last.
        grey = image.extract_band(0)
        bands = [grey, grey]
        if image.hasalpha():
            bands.append(image.extract_band(image.bands - 1))
        image = grey.bandjoin(bands)
    if not image.hasalpha() and image.bands == RGB_CHANNELS:
        image = image.bandjoin(255)
    if image.bands > RGBA_CHANNELS:
        image = image.extract_band(0, n=RGBA_CHANNELS)
    if image.format != "uchar":
        image = image.cast("uchar")

    mem = image.write_to_memory()
    array = np.frombuffer(mem, dtype=np.uint8).reshape(image.height, image.width, image.bands)
    if array.shape[2] != RGBA_CHANNELS:
        raise RuntimeError(f"Unsupported band count after conversion: {array.shape[2]}")
    _logger.debug("decoded %s: %dx%d", path, image.width, image.height)
    return PixelBuffer(array.copy())


def decode_image(path: str) -> tuple[str, PixelBuffer | None, str | None]:
    """Decode `path` into a PixelBuffer without raising.

    Returns (path, buffer|None, error|None).
    """
    try:
        return path, load_pixel_buffer(path), None
    except Exception as e:
        _logger.debug("decode failed: %s", e)
        return path, None, str(e)


def save_pixel_buffer(buffer: PixelBuffer, path: str) -> str:
    """Encode `buffer` to `path`; the format follows the file suffix."""
    pyvips = _get_pyvips_module()
    _configure_cache(pyvips)

    # pyvips expects a contiguous bytes buffer in C order
    buf = buffer.pixels.tobytes()
    image: Any = pyvips.Image.new_from_memory(buf, buffer.width, buffer.height, RGBA_CHANNELS, "uchar")
    with contextlib.suppress(Exception):
        image = image.copy(interpretation="srgb")
    image.write_to_file(path)
    _logger.debug("encoded %s: %dx%d", path, buffer.width, buffer.height)
    return path
