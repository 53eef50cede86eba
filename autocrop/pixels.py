"""Decoded pixel storage.

A `PixelBuffer` is the in-memory form every other module works on: an
``(height, width, 4)`` uint8 array of non-premultiplied R, G, B, A values,
row-major with zero-based coordinates. Keep this module free of pyvips so the
core can run on arrays produced by any decoder.
"""

from __future__ import annotations

import numpy as np

from autocrop.geometry import Region

RGB_CHANNELS = 3
RGBA_CHANNELS = 4
_GREY_DIMS = 2
_COLOR_DIMS = 3


class PixelBuffer:
    __slots__ = ("_pixels",)

    def __init__(self, pixels: np.ndarray):
        if not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint8:
            raise ValueError("expected a uint8 numpy array")
        if pixels.ndim != _COLOR_DIMS or pixels.shape[2] != RGBA_CHANNELS:
            raise ValueError(f"expected pixel array with shape (h, w, 4), got {pixels.shape}")
        self._pixels = np.ascontiguousarray(pixels)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PixelBuffer:
        """Build a buffer from a grey, RGB or RGBA array; missing alpha is opaque."""
        arr = np.asarray(arr)
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
        if arr.ndim == _GREY_DIMS:
            arr = np.repeat(arr[:, :, None], RGB_CHANNELS, axis=2)
        if arr.ndim != _COLOR_DIMS:
            raise ValueError(f"unexpected image array shape {arr.shape}")
        if arr.shape[2] == RGB_CHANNELS:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        return cls(arr.copy())

    @classmethod
    def new(cls, width: int, height: int, color: tuple[int, int, int, int] = (0, 0, 0, 0)) -> PixelBuffer:
        pixels = np.empty((height, width, RGBA_CHANNELS), dtype=np.uint8)
        pixels[...] = np.asarray(color, dtype=np.uint8)
        return cls(pixels)

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def bounds(self) -> Region:
        return Region(0, 0, self.width, self.height)

    def nrgba_at(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self._pixels[y, x])
        return r, g, b, a

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(np.array_equal(self._pixels, other._pixels))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
