"""Pytest fixtures: synthetic images with known crop boundaries.

The crop tests work on small generated buffers instead of fixture files so
every expected boundary can be derived from the construction itself.
"""

from __future__ import annotations

import numpy as np
import pytest

from autocrop.pixels import PixelBuffer
from tests.helpers.images import PINK, WHITE, square_on_background


@pytest.fixture
def pink_square_on_white() -> PixelBuffer:
    return square_on_background(80, 70, WHITE)


@pytest.fixture
def pink_square_on_gradient() -> PixelBuffer:
    xs = np.arange(80)
    grey = np.rint(200 + 55 * xs / 79).astype(np.uint8)
    background = np.empty((80, 80, 4), dtype=np.uint8)
    background[..., 0] = grey[None, :]
    background[..., 1] = grey[None, :]
    background[..., 2] = grey[None, :]
    background[..., 3] = 255
    return square_on_background(80, 70, background)


@pytest.fixture
def pink_square_on_noise() -> PixelBuffer:
    rng = np.random.default_rng(1234)
    grey = rng.integers(225, 256, size=(80, 80), dtype=np.uint8)
    background = np.empty((80, 80, 4), dtype=np.uint8)
    background[..., :3] = grey[..., None]
    background[..., 3] = 255
    return square_on_background(80, 70, background)


@pytest.fixture
def radial_gradient() -> PixelBuffer:
    ys, xs = np.mgrid[0:64, 0:64]
    r = np.hypot(xs - 31.5, ys - 31.5)
    grey = np.clip(255 * (1 - r / 32), 0, 255).astype(np.uint8)
    return PixelBuffer.from_array(grey)


@pytest.fixture
def pink_square_on_transparent_noise() -> PixelBuffer:
    rng = np.random.default_rng(99)
    pixels = rng.integers(0, 256, size=(50, 50, 4), dtype=np.uint8)
    pixels[..., 3] = 0
    pixels[10:40, 10:40] = PINK
    return PixelBuffer(pixels)
