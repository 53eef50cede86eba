from __future__ import annotations

import numpy as np
import pytest

from autocrop.crop import crop_buffer, validate_crop_bounds
from autocrop.geometry import Region
from autocrop.pixels import PixelBuffer


@pytest.mark.parametrize(
    ("crop", "valid"),
    [
        ((0, 0, 10, 8), True),
        ((2, 3, 4, 5), True),
        ((-1, 0, 4, 4), False),
        ((0, -1, 4, 4), False),
        ((0, 0, 0, 4), False),
        ((0, 0, 4, 0), False),
        ((7, 0, 4, 4), False),
        ((0, 5, 4, 4), False),
    ],
)
def test_validate_crop_bounds(crop, valid) -> None:
    assert validate_crop_bounds(10, 8, crop) is valid


def test_crop_buffer_copies_region() -> None:
    pixels = np.arange(6 * 5 * 4, dtype=np.uint8).reshape(5, 6, 4)
    buf = PixelBuffer(pixels)

    out = crop_buffer(buf, Region(1, 2, 4, 5))

    assert (out.width, out.height) == (3, 3)
    np.testing.assert_array_equal(out.pixels, pixels[2:5, 1:4])
    # The result owns its pixels.
    out.pixels[...] = 0
    assert buf.pixels[2, 1].any()


def test_crop_to_full_bounds_is_equal_copy() -> None:
    buf = PixelBuffer.new(4, 4, (9, 8, 7, 255))

    out = crop_buffer(buf, buf.bounds)

    assert out == buf
    assert out.pixels is not buf.pixels


def test_crop_outside_buffer_is_rejected() -> None:
    buf = PixelBuffer.new(4, 4, (9, 8, 7, 255))

    with pytest.raises(ValueError):
        crop_buffer(buf, Region(2, 2, 5, 4))


def test_empty_region_only_valid_for_empty_buffer() -> None:
    with pytest.raises(ValueError):
        crop_buffer(PixelBuffer.new(4, 4, (0, 0, 0, 255)), Region(1, 1, 1, 3))

    empty = PixelBuffer.new(0, 0, (0, 0, 0, 255))
    assert crop_buffer(empty, empty.bounds) == empty
