"""Crop materialization.

Pure functions over `PixelBuffer`, no pyvips dependency.
"""

from __future__ import annotations

from autocrop.geometry import Region
from autocrop.pixels import PixelBuffer


def validate_crop_bounds(img_width: int, img_height: int, crop: tuple[int, int, int, int]) -> bool:
    """Validate that crop rectangle is within image bounds.

    Args:
        img_width: Original image width
        img_height: Original image height
        crop: (left, top, width, height) crop rectangle

    Returns:
        True if crop is valid, False otherwise
    """
    left, top, width, height = crop
    if left < 0 or top < 0:
        return False
    if width <= 0 or height <= 0:
        return False
    if left + width > img_width:
        return False
    return not top + height > img_height


def crop_buffer(buffer: PixelBuffer, region: Region) -> PixelBuffer:
    """Copy `region` of `buffer` into a new buffer of matching size."""
    if region.empty():
        if not buffer.bounds.empty():
            raise ValueError(f"cannot crop {buffer!r} to empty region {region}")
        return PixelBuffer(buffer.pixels.copy())
    if not validate_crop_bounds(buffer.width, buffer.height, region.as_crop()):
        raise ValueError(f"Crop bounds {region.as_crop()} invalid for image size {buffer.width}x{buffer.height}")
    return PixelBuffer(buffer.pixels[region.min_y : region.max_y, region.min_x : region.max_x].copy())
