"""Crop bounds for an energy threshold.

`threshold` is a value between 0.0 and 1.0: the largest energy, relative to
the peak energy of the image, that may be cropped away before stopping.
0 crops nothing; values near 1 keep little more than the peak row/column.
Values above 1 are accepted and keep only the peak.
"""

from __future__ import annotations

from autocrop.config import AutocropConfig
from autocrop.crop import crop_buffer
from autocrop.energy import compute_energy_projections
from autocrop.geometry import Region
from autocrop.logger import get_logger
from autocrop.metrics import metrics
from autocrop.pixels import PixelBuffer
from autocrop.search import find_energy_bounds

_logger = get_logger("bounds")

# Pixels on the buffer edge have no energy; projections start one pixel in.
_EDGE_RING = 1


def _to_buffer_trim(projection_trim: int) -> int:
    # A trimmed projection start also drops the outer ring pixel before it.
    return projection_trim + _EDGE_RING if projection_trim > 0 else 0


def compute_bounds(buffer: PixelBuffer, threshold: float, config: AutocropConfig | None = None) -> Region:
    """Return the region of `buffer` to keep for `threshold`."""
    config = config or AutocropConfig()
    crop = buffer.bounds
    if crop.empty():
        return crop

    interior = crop.inset(_EDGE_RING)
    if interior.empty():
        _logger.debug("buffer %dx%d too small to crop", buffer.width, buffer.height)
        return crop

    metrics.inc("bounds.calls")
    with metrics.timed("bounds.duration"):
        columns, rows = compute_energy_projections(buffer, interior, config)
        crop_left, crop_right = find_energy_bounds(columns, threshold, config.margin)
        crop_top, crop_bottom = find_energy_bounds(rows, threshold, config.margin)

    result = Region(
        crop.min_x + _to_buffer_trim(crop_left),
        crop.min_y + _to_buffer_trim(crop_top),
        crop.max_x - _to_buffer_trim(crop_right),
        crop.max_y - _to_buffer_trim(crop_bottom),
    )
    _logger.debug("bounds for threshold %s: %s -> %s", threshold, crop.as_crop(), result.as_crop())
    return result


def to_threshold(buffer: PixelBuffer, threshold: float, config: AutocropConfig | None = None) -> PixelBuffer:
    """Return a copy of `buffer` cropped to `compute_bounds`."""
    return crop_buffer(buffer, compute_bounds(buffer, threshold, config))
