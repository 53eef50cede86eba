"""autocrop public API.

Energy-based border trimming for decoded NRGBA pixel buffers.

Important: keep this module lightweight. pyvips is only imported when a
file-level helper (`autocrop.trim`, `autocrop.decoder`) is actually used.
"""

from autocrop.bounds import compute_bounds, to_threshold
from autocrop.config import DEFAULT_THRESHOLD, AlphaWeighting, AutocropConfig
from autocrop.crop import crop_buffer, validate_crop_bounds
from autocrop.energy import compute_energy_field, compute_energy_projections, pixel_energy
from autocrop.geometry import Region
from autocrop.pixels import PixelBuffer
from autocrop.search import find_energy_bounds

__all__ = [
    "DEFAULT_THRESHOLD",
    "AlphaWeighting",
    "AutocropConfig",
    "PixelBuffer",
    "Region",
    "compute_bounds",
    "compute_energy_field",
    "compute_energy_projections",
    "crop_buffer",
    "find_energy_bounds",
    "pixel_energy",
    "to_threshold",
    "validate_crop_bounds",
]
