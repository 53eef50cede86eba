"""Edge energy of a pixel buffer.

Energy at a pixel is a Sobel-like gradient magnitude over the luminance of its
eight neighbours (the pixel itself is excluded from the kernel):

    gx = (NW + W + SW) - (NE + E + SE)
    gy = (NW + N + NE) - (SW + S + SE)
    energy = (|gx| + |gy|) * alpha / max_alpha

Only pixels with a full neighbour set have an energy, so the 1-pixel outer
ring of the buffer never does. The projections sum one energy field along
both axes, so each pixel's energy is computed exactly once.
"""

from __future__ import annotations

import numpy as np

from autocrop.config import AlphaWeighting, AutocropConfig
from autocrop.geometry import Region
from autocrop.logger import get_logger
from autocrop.pixels import PixelBuffer

_logger = get_logger("energy")


def luminance_plane(pixels: np.ndarray, config: AutocropConfig) -> np.ndarray:
    """Float64 luminance of an (h, w, 4) NRGBA array, alpha folded in per `config`."""
    rgb = pixels[..., :3].astype(np.float64)
    alpha = pixels[..., 3].astype(np.float64)
    wr, wg, wb = config.luminance_weights
    lum = wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]
    if config.alpha_weighting is AlphaWeighting.MULTIPLICATIVE:
        return lum * (alpha / config.max_alpha)
    return lum + alpha


def _check_interior(buffer: PixelBuffer, region: Region) -> None:
    interior = buffer.bounds.inset(1)
    if not interior.contains(region):
        raise ValueError(f"region {region} is outside the buffer interior {interior}")


def compute_energy_field(
    buffer: PixelBuffer, region: Region, config: AutocropConfig | None = None
) -> np.ndarray:
    """Return an (region.height, region.width) array of per-pixel energies.

    `region` must lie inside ``buffer.bounds.inset(1)``; pixels on the buffer's
    outer edge lack neighbours and are rejected with ValueError.
    """
    config = config or AutocropConfig()
    if region.empty():
        return np.zeros((region.height, region.width), dtype=np.float64)
    _check_interior(buffer, region)

    # Transient luminance for the region plus its 1-pixel neighbour ring.
    expanded = buffer.pixels[region.min_y - 1 : region.max_y + 1, region.min_x - 1 : region.max_x + 1]
    lum = luminance_plane(expanded, config)

    # Outer pair first: mirrored neighbourhoods then sum to identical floats.
    col3 = (lum[:-2, :] + lum[2:, :]) + lum[1:-1, :]
    row3 = (lum[:, :-2] + lum[:, 2:]) + lum[:, 1:-1]
    gx = col3[:, :-2] - col3[:, 2:]
    gy = row3[:-2, :] - row3[2:, :]

    alpha = expanded[1:-1, 1:-1, 3].astype(np.float64) / config.max_alpha
    return (np.abs(gx) + np.abs(gy)) * alpha


def pixel_energy(buffer: PixelBuffer, x: int, y: int, config: AutocropConfig | None = None) -> float:
    """Energy of the single interior pixel at (x, y)."""
    field = compute_energy_field(buffer, Region(x, y, x + 1, y + 1), config)
    return float(field[0, 0])


def compute_energy_projections(
    buffer: PixelBuffer, region: Region | None = None, config: AutocropConfig | None = None
) -> tuple[np.ndarray, np.ndarray]:
    """Return (column_energies, row_energies) for `region`.

    Column energies have one entry per column of the region (summed over its
    rows); row energies one entry per row. `region` defaults to the buffer
    interior. An empty region yields two empty arrays.
    """
    if region is None:
        region = buffer.bounds.inset(1)
    if region.empty():
        return np.zeros(region.width, dtype=np.float64), np.zeros(region.height, dtype=np.float64)

    field = compute_energy_field(buffer, region, config)
    columns = field.sum(axis=0)
    rows = field.sum(axis=1)
    _logger.debug(
        "energy projections: region=%s peak column=%.1f peak row=%.1f",
        region.as_crop(),
        float(columns.max()),
        float(rows.max()),
    )
    return columns, rows
