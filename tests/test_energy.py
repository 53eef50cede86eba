from __future__ import annotations

import numpy as np
import pytest

from autocrop.config import AlphaWeighting, AutocropConfig
from autocrop.energy import compute_energy_field, compute_energy_projections, luminance_plane, pixel_energy
from autocrop.geometry import Region
from autocrop.pixels import PixelBuffer

from tests.helpers.images import BLACK, WHITE


def _reference_energy(buffer: PixelBuffer, x: int, y: int, config: AutocropConfig) -> float:
    """Straightforward per-pixel kernel used to cross-check the vectorised field."""

    def lum(px: int, py: int) -> float:
        r, g, b, a = buffer.nrgba_at(px, py)
        wr, wg, wb = config.luminance_weights
        value = wr * r + wg * g + wb * b
        if config.alpha_weighting is AlphaWeighting.MULTIPLICATIVE:
            return value * a / config.max_alpha
        return value + a

    nw, n, ne = lum(x - 1, y - 1), lum(x, y - 1), lum(x + 1, y - 1)
    w, e = lum(x - 1, y), lum(x + 1, y)
    sw, s, se = lum(x - 1, y + 1), lum(x, y + 1), lum(x + 1, y + 1)
    gx = (nw + w + sw) - (ne + e + se)
    gy = (nw + n + ne) - (sw + s + se)
    return (abs(gx) + abs(gy)) * buffer.nrgba_at(x, y)[3] / config.max_alpha


def _columns(*colors) -> PixelBuffer:
    """3-row buffer with one color per column."""
    pixels = np.empty((3, len(colors), 4), dtype=np.uint8)
    for i, c in enumerate(colors):
        pixels[:, i] = c
    return PixelBuffer(pixels)


def test_luminance_additive_and_multiplicative() -> None:
    px = np.array([[[255, 255, 255, 0], [0, 0, 0, 255]]], dtype=np.uint8)

    additive = luminance_plane(px, AutocropConfig())
    multiplicative = luminance_plane(px, AutocropConfig(alpha_weighting=AlphaWeighting.MULTIPLICATIVE))

    assert additive[0, 0] == pytest.approx(255.0)
    assert additive[0, 1] == pytest.approx(255.0)
    assert multiplicative[0, 0] == pytest.approx(0.0)
    assert multiplicative[0, 1] == pytest.approx(0.0)


def test_vertical_edge_energy() -> None:
    buf = _columns(BLACK, BLACK, WHITE)

    # gx = 3 * (black + 255) - 3 * (white + 255); gy = 0
    assert pixel_energy(buf, 1, 1) == pytest.approx(765.0)


def test_center_pixel_is_excluded_from_kernel() -> None:
    buf = _columns(WHITE, BLACK, WHITE)

    assert pixel_energy(buf, 1, 1) == 0.0


def test_transparent_center_has_no_energy() -> None:
    buf = _columns(BLACK, (255, 255, 255, 0), WHITE)

    assert pixel_energy(buf, 1, 1) == 0.0


def test_partial_alpha_scales_energy() -> None:
    opaque = _columns(BLACK, (9, 9, 9, 255), WHITE)
    half = _columns(BLACK, (9, 9, 9, 51), WHITE)

    assert pixel_energy(half, 1, 1) == pytest.approx(pixel_energy(opaque, 1, 1) * 0.2)


def test_alpha_weighting_policies_differ() -> None:
    # Opaque black beside transparent black: only the additive policy sees an edge.
    buf = _columns(BLACK, BLACK, (0, 0, 0, 0))

    assert pixel_energy(buf, 1, 1, AutocropConfig()) == pytest.approx(765.0)
    assert pixel_energy(buf, 1, 1, AutocropConfig(alpha_weighting="multiplicative")) == 0.0


def test_field_matches_reference_kernel() -> None:
    rng = np.random.default_rng(7)
    buf = PixelBuffer(rng.integers(0, 256, size=(9, 11, 4), dtype=np.uint8))
    region = buf.bounds.inset(1)

    for config in (AutocropConfig(), AutocropConfig(alpha_weighting=AlphaWeighting.MULTIPLICATIVE)):
        field = compute_energy_field(buf, region, config)
        assert field.shape == (region.height, region.width)
        for y in range(region.min_y, region.max_y):
            for x in range(region.min_x, region.max_x):
                expected = _reference_energy(buf, x, y, config)
                assert field[y - region.min_y, x - region.min_x] == pytest.approx(expected)


def test_field_for_sub_region() -> None:
    rng = np.random.default_rng(3)
    buf = PixelBuffer(rng.integers(0, 256, size=(12, 12, 4), dtype=np.uint8))
    full = compute_energy_field(buf, buf.bounds.inset(1))

    sub = compute_energy_field(buf, Region(3, 4, 8, 10))

    np.testing.assert_allclose(sub, full[3:9, 2:7])


@pytest.mark.parametrize(
    "region",
    [Region(0, 1, 3, 3), Region(1, 1, 10, 3), Region(1, 0, 3, 3), Region(1, 1, 3, 10)],
)
def test_region_touching_buffer_edge_is_rejected(region) -> None:
    buf = PixelBuffer.new(10, 10, WHITE)

    with pytest.raises(ValueError):
        compute_energy_field(buf, region)


def test_projections_sum_one_field_both_ways() -> None:
    rng = np.random.default_rng(11)
    buf = PixelBuffer(rng.integers(0, 256, size=(20, 30, 4), dtype=np.uint8))

    columns, rows = compute_energy_projections(buf)
    field = compute_energy_field(buf, buf.bounds.inset(1))

    assert columns.shape == (28,)
    assert rows.shape == (18,)
    np.testing.assert_allclose(columns, field.sum(axis=0))
    np.testing.assert_allclose(rows, field.sum(axis=1))
    assert columns.sum() == pytest.approx(rows.sum())
    assert (columns >= 0).all() and (rows >= 0).all()


def test_projections_of_uniform_buffer_are_zero() -> None:
    columns, rows = compute_energy_projections(PixelBuffer.new(6, 5, (12, 200, 40, 255)))

    assert not columns.any()
    assert not rows.any()


def test_projections_of_too_small_buffer_are_empty() -> None:
    columns, rows = compute_energy_projections(PixelBuffer.new(2, 2, WHITE))

    assert columns.size == 0
    assert rows.size == 0


def test_mirrored_content_gives_mirrored_projections() -> None:
    rng = np.random.default_rng(5)
    half = rng.integers(0, 256, size=(15, 8, 4), dtype=np.uint8)
    pixels = np.concatenate([half, half[:, ::-1]], axis=1)
    buf = PixelBuffer(pixels)

    columns, _ = compute_energy_projections(buf)

    np.testing.assert_array_equal(columns, columns[::-1])
