"""File-level auto-crop using pyvips.

Detect the energy-based trim box of an image file and write the cropped
result back out.
"""

from __future__ import annotations

import contextlib
import os

from autocrop.bounds import compute_bounds
from autocrop.config import DEFAULT_THRESHOLD, AutocropConfig
from autocrop.crop import validate_crop_bounds
from autocrop.decoder import _configure_cache, _get_pyvips_module, load_pixel_buffer
from autocrop.logger import get_logger

_logger = get_logger("trim")


def detect_trim_box(
    path: str, threshold: float = DEFAULT_THRESHOLD, config: AutocropConfig | None = None
) -> tuple[int, int, int, int]:
    """Return the (left, top, width, height) box to keep for an image file."""
    buffer = load_pixel_buffer(path)
    crop = compute_bounds(buffer, threshold, config).as_crop()
    _logger.debug("trim box for %s at threshold %s: %s", path, threshold, crop)
    return crop


def apply_trim_to_file(source_path: str, crop: tuple[int, int, int, int], output_path: str | None = None) -> str:
    """Crop an image file and save it.

    Args:
        source_path: Path to source image file
        crop: (left, top, width, height) crop rectangle in original image coordinates
        output_path: Destination path; defaults to "<name>.trim<ext>" beside the source

    Returns:
        Path to the saved file
    """
    pyvips = _get_pyvips_module()
    _configure_cache(pyvips)

    if output_path is None:
        base, ext = os.path.splitext(source_path)
        output_path = f"{base}.trim{ext}"

    left, top, width, height = crop
    try:
        image = pyvips.Image.new_from_file(source_path, access="sequential")
    except Exception as e:
        _logger.error("Failed to open source image %s: %s", source_path, e, exc_info=True)
        raise

    if not validate_crop_bounds(image.width, image.height, crop):
        _logger.error("Crop bounds %s invalid for image size %dx%d", crop, image.width, image.height)
        raise ValueError(f"Crop bounds {crop} invalid for image size {image.width}x{image.height}")

    cropped = None
    try:
        cropped = image.crop(left, top, width, height)
        cropped.write_to_file(output_path)
    except Exception as e:
        _logger.error("Error during crop/write operation for %s -> %s: %s", source_path, output_path, e, exc_info=True)
        raise
    finally:
        with contextlib.suppress(Exception):
            del image
        with contextlib.suppress(Exception):
            del cropped

    _logger.info("Crop saved: %s", output_path)
    return output_path


def autocrop_file(
    source_path: str,
    output_path: str | None = None,
    threshold: float = DEFAULT_THRESHOLD,
    config: AutocropConfig | None = None,
) -> tuple[int, int, int, int]:
    """Detect the trim box of `source_path` and write the cropped image.

    Returns the (left, top, width, height) box that was kept.
    """
    crop = detect_trim_box(source_path, threshold, config)
    apply_trim_to_file(source_path, crop, output_path)
    return crop
