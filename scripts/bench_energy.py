#!/usr/bin/env python3
"""Time compute_bounds over a synthetic (or user-supplied) image.

Prints the mean and best wall time per call as recorded by autocrop.metrics.
"""

from __future__ import annotations

import argparse

import numpy as np

from autocrop.bounds import compute_bounds
from autocrop.metrics import metrics
from autocrop.pixels import PixelBuffer


def _synthetic(size: int) -> PixelBuffer:
    # Pink square on textured grey, like a photo with a busy border.
    rng = np.random.default_rng(0)
    grey = rng.integers(180, 256, size=(size, size), dtype=np.uint8)
    buf = PixelBuffer.from_array(grey)
    pad = size // 8
    buf.pixels[pad : size - pad, pad : size - pad] = (228, 0, 140, 255)
    return buf


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--image", help="Image file to crop instead of the synthetic one")
    parser.add_argument("--size", type=int, default=1024, help="Edge of the synthetic image in pixels")
    parser.add_argument("--threshold", type=float, default=0.01)
    parser.add_argument("-n", "--iterations", type=int, default=20)
    args = parser.parse_args()

    if args.image:
        from autocrop.decoder import load_pixel_buffer

        buffer = load_pixel_buffer(args.image)
    else:
        buffer = _synthetic(args.size)

    metrics.reset()
    result = None
    for _ in range(args.iterations):
        result = compute_bounds(buffer, args.threshold)

    stats = metrics.summary("bounds.duration")
    if stats is None:
        print("image too small to measure")
        return 1
    print(f"{buffer.width}x{buffer.height} -> {result}")
    print(f"mean {1000 * stats['mean']:.2f} ms, best {1000 * stats['best']:.2f} ms over {stats['count']} runs")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
