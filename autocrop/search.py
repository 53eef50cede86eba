"""Boundary search over a single energy projection.

A position "qualifies" when ``energy / max_energy >= threshold``. The scan
starts at index 0 and the comparison is inclusive. Trim counts are the number
of leading/trailing positions to drop from the projection.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from autocrop.config import DEFAULT_MARGIN


def find_max_energy(energies: Sequence[float] | np.ndarray) -> float:
    if len(energies) == 0:
        return 0.0
    return float(np.max(energies))


def _first_qualifying(energies, max_energy: float, threshold: float) -> int | None:
    for i in range(len(energies)):
        if energies[i] / max_energy >= threshold:
            return i
    return None


def find_leading_trim(energies, max_energy: float, threshold: float, margin: int = DEFAULT_MARGIN) -> int:
    """Number of positions to trim from the start of `energies`.

    The margin is only added when the first qualifying position is not index
    0. When nothing qualifies, everything but a 1-position sliver is trimmed.
    """
    n = len(energies)
    first = _first_qualifying(energies, max_energy, threshold)
    if first is None:
        return max(n - 1, 0)
    if first == 0:
        return 0
    return min(first + margin, n - 1)


def find_trailing_trim(
    energies, max_energy: float, threshold: float, first: int, margin: int = DEFAULT_MARGIN
) -> int:
    """Number of positions to trim from the end of `energies`.

    The backward scan stops at `first` (the leading side's first qualifying
    index) so the two scans never cross; without a qualifying position the
    count accumulates over every position scanned.
    """
    n = len(energies)
    bound = 0
    for j in range(n - 1, first - 1, -1):
        if energies[j] / max_energy >= threshold:
            return 0 if j == n - 1 else min(bound + margin, n - 1)
        bound += 1
    return max(n - 1, 0)


def _last_open_span(energies: np.ndarray, max_energy: float, margin: int) -> tuple[int, int]:
    """Kept span [start, stop) at the highest threshold that still leaves one open.

    Evaluates every distinct energy ratio as a threshold at once: prefix and
    suffix maxima give the first and last qualifying index for each level.
    """
    n = len(energies)
    ratios = energies / max_energy
    levels = np.unique(ratios[ratios > 0])
    firsts = np.searchsorted(np.maximum.accumulate(ratios), levels, side="left")
    lasts = n - 1 - np.searchsorted(np.maximum.accumulate(ratios[::-1]), levels, side="left")

    leads = np.where(firsts == 0, 0, np.minimum(firsts + margin, n - 1))
    trails = np.where(lasts == n - 1, 0, np.minimum(n - 1 - lasts + margin, n - 1))
    stops = n - trails
    open_levels = np.flatnonzero(leads < stops)
    if open_levels.size == 0:
        return 0, n
    k = open_levels[-1]
    return int(leads[k]), int(stops[k])


def find_energy_bounds(
    energies: Sequence[float] | np.ndarray, threshold: float, margin: int = DEFAULT_MARGIN
) -> tuple[int, int]:
    """Return (leading, trailing) trims for one projection.

    A threshold <= 0, a flat-zero projection or one with fewer than two
    positions trims nothing. When the margins would leave nothing between the
    leading and trailing trims, a single position is kept: the one nearest the
    peak inside the span kept at the highest threshold that still left one.
    The kept span therefore never grows as the threshold rises.
    """
    if isinstance(threshold, float) and math.isnan(threshold):
        raise ValueError("threshold must be a number, got NaN")
    energies = np.asarray(energies, dtype=np.float64)
    n = len(energies)
    if n <= 1 or threshold <= 0:
        return 0, 0
    max_energy = find_max_energy(energies)
    if max_energy <= 0:
        return 0, 0

    first = _first_qualifying(energies, max_energy, threshold)
    leading = find_leading_trim(energies, max_energy, threshold, margin)
    if first is None:
        trailing = n - 1
    else:
        trailing = find_trailing_trim(energies, max_energy, threshold, first, margin)
    if leading < n - trailing:
        return leading, trailing

    start, stop = _last_open_span(energies, max_energy, margin)
    keep = min(max(int(np.argmax(energies)), start), stop - 1)
    return keep, n - 1 - keep
