"""Tunable parameters of the energy pass and the boundary search."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_THRESHOLD = 0.01
DEFAULT_MARGIN = 1
REC709_WEIGHTS = (0.2126, 0.7152, 0.0722)
MAX_ALPHA = 255


class AlphaWeighting(str, Enum):
    """How a neighbour's alpha enters its luminance.

    ADDITIVE adds the raw alpha value to the weighted RGB sum, so a step from
    opaque to transparent reads as an edge even between identical colors.
    MULTIPLICATIVE scales the weighted RGB sum by the alpha fraction, so
    transparent pixels read as black.
    """

    ADDITIVE = "additive"
    MULTIPLICATIVE = "multiplicative"


@dataclass(frozen=True)
class AutocropConfig:
    margin: int = DEFAULT_MARGIN
    luminance_weights: tuple[float, float, float] = REC709_WEIGHTS
    alpha_weighting: AlphaWeighting = AlphaWeighting.ADDITIVE
    max_alpha: int = MAX_ALPHA

    def __post_init__(self) -> None:
        object.__setattr__(self, "margin", int(self.margin))
        if self.margin < 0:
            raise ValueError("margin must be non-negative")
        if len(self.luminance_weights) != 3:
            raise ValueError("luminance_weights needs exactly three values (R, G, B)")
        if self.max_alpha <= 0:
            raise ValueError("max_alpha must be positive")
        # Accept lists and plain strings ("additive") from settings files and CLI flags.
        object.__setattr__(self, "luminance_weights", tuple(float(w) for w in self.luminance_weights))
        object.__setattr__(self, "alpha_weighting", AlphaWeighting(self.alpha_weighting))
