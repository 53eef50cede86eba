from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Region:
    """Half-open pixel rectangle: min inclusive, max exclusive."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_crop(cls, crop: tuple[int, int, int, int]) -> Region:
        left, top, width, height = crop
        return cls(left, top, left + width, top + height)

    @property
    def dx(self) -> int:
        return self.max_x - self.min_x

    @property
    def dy(self) -> int:
        return self.max_y - self.min_y

    @property
    def width(self) -> int:
        return max(0, self.dx)

    @property
    def height(self) -> int:
        return max(0, self.dy)

    def empty(self) -> bool:
        return self.dx <= 0 or self.dy <= 0

    def inset(self, n: int) -> Region:
        """Shrink every edge by `n` pixels. The result may be empty."""
        return Region(self.min_x + n, self.min_y + n, self.max_x - n, self.max_y - n)

    def translate(self, dx: int, dy: int) -> Region:
        return Region(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)

    def intersect(self, other: Region) -> Region:
        return Region(
            max(self.min_x, other.min_x),
            max(self.min_y, other.min_y),
            min(self.max_x, other.max_x),
            min(self.max_y, other.max_y),
        )

    def contains(self, other: Region) -> bool:
        """True when `other` lies inside this region. Empty regions are inside everything."""
        if other.empty():
            return True
        return (
            self.min_x <= other.min_x
            and self.min_y <= other.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    def as_crop(self) -> tuple[int, int, int, int]:
        """Return (left, top, width, height)."""
        return self.min_x, self.min_y, self.width, self.height
