"""Integer rectangles describing where a recipe defines pixel content."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Extent:
    """Axis aligned rectangle in image coordinates (y grows downwards).

    ``x`` and ``y`` may be negative: filters such as the twirl distortion
    describe content that spills past the top-left corner of their input.
    """

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_size(cls, width: int, height: int) -> "Extent":
        """Return the extent of a ``width`` x ``height`` image anchored at the origin."""

        return cls(0, 0, int(width), int(height))

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def is_empty(self) -> bool:
        """Return ``True`` when the rectangle covers no pixels."""

        return self.width <= 0 or self.height <= 0

    def contains(self, other: "Extent") -> bool:
        """Return ``True`` when *other* lies entirely inside this extent."""

        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def union(self, other: "Extent") -> "Extent":
        """Return the smallest extent covering both rectangles.

        Empty rectangles do not contribute, so unioning with an empty extent
        returns the other operand unchanged.
        """

        if self.is_empty():
            return other
        if other.is_empty():
            return self
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Extent(left, top, right - left, bottom - top)

    def intersection(self, other: "Extent") -> "Extent":
        """Return the overlapping region, or an empty extent when disjoint."""

        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return Extent(left, top, 0, 0)
        return Extent(left, top, right - left, bottom - top)

    @property
    def area(self) -> int:
        if self.is_empty():
            return 0
        return self.width * self.height


__all__ = ["Extent"]
