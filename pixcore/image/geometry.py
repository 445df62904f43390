"""Immutable sizes and rectangular regions used to address image pixels."""

from __future__ import annotations

from dataclasses import dataclass
import operator


def _validate_dimension(value: int, *, argument_name: str) -> int:
    if isinstance(value, bool):
        msg = f"{argument_name} must be an integer"
        raise ValueError(msg)
    try:
        value = operator.index(value)
    except TypeError:
        msg = f"{argument_name} must be an integer"
        raise ValueError(msg) from None
    if value < 0:
        msg = f"{argument_name} must be a non-negative integer"
        raise ValueError(msg)
    return value


def _intersect_ranges(first: range, second: range) -> range:
    start = max(first.start, second.start)
    stop = max(start, min(first.stop, second.stop))
    return range(start, stop)


@dataclass(frozen=True)
class Size:
    """Width and height of an image, in pixels.

    Attributes:
        x: Number of columns.
        y: Number of rows.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        # store plain ints so NumPy integers do not leak into index arithmetic
        object.__setattr__(self, "x", _validate_dimension(self.x, argument_name="width"))
        object.__setattr__(self, "y", _validate_dimension(self.y, argument_name="height"))

    @property
    def width(self) -> int:
        return self.x

    @property
    def height(self) -> int:
        return self.y

    def area(self) -> int:
        """Return the number of pixels covered by this size."""

        return self.x * self.y

    def contains(self, x: int, y: int) -> bool:
        """Return whether ``(x, y)`` addresses a pixel inside this size."""

        return 0 <= x < self.x and 0 <= y < self.y

    def region(self) -> Region:
        """Return the region spanning every pixel of this size."""

        return Region.from_size(self)


@dataclass(frozen=True)
class Region:
    """Half-open rectangle ``x.start <= col < x.stop``, ``y.start <= row < y.stop``.

    Bounds may be negative or exceed an image; operations that take a region
    clip it against the image they work on.
    """

    x: range
    y: range

    def __post_init__(self) -> None:
        for axis, bounds in (("x", self.x), ("y", self.y)):
            if not isinstance(bounds, range) or bounds.step != 1:
                msg = f"region {axis} bounds must be a range with step 1"
                raise ValueError(msg)

    @classmethod
    def from_size(cls, size: Size) -> Region:
        return cls(range(size.x), range(size.y))

    @classmethod
    def from_bounds(cls, left: int, top: int, right: int, bottom: int) -> Region:
        """Build a region from its left/top (inclusive) and right/bottom (exclusive) edges."""

        return cls(range(left, right), range(top, bottom))

    @property
    def width(self) -> int:
        return len(self.x)

    @property
    def height(self) -> int:
        return len(self.y)

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def intersect(self, other: Region) -> Region:
        """Return the overlap of both regions (possibly empty)."""

        return Region(_intersect_ranges(self.x, other.x), _intersect_ranges(self.y, other.y))

    def shift(self, dx: int, dy: int) -> Region:
        """Return this region translated by ``(dx, dy)``."""

        return Region(
            range(self.x.start + dx, self.x.stop + dx),
            range(self.y.start + dy, self.y.stop + dy),
        )
