"""Protocol definitions for readable and writable pixel storage."""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar, runtime_checkable

import numpy as np

from pixcore.image.geometry import Region, Size

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Image(Protocol[T_co]):
    """Read access to a rectangle of pixels.

    ``get`` is only defined for ``0 <= x < size().x`` and ``0 <= y < size().y``.
    Implementations may assert the bounds in debug builds but must not rely
    on callers catching an error: out-of-range access is a programming error.
    """

    def size(self) -> Size:
        """Return the image width and height."""

    def get(self, x: int, y: int) -> T_co:
        """Return the pixel at column ``x`` and row ``y``."""


@runtime_checkable
class MutableImage(Image[T], Protocol[T]):
    """Read-write access to a rectangle of pixels, used as filter output."""

    def set(self, x: int, y: int, value: T) -> None:
        """Store ``value`` at column ``x`` and row ``y``."""


@runtime_checkable
class GridBacked(Protocol):
    """Storage that can expose its pixels as a 2-D NumPy view without copying."""

    def grid(self) -> np.ndarray:
        """Return a writable ``(height, width)`` view of the pixels."""


def image_region(image: Image) -> Region:
    """Return the region covering every pixel of ``image``."""

    return Region.from_size(image.size())


def map_regions(
    source: Image,
    destination: Image,
    source_region: Region,
    destination_region: Region,
) -> tuple[Region, int, int]:
    """Pair up a source region with a destination region of another image.

    The destination pixel for source pixel ``(x, y)`` is ``(x + dx, y + dy)``,
    where ``(dx, dy)`` is the offset between the regions' top-left corners.

    Returns:
        ``(area, dx, dy)`` where ``area`` is the part of ``source_region``
        whose pixels and their mapped counterparts lie inside both regions
        and both images.
    """

    dx = destination_region.x.start - source_region.x.start
    dy = destination_region.y.start - source_region.y.start
    target = destination_region.intersect(image_region(destination))
    area = source_region.intersect(image_region(source)).intersect(target.shift(-dx, -dy))
    return area, dx, dy


def validate_size_pair(size: Sequence[int] | Size, *, argument_name: str = "size") -> Size:
    """Ensure ``size`` describes a ``(width, height)`` pair of non-negative integers.

    Args:
        size: Either a :class:`Size` or a two-element sequence.
        argument_name: Name used in the exception message.

    Returns:
        The validated :class:`Size`.

    Raises:
        ValueError: If the value does not contain two non-negative integers.
    """

    if isinstance(size, Size):
        return size
    if len(size) != 2:
        msg = f"{argument_name} must be a pair of integers (width, height)"
        raise ValueError(msg)
    width, height = size
    try:
        return Size(width, height)
    except ValueError as exc:
        msg = f"{argument_name} must be a pair of non-negative integers (width, height)"
        raise ValueError(msg) from exc


def ensure_same_size(
    first: Image,
    second: Image,
    *,
    first_name: str = "source",
    second_name: str = "destination",
) -> Size:
    """Validate that two images share the same size and return it.

    Raises:
        ValueError: If the sizes differ.
    """

    first_size = first.size()
    second_size = second.size()
    if first_size != second_size:
        msg = (
            f"{second_name} size {second_size.x}x{second_size.y} does not match "
            f"{first_name} size {first_size.x}x{first_size.y}"
        )
        raise ValueError(msg)
    return first_size


def grid_of(image: Image) -> np.ndarray | None:
    """Return the 2-D view of ``image`` when its storage exposes one."""

    if isinstance(image, GridBacked):
        return image.grid()
    return None
