"""Position-independent, element-wise transforms."""

from __future__ import annotations

from itertools import chain
from typing import Any, Callable, TypeVar

from numpy.typing import DTypeLike

from pixcore.execution import RowExecutor, resolve_executor
from pixcore.image import Buffer, Image, MutableImage, Region, image_region, map_regions

S = TypeVar("S")
D = TypeVar("D")


def update(
    image: MutableImage[S],
    function: Callable[[S], S],
    *,
    executor: RowExecutor | None = None,
) -> None:
    """Replace every pixel of ``image`` with ``function(pixel)``, in place.

    Pixels are visited in row-major order within each row band.

    Args:
        image: Image to modify.
        function: Pure element transform.
        executor: Execution strategy; sequential by default.
    """

    update_range(image, image_region(image), function, executor=executor)


def update_range(
    image: MutableImage[S],
    region: Region,
    function: Callable[[S], S],
    *,
    executor: RowExecutor | None = None,
) -> None:
    """Apply ``function`` in place to the pixels of ``image`` inside ``region``.

    ``region`` is clipped to the image, so parts of it that fall outside are
    ignored.
    """

    area = region.intersect(image_region(image))
    if area.is_empty():
        return
    columns = area.x
    top = area.y.start

    def _update_rows(rows: range) -> None:
        for y in range(top + rows.start, top + rows.stop):
            for x in columns:
                image.set(x, y, function(image.get(x, y)))

    resolve_executor(executor).run(area.height, _update_rows)


def map_new(
    image: Image[S],
    function: Callable[[S], D],
    *,
    dtype: DTypeLike | None = None,
    executor: RowExecutor | None = None,
) -> Buffer[D]:
    """Return a new buffer holding ``function(pixel)`` for every source pixel.

    The source is never modified. This is the place to change element
    types, e.g. widening ``uint8`` pixels before a convolution and narrowing
    the result afterwards.

    Args:
        image: Source image.
        function: Element transform; may return a different numeric type.
        dtype: Element type of the result. ``None`` lets NumPy infer it from
            the returned values.
        executor: Execution strategy; sequential by default.

    Returns:
        Buffer of the same size as ``image``.
    """

    size = image.size()
    columns = range(size.x)

    def _map_rows(rows: range) -> list[D]:
        return [function(image.get(x, y)) for y in rows for x in columns]

    bands = resolve_executor(executor).run(size.y, _map_rows)
    if size.area() == 0:
        return Buffer(size, dtype)
    return Buffer.from_vec(size, list(chain.from_iterable(bands)), dtype=dtype)


def map_range(
    source: Image[S],
    destination: MutableImage[D],
    source_region: Region,
    destination_region: Region,
    function: Callable[[S, D], D],
) -> None:
    """Combine pixels of ``source_region`` into ``destination_region``.

    The destination pixel at ``p + shift`` becomes
    ``function(source[p], destination[p + shift])`` where ``shift`` is the
    offset between the two regions' top-left corners. Only pixels that lie in
    both regions and inside both images are touched.

    Example:
        Copy the negated bottom-right 2x2 block of ``source`` to the top-left
        of ``destination``::

            map_range(
                source,
                destination,
                Region(range(1, 3), range(1, 3)),
                Region(range(0, 2), range(0, 2)),
                lambda value, _: -value,
            )
    """

    area, dx, dy = map_regions(source, destination, source_region, destination_region)
    for y in area.y:
        for x in area.x:
            current: Any = destination.get(x + dx, y + dy)
            destination.set(x + dx, y + dy, function(source.get(x, y), current))
