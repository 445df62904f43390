"""Separable sliding-window filters along one image axis.

A pass combines, for every output pixel, ``len(kernel)`` neighbouring source
pixels with the kernel weights through a combining operator::

    accumulator = initial
    for k, weight in enumerate(kernel):
        accumulator = operator(accumulator, source[x + k - half], weight)
    destination[x] = accumulator

with ``half = len(kernel) // 2``. The weights are applied in this order
(correlation order); reverse the kernel for a mirrored convolution.

Edge handling follows :class:`EdgeMode`. With the default
:attr:`EdgeMode.UNTOUCHED` only pixels whose whole window lies inside the
source are computed. Destination pixels closer than ``half`` to a border of
the filtered axis keep whatever value they had before the call, so the
destination should be initialised first, typically with
:meth:`Buffer.new_like <pixcore.image.Buffer.new_like>` or
:meth:`Buffer.copy_from <pixcore.image.Buffer.copy_from>`.

The public functions validate their arguments once. The per-row tasks they
build are trusted to stay in bounds because every index they touch is
derived from the validated image size.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, Sequence

import numpy as np

from pixcore.elements import Numeric, element_dtype
from pixcore.execution import RowExecutor, resolve_executor
from pixcore.image import (
    Buffer,
    Image,
    MutableImage,
    Region,
    ensure_same_size,
    grid_of,
    image_region,
    map_regions,
)

Operator = Callable[[Any, Any, Any], Any]


class EdgeMode(str, Enum):
    """How a pass treats windows that reach past the source border."""

    UNTOUCHED = "untouched"
    """Skip such pixels and leave their destination value unchanged."""

    REPLICATE = "replicate"
    """Read the nearest edge pixel for coordinates outside the source."""


def convolution_operator(accumulator: Numeric, element: Numeric, weight: Numeric) -> Numeric:
    """Multiply-accumulate: return ``accumulator + element * weight``."""

    return accumulator + element * weight


def interior(length: int, kernel_size: int) -> range:
    """Return the output positions whose full window fits inside ``length``.

    Args:
        length: Image extent along the filtered axis.
        kernel_size: Number of kernel taps.

    Returns:
        Possibly empty range of positions.
    """

    half = kernel_size // 2
    return range(half, max(half, length - (kernel_size - 1 - half)))


def horizontal_filter(
    source: Image,
    destination: MutableImage,
    kernel: Iterable[Any],
    operator: Operator = convolution_operator,
    *,
    initial: Any = 0,
    edge: EdgeMode | str = EdgeMode.UNTOUCHED,
    executor: RowExecutor | None = None,
) -> None:
    """Filter every row of ``source`` with ``kernel`` into ``destination``.

    Args:
        source: Image to read.
        destination: Image to write, same size as ``source`` and backed by
            different storage.
        kernel: Non-empty sequence of weights.
        operator: Combining operator ``(accumulator, element, weight) ->
            accumulator``.
        initial: Starting accumulator value, the identity of ``operator``.
        edge: Border policy, see :class:`EdgeMode`.
        executor: Execution strategy; sequential by default.

    Raises:
        ValueError: If the kernel is empty, the sizes differ or ``source`` and
            ``destination`` share pixel storage.
    """

    ensure_same_size(source, destination)
    region = image_region(source)
    horizontal_filter_range(
        source, destination, kernel, region, region, operator,
        initial=initial, edge=edge, executor=executor,
    )


def horizontal_filter_range(
    source: Image,
    destination: MutableImage,
    kernel: Iterable[Any],
    source_region: Region,
    destination_region: Region,
    operator: Operator = convolution_operator,
    *,
    initial: Any = 0,
    edge: EdgeMode | str = EdgeMode.UNTOUCHED,
    executor: RowExecutor | None = None,
) -> None:
    """Filter the rows of ``source_region`` into ``destination_region``.

    The result for source pixel ``p`` lands at ``p + shift``, where ``shift``
    is the offset between the regions' top-left corners. Windows may read
    source pixels outside ``source_region`` as long as they lie inside the
    source image; :class:`EdgeMode` decides what happens past the image
    border. Pixels that map outside either region or either image are
    skipped, so the images may differ in size.

    Example:
        Blur the top-left 8x8 block of ``source`` into the bottom-right corner
        of a 10x10 ``destination``::

            horizontal_filter_range(
                source,
                destination,
                [1, 2, 1],
                Region(range(0, 8), range(0, 8)),
                Region(range(2, 10), range(2, 10)),
            )

    Raises:
        ValueError: If the kernel is empty or ``source`` and ``destination``
            share pixel storage.
    """

    weights, edge, source_grid, destination_grid = _validate_filter_call(
        source, destination, kernel, edge
    )
    area, dx, dy = map_regions(source, destination, source_region, destination_region)
    size = source.size()
    area = area.intersect(Region(_output_positions(size.x, len(weights), edge), range(size.y)))
    if area.is_empty():
        return
    taps = list(zip(weights, _tap_indices(size.x, area.x, len(weights), edge)))

    if operator is convolution_operator and source_grid is not None and destination_grid is not None:
        task = _horizontal_grid_task(source_grid, destination_grid, taps, area, dx, dy, initial)
    else:
        task = _horizontal_task(source, destination, taps, area, dx, dy, operator, initial)
    resolve_executor(executor).run(area.height, task)


def vertical_filter(
    source: Image,
    destination: MutableImage,
    kernel: Iterable[Any],
    operator: Operator = convolution_operator,
    *,
    initial: Any = 0,
    edge: EdgeMode | str = EdgeMode.UNTOUCHED,
    executor: RowExecutor | None = None,
) -> None:
    """Filter every column of ``source`` with ``kernel`` into ``destination``.

    Arguments are the same as for :func:`horizontal_filter`, with the window
    sliding along ``y`` instead of ``x``.
    """

    ensure_same_size(source, destination)
    region = image_region(source)
    vertical_filter_range(
        source, destination, kernel, region, region, operator,
        initial=initial, edge=edge, executor=executor,
    )


def vertical_filter_range(
    source: Image,
    destination: MutableImage,
    kernel: Iterable[Any],
    source_region: Region,
    destination_region: Region,
    operator: Operator = convolution_operator,
    *,
    initial: Any = 0,
    edge: EdgeMode | str = EdgeMode.UNTOUCHED,
    executor: RowExecutor | None = None,
) -> None:
    """Filter the columns of ``source_region`` into ``destination_region``.

    The vertical twin of :func:`horizontal_filter_range`.
    """

    weights, edge, source_grid, destination_grid = _validate_filter_call(
        source, destination, kernel, edge
    )
    area, dx, dy = map_regions(source, destination, source_region, destination_region)
    size = source.size()
    area = area.intersect(Region(range(size.x), _output_positions(size.y, len(weights), edge)))
    if area.is_empty():
        return
    taps = list(zip(weights, _tap_indices(size.y, area.y, len(weights), edge)))

    if operator is convolution_operator and source_grid is not None and destination_grid is not None:
        task = _vertical_grid_task(source_grid, destination_grid, taps, area, dx, dy, initial)
    else:
        task = _vertical_task(source, destination, taps, area, dx, dy, operator, initial)
    resolve_executor(executor).run(area.height, task)


def separable_filter(
    source: Image,
    destination: MutableImage,
    horizontal_kernel: Iterable[Any],
    vertical_kernel: Iterable[Any],
    operator: Operator = convolution_operator,
    *,
    initial: Any = 0,
    edge: EdgeMode | str = EdgeMode.UNTOUCHED,
    executor: RowExecutor | None = None,
    intermediate: MutableImage | None = None,
) -> None:
    """Run a horizontal pass followed by a vertical pass.

    The horizontal result goes to ``intermediate``. Unless one is supplied it
    is a default-valued buffer the size of ``source`` with the element type of
    ``destination``. Sums are computed in the type NumPy promotes the operands
    to, so pair a narrow ``source`` with a typed ``initial`` such as
    ``np.int32(0)`` to carry a wide accumulator through both passes. With :attr:`EdgeMode.UNTOUCHED` the untouched columns of ``intermediate``
    feed the vertical pass, and the top and bottom border rows of
    ``destination`` keep their previous values.
    """

    if intermediate is None:
        intermediate = Buffer.new_like(source, dtype=element_dtype(destination))
    horizontal_filter(
        source, intermediate, horizontal_kernel, operator,
        initial=initial, edge=edge, executor=executor,
    )
    vertical_filter(
        intermediate, destination, vertical_kernel, operator,
        initial=initial, edge=edge, executor=executor,
    )


def _validate_filter_call(
    source: Image,
    destination: MutableImage,
    kernel: Iterable[Any],
    edge: EdgeMode | str,
) -> tuple[tuple[Any, ...], EdgeMode, np.ndarray | None, np.ndarray | None]:
    weights = tuple(kernel)
    if not weights:
        msg = "kernel must contain at least one weight"
        raise ValueError(msg)
    if source is destination:
        msg = "source and destination must be different images"
        raise ValueError(msg)
    source_grid = grid_of(source)
    destination_grid = grid_of(destination)
    # overlap is only detectable when both sides expose their storage
    if (
        source_grid is not None
        and destination_grid is not None
        and np.shares_memory(source_grid, destination_grid)
    ):
        msg = "source and destination must not share pixel storage"
        raise ValueError(msg)
    return weights, EdgeMode(edge), source_grid, destination_grid


def _output_positions(length: int, kernel_size: int, edge: EdgeMode) -> range:
    if edge is EdgeMode.UNTOUCHED:
        return interior(length, kernel_size)
    return range(length)


def _tap_indices(
    length: int,
    outputs: range,
    kernel_size: int,
    edge: EdgeMode,
) -> list[Sequence[int]]:
    """Return, per tap, the source coordinate read for each output position."""

    half = kernel_size // 2
    last = length - 1
    taps: list[Sequence[int]] = []
    for k in range(kernel_size):
        offset = k - half
        if edge is EdgeMode.UNTOUCHED:
            taps.append(range(outputs.start + offset, outputs.stop + offset))
        else:
            taps.append([min(last, max(0, position + offset)) for position in outputs])
    return taps


def _selector(indices: Sequence[int]) -> slice | np.ndarray:
    if isinstance(indices, range):
        return slice(indices.start, indices.stop)
    return np.asarray(indices, dtype=np.intp)


def _horizontal_task(
    source: Image,
    destination: MutableImage,
    taps: list[tuple[Any, Sequence[int]]],
    area: Region,
    dx: int,
    dy: int,
    operator: Operator,
    initial: Any,
) -> Callable[[range], None]:
    rows, columns = area.y, area.x

    def _filter_rows(band: range) -> None:
        for y in rows[band.start : band.stop]:
            for index, x in enumerate(columns):
                accumulator = initial
                for weight, indices in taps:
                    accumulator = operator(accumulator, source.get(indices[index], y), weight)
                destination.set(x + dx, y + dy, accumulator)

    return _filter_rows


def _horizontal_grid_task(
    source: np.ndarray,
    destination: np.ndarray,
    taps: list[tuple[Any, Sequence[int]]],
    area: Region,
    dx: int,
    dy: int,
    initial: Any,
) -> Callable[[range], None]:
    rows, columns = area.y, area.x
    selectors = [(weight, _selector(indices)) for weight, indices in taps]

    def _filter_rows(band: range) -> None:
        block = rows[band.start : band.stop]
        lines = source[block.start : block.stop]
        accumulator = initial
        for weight, selector in selectors:
            accumulator = accumulator + lines[:, selector] * weight
        destination[
            block.start + dy : block.stop + dy,
            columns.start + dx : columns.stop + dx,
        ] = accumulator

    return _filter_rows


def _vertical_task(
    source: Image,
    destination: MutableImage,
    taps: list[tuple[Any, Sequence[int]]],
    area: Region,
    dx: int,
    dy: int,
    operator: Operator,
    initial: Any,
) -> Callable[[range], None]:
    rows, columns = area.y, area.x

    def _filter_rows(band: range) -> None:
        for index in band:
            y = rows[index]
            for x in columns:
                accumulator = initial
                for weight, indices in taps:
                    accumulator = operator(accumulator, source.get(x, indices[index]), weight)
                destination.set(x + dx, y + dy, accumulator)

    return _filter_rows


def _vertical_grid_task(
    source: np.ndarray,
    destination: np.ndarray,
    taps: list[tuple[Any, Sequence[int]]],
    area: Region,
    dx: int,
    dy: int,
    initial: Any,
) -> Callable[[range], None]:
    rows, columns = area.y, area.x

    def _filter_rows(band: range) -> None:
        block = rows[band.start : band.stop]
        accumulator = initial
        for weight, indices in taps:
            selector = _selector(indices[band.start : band.stop])
            accumulator = accumulator + source[selector, columns.start : columns.stop] * weight
        destination[
            block.start + dy : block.stop + dy,
            columns.start + dx : columns.stop + dx,
        ] = accumulator

    return _filter_rows
