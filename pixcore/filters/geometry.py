"""Filters that move pixels around without changing their values."""

from __future__ import annotations

from typing import Sequence

from pixcore.elements import element_dtype
from pixcore.execution import RowExecutor, resolve_executor
from pixcore.image import Buffer, Image, Size, validate_size_pair


def mirror_horizontal(image: Image, *, executor: RowExecutor | None = None) -> Buffer:
    """Return a copy of ``image`` flipped left to right."""

    size = image.size()
    result = Buffer.new_like(image)
    last = size.x - 1

    def _mirror_rows(rows: range) -> None:
        for y in rows:
            for x in range(size.x):
                result.set(x, y, image.get(last - x, y))

    resolve_executor(executor).run(size.y, _mirror_rows)
    return result


def mirror_vertical(image: Image, *, executor: RowExecutor | None = None) -> Buffer:
    """Return a copy of ``image`` flipped top to bottom."""

    size = image.size()
    result = Buffer.new_like(image)
    last = size.y - 1

    def _mirror_rows(rows: range) -> None:
        for y in rows:
            for x in range(size.x):
                result.set(x, y, image.get(x, last - y))

    resolve_executor(executor).run(size.y, _mirror_rows)
    return result


def scale_index_table(source_length: int, target_length: int) -> list[int]:
    """Return, for each target position, the nearest-neighbour source position."""

    return [index * source_length // target_length for index in range(target_length)]


def resize_nearest(
    image: Image,
    size: Size | Sequence[int],
    *,
    executor: RowExecutor | None = None,
) -> Buffer:
    """Scale ``image`` to ``size`` by nearest-neighbour sampling.

    Args:
        image: Source image.
        size: Target ``(width, height)``.
        executor: Execution strategy; sequential by default.

    Raises:
        ValueError: If the target is non-empty but the source is empty.
    """

    target = validate_size_pair(size)
    source_size = image.size()
    if target.area() > 0 and source_size.area() == 0:
        msg = "cannot resize an empty image to a non-empty size"
        raise ValueError(msg)

    x_indices = scale_index_table(source_size.x, target.x)
    y_indices = scale_index_table(source_size.y, target.y)
    result = Buffer(target, element_dtype(image))

    def _resize_rows(rows: range) -> None:
        for y in rows:
            source_y = y_indices[y]
            for x in range(target.x):
                result.set(x, y, image.get(x_indices[x], source_y))

    resolve_executor(executor).run(target.y, _resize_rows)
    return result
