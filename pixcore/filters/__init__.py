"""Algorithms that read images through :class:`~pixcore.image.Image` and write
through :class:`~pixcore.image.MutableImage`."""

from pixcore.filters.convolution import (
    EdgeMode,
    convolution_operator,
    horizontal_filter,
    horizontal_filter_range,
    interior,
    separable_filter,
    vertical_filter,
    vertical_filter_range,
)
from pixcore.filters.geometry import (
    mirror_horizontal,
    mirror_vertical,
    resize_nearest,
    scale_index_table,
)
from pixcore.filters.point import map_new, map_range, update, update_range

__all__ = [
    "EdgeMode",
    "convolution_operator",
    "horizontal_filter",
    "horizontal_filter_range",
    "interior",
    "map_new",
    "map_range",
    "mirror_horizontal",
    "mirror_vertical",
    "resize_nearest",
    "scale_index_table",
    "separable_filter",
    "update",
    "update_range",
]
