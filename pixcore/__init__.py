"""pixcore: generic 2-D pixel buffers with point and separable filters."""

from pixcore.elements import accumulator_dtype, default_value, element_dtype, saturating
from pixcore.execution import (
    ExecutionSettings,
    RowExecutor,
    SequentialExecutor,
    ThreadedExecutor,
    split_rows,
)
from pixcore.filters import (
    EdgeMode,
    convolution_operator,
    horizontal_filter,
    horizontal_filter_range,
    map_new,
    map_range,
    mirror_horizontal,
    mirror_vertical,
    resize_nearest,
    separable_filter,
    update,
    update_range,
    vertical_filter,
    vertical_filter_range,
)
from pixcore.image import (
    ArrayView,
    Buffer,
    BufferSizeMismatchError,
    ChannelView,
    Image,
    MutableImage,
    Region,
    RegionView,
    Size,
)
from pixcore.utils import read_buffer, read_image, write_buffer, write_image

__all__ = [
    "ArrayView",
    "Buffer",
    "BufferSizeMismatchError",
    "ChannelView",
    "EdgeMode",
    "ExecutionSettings",
    "Image",
    "MutableImage",
    "Region",
    "RegionView",
    "RowExecutor",
    "SequentialExecutor",
    "Size",
    "ThreadedExecutor",
    "accumulator_dtype",
    "convolution_operator",
    "default_value",
    "element_dtype",
    "horizontal_filter",
    "horizontal_filter_range",
    "map_new",
    "map_range",
    "mirror_horizontal",
    "mirror_vertical",
    "read_buffer",
    "read_image",
    "resize_nearest",
    "saturating",
    "separable_filter",
    "split_rows",
    "update",
    "update_range",
    "vertical_filter",
    "vertical_filter_range",
    "write_buffer",
    "write_image",
]
