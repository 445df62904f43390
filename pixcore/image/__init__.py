"""In-memory pixel storage and the protocols filters operate through."""

from pixcore.image.base import (
    GridBacked,
    Image,
    MutableImage,
    ensure_same_size,
    grid_of,
    image_region,
    map_regions,
    validate_size_pair,
)
from pixcore.image.buffer import Buffer, BufferSizeMismatchError
from pixcore.image.geometry import Region, Size
from pixcore.image.views import ArrayView, ChannelView, RegionView

__all__ = [
    "ArrayView",
    "Buffer",
    "BufferSizeMismatchError",
    "ChannelView",
    "GridBacked",
    "Image",
    "MutableImage",
    "Region",
    "RegionView",
    "Size",
    "ensure_same_size",
    "grid_of",
    "image_region",
    "map_regions",
    "validate_size_pair",
]
