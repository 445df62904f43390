"""Zero-copy adapters that let foreign storage take part in the filters.

None of these classes own their pixels. They translate ``get``/``set`` calls
onto storage that belongs to somebody else, so writes through a view are
visible in the underlying array or image.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pixcore.image.base import Image, MutableImage, grid_of, image_region
from pixcore.image.geometry import Region, Size


class ArrayView:
    """Expose a 2-D NumPy array, e.g. a grayscale OpenCV image, as an image."""

    __slots__ = ("_array", "_size")

    def __init__(self, array: np.ndarray) -> None:
        if not isinstance(array, np.ndarray) or array.ndim != 2:
            msg = "array must be a 2D numpy array"
            raise ValueError(msg)
        self._array = array
        self._size = Size(array.shape[1], array.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._array.dtype

    def size(self) -> Size:
        return self._size

    def get(self, x: int, y: int) -> Any:
        assert self._size.contains(x, y), f"pixel ({x}, {y}) outside {self._size}"
        return self._array[y, x]

    def set(self, x: int, y: int, value: Any) -> None:
        assert self._size.contains(x, y), f"pixel ({x}, {y}) outside {self._size}"
        self._array[y, x] = value

    def grid(self) -> np.ndarray:
        return self._array


class ChannelView:
    """Expose one channel of an ``(height, width, channels)`` array.

    Args:
        array: Interleaved multi-channel image, e.g. BGR data from OpenCV.
        channel: Index of the channel to address.
    """

    __slots__ = ("_array", "_channel", "_size")

    def __init__(self, array: np.ndarray, channel: int) -> None:
        if not isinstance(array, np.ndarray) or array.ndim != 3:
            msg = "array must be a 3D numpy array"
            raise ValueError(msg)
        if not 0 <= channel < array.shape[2]:
            msg = f"channel must be in [0, {array.shape[2]})"
            raise ValueError(msg)
        self._array = array
        self._channel = channel
        self._size = Size(array.shape[1], array.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._array.dtype

    def size(self) -> Size:
        return self._size

    def get(self, x: int, y: int) -> Any:
        assert self._size.contains(x, y), f"pixel ({x}, {y}) outside {self._size}"
        return self._array[y, x, self._channel]

    def set(self, x: int, y: int, value: Any) -> None:
        assert self._size.contains(x, y), f"pixel ({x}, {y}) outside {self._size}"
        self._array[y, x, self._channel] = value

    def grid(self) -> np.ndarray:
        return self._array[:, :, self._channel]


class RegionView:
    """Address a rectangular part of another image with its own origin.

    Pixel ``(0, 0)`` of the view is pixel ``(region.x.start, region.y.start)``
    of ``image``. Writing requires ``image`` to be mutable.

    Raises:
        ValueError: If ``region`` is not fully contained in ``image``.
    """

    __slots__ = ("_image", "_region", "_size")

    def __init__(self, image: Image, region: Region) -> None:
        if region.intersect(image_region(image)) != region and not region.is_empty():
            msg = "region must lie inside the image"
            raise ValueError(msg)
        self._image = image
        self._region = region
        self._size = Size(region.width, region.height)

    @property
    def dtype(self) -> np.dtype | None:
        return getattr(self._image, "dtype", None)

    @property
    def region(self) -> Region:
        return self._region

    def size(self) -> Size:
        return self._size

    def get(self, x: int, y: int) -> Any:
        assert self._size.contains(x, y), f"pixel ({x}, {y}) outside {self._size}"
        return self._image.get(self._region.x.start + x, self._region.y.start + y)

    def set(self, x: int, y: int, value: Any) -> None:
        assert self._size.contains(x, y), f"pixel ({x}, {y}) outside {self._size}"
        image: MutableImage = self._image  # type: ignore[assignment]
        image.set(self._region.x.start + x, self._region.y.start + y, value)

    def grid(self) -> np.ndarray | None:
        """Return a view of the region when the parent exposes a grid, else ``None``."""

        parent = grid_of(self._image)
        if parent is None:
            return None
        return parent[
            self._region.y.start : self._region.y.stop,
            self._region.x.start : self._region.x.stop,
        ]
