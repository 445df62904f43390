"""Owned, contiguous, row-major pixel storage."""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

import numpy as np
from numpy.typing import DTypeLike

from pixcore.elements import default_value, element_dtype, resolve_dtype
from pixcore.image.base import Image, grid_of, validate_size_pair
from pixcore.image.geometry import Size

T = TypeVar("T")


class BufferSizeMismatchError(ValueError):
    """Raised when flat pixel data does not match the declared image area.

    Attributes:
        size: Declared image size.
        expected: Number of elements required by ``size``.
        actual: Number of elements that were supplied.
    """

    def __init__(self, size: Size, actual: int) -> None:
        self.size = size
        self.expected = size.area()
        self.actual = actual
        super().__init__(
            f"Sequence of length {actual} cannot be used as a {size.x} x {size.y} "
            f"image, correct length should be {self.expected}."
        )


class Buffer(Generic[T]):
    """Image buffer that exclusively owns one flat row-major NumPy array.

    The pixel at ``(x, y)`` lives at flat index ``y * size.x + x``. Reads and
    writes go through :meth:`get` and :meth:`set`, which implement the
    :class:`~pixcore.image.base.MutableImage` protocol; bounds are checked with
    ``assert`` only, so they disappear under ``python -O``.
    """

    __slots__ = ("_size", "_data")

    def __init__(
        self,
        size: Size | tuple[int, int],
        dtype: DTypeLike | None = None,
        fill: Any = None,
    ) -> None:
        """Allocate a buffer with every element initialised.

        Args:
            size: Width and height of the image.
            dtype: Element type. ``None`` selects ``float64``.
            fill: Initial element value. ``None`` uses the default value of
                ``dtype`` (zero).
        """

        size = validate_size_pair(size)
        resolved = resolve_dtype(dtype)
        value = default_value(resolved) if fill is None else fill
        self._size = size
        self._data = np.full(size.area(), value, dtype=resolved)

    @classmethod
    def _wrap(cls, size: Size, data: np.ndarray) -> Buffer:
        buffer = cls.__new__(cls)
        buffer._size = size
        buffer._data = data
        return buffer

    @classmethod
    def new_like(cls, image: Image, dtype: DTypeLike | None = None) -> Buffer:
        """Allocate a default-valued buffer with the same size as ``image``.

        Args:
            image: Any readable image.
            dtype: Element type of the new buffer. ``None`` reuses the element
                type of ``image``.
        """

        resolved = element_dtype(image) if dtype is None else resolve_dtype(dtype)
        return cls(image.size(), resolved)

    @classmethod
    def from_vec(
        cls,
        size: Size | tuple[int, int],
        data: Sequence[Any] | np.ndarray,
        dtype: DTypeLike | None = None,
    ) -> Buffer:
        """Build a buffer from a flat row-major sequence of elements.

        The elements are copied so the buffer never aliases caller storage.

        Args:
            size: Width and height of the image.
            data: Flat sequence of exactly ``size.area()`` elements.
            dtype: Element type. ``None`` lets NumPy infer it from ``data``.

        Returns:
            Buffer holding ``data``.

        Raises:
            BufferSizeMismatchError: If ``len(data) != size.area()``.
            ValueError: If ``data`` is not one-dimensional.
        """

        size = validate_size_pair(size)
        array = np.array(data, dtype=dtype)
        if array.ndim != 1:
            msg = "data must be a flat sequence of pixel elements"
            raise ValueError(msg)
        if array.shape[0] != size.area():
            raise BufferSizeMismatchError(size, array.shape[0])
        resolve_dtype(array.dtype)
        return cls._wrap(size, array)

    @classmethod
    def from_array(cls, array: np.ndarray, dtype: DTypeLike | None = None) -> Buffer:
        """Copy a ``(height, width)`` array into a new buffer."""

        array = np.asarray(array)
        if array.ndim != 2:
            msg = "array must be a 2D numpy array"
            raise ValueError(msg)
        height, width = array.shape
        return cls.from_vec(Size(width, height), array.reshape(-1), dtype=dtype)

    @classmethod
    def copy_from(cls, image: Image, dtype: DTypeLike | None = None) -> Buffer:
        """Materialise any readable image into a new owned buffer."""

        resolved = element_dtype(image) if dtype is None else resolve_dtype(dtype)
        grid = grid_of(image)
        if grid is not None:
            return cls.from_vec(image.size(), grid.reshape(-1), dtype=resolved)
        size = image.size()
        data = [image.get(x, y) for y in range(size.y) for x in range(size.x)]
        return cls.from_vec(size, data, dtype=resolved)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def size(self) -> Size:
        return self._size

    def get(self, x: int, y: int) -> T:
        assert self._size.contains(x, y), f"pixel ({x}, {y}) outside {self._size}"
        return self._data[y * self._size.x + x]

    def set(self, x: int, y: int, value: T) -> None:
        assert self._size.contains(x, y), f"pixel ({x}, {y}) outside {self._size}"
        self._data[y * self._size.x + x] = value

    def grid(self) -> np.ndarray:
        """Return a ``(height, width)`` view sharing this buffer's storage."""

        return self._data.reshape(self._size.y, self._size.x)

    def to_array(self) -> np.ndarray:
        """Return a ``(height, width)`` copy of the pixels."""

        return self.grid().copy()

    def into_vec(self) -> np.ndarray:
        """Hand the flat backing array over to the caller.

        The buffer gives up its storage and is left as an empty ``0 x 0``
        image, so the returned array is never shared with it.
        """

        data = self._data
        self._size = Size(0, 0)
        self._data = np.empty(0, dtype=data.dtype)
        return data

    def copy(self) -> Buffer:
        return self._wrap(self._size, self._data.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self._size == other._size and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Buffer(size={self._size.x}x{self._size.y}, dtype={self._data.dtype})"
