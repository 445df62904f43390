"""Numeric pixel element types.

Pixel elements are represented by NumPy dtypes. Any boolean, integer,
floating point or complex dtype qualifies, as does ``object`` for arbitrary
Python values that implement the arithmetic an operator needs (for example
:class:`fractions.Fraction`). Different element types never mix implicitly:
conversions go through an explicit point transform such as
:func:`pixcore.filters.map_new` combined with :func:`saturating`.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

import numpy as np
from numpy.typing import DTypeLike

NUMERIC_KINDS = frozenset("biufcO")
DEFAULT_DTYPE = np.dtype(np.float64)

_WIDENING: dict[np.dtype, np.dtype] = {
    np.dtype(np.bool_): np.dtype(np.int32),
    np.dtype(np.uint8): np.dtype(np.int32),
    np.dtype(np.int8): np.dtype(np.int32),
    np.dtype(np.uint16): np.dtype(np.int32),
    np.dtype(np.int16): np.dtype(np.int32),
    np.dtype(np.uint32): np.dtype(np.int64),
    np.dtype(np.int32): np.dtype(np.int64),
    np.dtype(np.float16): np.dtype(np.float32),
    np.dtype(np.float32): np.dtype(np.float64),
}


class Numeric(Protocol):
    """Arithmetic surface expected from elements by the standard operators."""

    def __add__(self, other: Any) -> Any: ...

    def __mul__(self, other: Any) -> Any: ...


def resolve_dtype(dtype: DTypeLike | None) -> np.dtype:
    """Return ``dtype`` as a :class:`numpy.dtype`, validating it is numeric.

    Args:
        dtype: Anything accepted by :class:`numpy.dtype`. ``None`` selects
            :data:`DEFAULT_DTYPE`.

    Returns:
        The resolved dtype.

    Raises:
        TypeError: If the dtype does not describe a numeric element.
    """

    resolved = DEFAULT_DTYPE if dtype is None else np.dtype(dtype)
    if resolved.kind not in NUMERIC_KINDS or resolved.shape:
        msg = f"dtype {resolved} is not a numeric pixel element type"
        raise TypeError(msg)
    return resolved


def default_value(dtype: DTypeLike | None) -> Any:
    """Return the default (additive identity) element for ``dtype``."""

    resolved = resolve_dtype(dtype)
    if resolved.kind == "O":
        return 0
    return resolved.type(0)


def accumulator_dtype(dtype: DTypeLike | None) -> np.dtype:
    """Return a dtype wide enough to accumulate sums of ``dtype`` elements.

    Small integer types widen to 32 or 64 bits and narrow floats widen by one
    step. Types without a wider counterpart are returned unchanged.
    """

    resolved = resolve_dtype(dtype)
    return _WIDENING.get(resolved, resolved)


def element_dtype(image: Any) -> np.dtype:
    """Return the element dtype of ``image``.

    Storage types that expose a ``dtype`` attribute report it directly.
    Otherwise the dtype is inferred from the first pixel, falling back to
    :data:`DEFAULT_DTYPE` for empty images.
    """

    dtype = getattr(image, "dtype", None)
    if dtype is not None:
        return resolve_dtype(dtype)
    size = image.size()
    if size.area() == 0:
        return DEFAULT_DTYPE
    return resolve_dtype(np.asarray(image.get(0, 0)).dtype)


def saturating(dtype: DTypeLike) -> Callable[[Any], Any]:
    """Return an explicit narrowing conversion into ``dtype``.

    Integer targets clip to the representable range and round floating
    inputs to the nearest integer; other targets are a plain cast.

    Args:
        dtype: Target element type.

    Returns:
        Function mapping a single value to a scalar of ``dtype``.
    """

    resolved = resolve_dtype(dtype)
    target = resolved.type

    if resolved.kind in "iu":
        info = np.iinfo(resolved)
        low, high = int(info.min), int(info.max)

        def _narrow(value: Any) -> Any:
            if isinstance(value, (float, np.floating)):
                value = round(float(value))
            return target(min(high, max(low, int(value))))

        return _narrow

    if resolved.kind == "O":
        return lambda value: value
    return lambda value: target(value)
