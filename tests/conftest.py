"""Pytest fixtures that provide small, well-known images."""

import numpy as np
import pytest

from pixcore import Buffer, Size


@pytest.fixture
def counting_4x3() -> Buffer:
    """Return a 4x3 ``int16`` buffer holding ``1..12`` in row-major order.

    Returns:
        Buffer: Rows ``[1, 2, 3, 4]``, ``[5, 6, 7, 8]`` and ``[9, 10, 11, 12]``.
    """

    return Buffer.from_vec(Size(4, 3), list(range(1, 13)), dtype=np.int16)


@pytest.fixture
def counting_5x5() -> Buffer:
    """Return a 5x5 ``int64`` buffer where pixel ``(x, y)`` is ``5 * y + x + 1``.

    Returns:
        Buffer: Values ``1..25`` in row-major order.
    """

    return Buffer.from_vec(Size(5, 5), list(range(1, 26)), dtype=np.int64)


@pytest.fixture
def ones_5x5() -> Buffer:
    """Return a 5x5 ``int64`` buffer filled with ones."""

    return Buffer(Size(5, 5), np.int64, fill=1)


@pytest.fixture
def rng() -> np.random.Generator:
    """Return a NumPy random number generator with a fixed seed.

    Returns:
        np.random.Generator: Generator seeded for reproducible fixtures.
    """

    return np.random.default_rng(100)


@pytest.fixture
def random_gray(rng: np.random.Generator) -> np.ndarray:
    """Return pseudo-random ``uint8`` grayscale image data.

    Args:
        rng: Seeded random number generator.

    Returns:
        np.ndarray: Array of shape ``(37, 53)``.
    """

    return rng.integers(0, 256, size=(37, 53), dtype=np.uint8)


@pytest.fixture
def random_float_buffer(rng: np.random.Generator) -> Buffer:
    """Return a 29x23 ``float64`` buffer with values in ``[-1, 1)``.

    Args:
        rng: Seeded random number generator.

    Returns:
        Buffer: Buffer backed by pseudo-random data.
    """

    return Buffer.from_array(rng.uniform(-1.0, 1.0, size=(23, 29)))
