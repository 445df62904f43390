"""Unit tests for mirror and nearest-neighbour resize."""

import numpy as np
import pytest

from pixcore import (
    ArrayView,
    Buffer,
    Size,
    ThreadedExecutor,
    mirror_horizontal,
    mirror_vertical,
    resize_nearest,
)
from pixcore.filters import scale_index_table


@pytest.fixture
def counting_3x3() -> Buffer:
    return Buffer.from_vec(Size(3, 3), list(range(1, 10)), dtype=np.int32)


def test_mirror_horizontal(counting_3x3: Buffer) -> None:
    assert mirror_horizontal(counting_3x3).into_vec().tolist() == [3, 2, 1, 6, 5, 4, 9, 8, 7]


def test_mirror_vertical(counting_3x3: Buffer) -> None:
    assert mirror_vertical(counting_3x3).into_vec().tolist() == [7, 8, 9, 4, 5, 6, 1, 2, 3]


def test_mirror_keeps_element_type() -> None:
    view = ArrayView(np.array([[1, 2]], dtype=np.uint8))

    mirrored = mirror_horizontal(view)

    assert mirrored.dtype == np.uint8
    assert mirrored.into_vec().tolist() == [2, 1]


@pytest.mark.parametrize(
    "source, target, expected",
    [
        (6, 3, [0, 2, 4]),
        (3, 6, [0, 0, 1, 1, 2, 2]),
        (2, 4, [0, 0, 1, 1]),
        (4, 0, []),
    ],
)
def test_scale_index_table(source: int, target: int, expected: list[int]) -> None:
    assert scale_index_table(source, target) == expected


def test_resize_nearest_upscales() -> None:
    image = Buffer.from_vec(Size(2, 2), [1, 2, 3, 4])

    resized = resize_nearest(image, (4, 4))

    assert resized.size() == Size(4, 4)
    assert resized.into_vec().tolist() == [
        1, 1, 2, 2,
        1, 1, 2, 2,
        3, 3, 4, 4,
        3, 3, 4, 4,
    ]


def test_resize_nearest_threaded_matches_sequential(random_float_buffer: Buffer) -> None:
    sequential = resize_nearest(random_float_buffer, Size(11, 40))
    threaded = resize_nearest(
        random_float_buffer, Size(11, 40), executor=ThreadedExecutor(worker_count=3)
    )

    assert sequential == threaded


def test_resize_nearest_rejects_empty_source() -> None:
    with pytest.raises(ValueError, match="empty image"):
        resize_nearest(Buffer(Size(0, 0)), Size(2, 2))
