"""Unit tests for the point-transform engine."""

import numpy as np
import pytest

from pixcore import (
    ArrayView,
    Buffer,
    Region,
    Size,
    ThreadedExecutor,
    map_new,
    map_range,
    saturating,
    update,
    update_range,
)


def test_update_identity_leaves_pixels_unchanged(counting_4x3: Buffer) -> None:
    expected = counting_4x3.copy()

    update(counting_4x3, lambda value: value)

    assert counting_4x3 == expected


def test_update_composition_matches_single_pass(random_float_buffer: Buffer) -> None:
    """Two passes ``f`` then ``g`` equal one pass of ``g(f(x))``."""

    def f(value: float) -> float:
        return value * 3.0 + 1.0

    def g(value: float) -> float:
        return value * value - 0.5

    twice = random_float_buffer.copy()
    once = random_float_buffer.copy()

    update(twice, f)
    update(twice, g)
    update(once, lambda value: g(f(value)))

    np.testing.assert_array_equal(twice.to_array(), once.to_array())


def test_update_negates_8bit_image() -> None:
    image = Buffer.from_vec(Size(2, 2), [0, 10, 200, 255], dtype=np.uint8)

    update(image, lambda value: 255 - value)

    assert image.into_vec().tolist() == [255, 245, 55, 0]


def test_update_works_on_foreign_storage() -> None:
    array = np.array([[1, 2], [3, 4]], dtype=np.int32)

    update(ArrayView(array), lambda value: value * 10)

    assert array.tolist() == [[10, 20], [30, 40]]


def test_update_range_only_touches_region() -> None:
    image = Buffer.from_vec(Size(2, 2), [1, 2, 3, 4], dtype=np.uint8)

    update_range(image, Region(range(0, 1), range(0, 1)), lambda value: value + 1)

    assert image.into_vec().tolist() == [2, 2, 3, 4]


def test_update_range_clips_region_to_image() -> None:
    image = Buffer.from_vec(Size(3, 2), [1, 2, 3, 4, 5, 6])

    update_range(image, Region.from_bounds(1, -5, 10, 1), lambda value: -value)

    assert image.into_vec().tolist() == [1, -2, -3, 4, 5, 6]


def test_map_new_preserves_size_and_source(counting_4x3: Buffer) -> None:
    before = counting_4x3.copy()

    result = map_new(counting_4x3, lambda value: value * 0.5)

    assert result.size() == counting_4x3.size()
    assert counting_4x3 == before
    assert result.get(3, 2) == 6.0


def test_map_new_widens_element_type() -> None:
    """The destination element type follows the returned values."""

    image = Buffer.from_vec(Size(2, 1), [200, 250], dtype=np.uint8)

    widened = map_new(image, lambda value: np.uint16(value) * 2)

    assert widened.dtype == np.uint16
    assert widened.into_vec().tolist() == [400, 500]


def test_map_new_narrows_with_explicit_conversion() -> None:
    image = Buffer.from_vec(Size(3, 1), [-20, 128, 900], dtype=np.int32)

    narrowed = map_new(image, saturating(np.uint8), dtype=np.uint8)

    assert narrowed.dtype == np.uint8
    assert narrowed.into_vec().tolist() == [0, 128, 255]


def test_map_new_on_empty_image_uses_requested_dtype() -> None:
    result = map_new(Buffer(Size(0, 3), np.uint8), int, dtype=np.int16)

    assert result.size() == Size(0, 3)
    assert result.dtype == np.int16


def test_map_new_threaded_matches_sequential(random_float_buffer: Buffer) -> None:
    sequential = map_new(random_float_buffer, lambda value: value * 7.0 - 2.0)
    threaded = map_new(
        random_float_buffer,
        lambda value: value * 7.0 - 2.0,
        executor=ThreadedExecutor(worker_count=3, band_count=5),
    )

    np.testing.assert_array_equal(sequential.to_array(), threaded.to_array())


def test_map_range_moves_and_combines_pixels() -> None:
    size = Size(3, 3)
    source = Buffer.from_vec(size, [1, 2, 3, 4, 5, 6, 7, 8, 9], dtype=np.int8)
    destination = Buffer(size, np.int8)

    map_range(
        source,
        destination,
        Region(range(1, 3), range(1, 3)),
        Region(range(0, 2), range(0, 2)),
        lambda value, _: -value,
    )

    assert destination.into_vec().tolist() == [-5, -6, 0, -8, -9, 0, 0, 0, 0]


def test_map_range_ignores_pixels_outside_the_destination() -> None:
    source = Buffer.from_vec(Size(2, 2), [1, 2, 3, 4], dtype=np.int8)
    destination = Buffer(Size(3, 3), np.int8)

    map_range(
        source,
        destination,
        Region(range(0, 2), range(0, 2)),
        Region(range(1, 3), range(1, 3)),
        lambda value, _: value,
    )

    assert destination.into_vec().tolist() == [0, 0, 0, 0, 1, 2, 0, 3, 4]


def test_map_range_can_accumulate_into_destination() -> None:
    source = Buffer.from_vec(Size(2, 1), [1, 2])
    destination = Buffer.from_vec(Size(2, 1), [10, 20])

    map_range(
        source,
        destination,
        Region(range(0, 4), range(0, 1)),
        Region(range(1, 5), range(0, 1)),
        lambda value, current: value + current,
    )

    assert destination.into_vec().tolist() == [10, 21]


@pytest.mark.parametrize("band_count", [1, 2, 4])
def test_update_threaded_matches_sequential(
    random_float_buffer: Buffer, band_count: int
) -> None:
    sequential = random_float_buffer.copy()
    threaded = random_float_buffer.copy()

    update(sequential, lambda value: value * value)
    update(
        threaded,
        lambda value: value * value,
        executor=ThreadedExecutor(worker_count=2, band_count=band_count),
    )

    np.testing.assert_array_equal(sequential.to_array(), threaded.to_array())
