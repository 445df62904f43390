"""Unit tests for the zero-copy storage adapters."""

import numpy as np
import pytest

from pixcore import ArrayView, Buffer, ChannelView, MutableImage, Region, RegionView, Size
from pixcore.image import grid_of


def test_array_view_reads_and_writes_through() -> None:
    array = np.zeros((2, 3), dtype=np.uint8)
    view = ArrayView(array)

    view.set(2, 1, 42)

    assert view.size() == Size(3, 2)
    assert array[1, 2] == 42
    assert view.get(2, 1) == 42
    assert isinstance(view, MutableImage)


def test_array_view_rejects_non_2d_arrays() -> None:
    with pytest.raises(ValueError, match="2D"):
        ArrayView(np.zeros((2, 2, 3)))


def test_channel_view_addresses_a_single_channel() -> None:
    array = np.zeros((2, 2, 3), dtype=np.uint8)
    array[..., 1] = 7
    view = ChannelView(array, 1)

    view.set(0, 0, 9)

    assert view.get(1, 1) == 7
    assert array[0, 0].tolist() == [0, 9, 0]
    np.testing.assert_array_equal(view.grid(), array[:, :, 1])


def test_channel_view_rejects_missing_channel() -> None:
    with pytest.raises(ValueError, match="channel"):
        ChannelView(np.zeros((2, 2, 3)), 3)


def test_region_view_translates_coordinates(counting_5x5: Buffer) -> None:
    """Pixel ``(0, 0)`` of a region view is the region's top-left corner."""

    view = RegionView(counting_5x5, Region(range(1, 4), range(2, 5)))

    assert view.size() == Size(3, 3)
    assert view.get(0, 0) == 12
    assert view.get(2, 2) == 24

    view.set(1, 1, -1)

    assert counting_5x5.get(2, 3) == -1


def test_region_view_grid_is_a_window_of_the_parent(counting_5x5: Buffer) -> None:
    view = RegionView(counting_5x5, Region(range(1, 3), range(0, 2)))

    grid = grid_of(view)

    assert grid is not None
    assert grid.tolist() == [[2, 3], [7, 8]]


def test_region_view_over_foreign_image_has_no_grid() -> None:
    class Constant:
        def size(self) -> Size:
            return Size(3, 3)

        def get(self, x: int, y: int) -> int:
            return 1

    view = RegionView(Constant(), Region(range(0, 2), range(0, 2)))

    assert grid_of(view) is None
    assert view.get(1, 1) == 1


def test_region_view_rejects_regions_outside_the_image(counting_4x3: Buffer) -> None:
    with pytest.raises(ValueError, match="inside"):
        RegionView(counting_4x3, Region(range(2, 5), range(0, 1)))
