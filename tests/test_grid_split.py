import numpy as np
import pytest

from grid_split import flatten_tiles, split_into_grid


def _numbered(h: int, w: int) -> np.ndarray:
    return np.arange(h * w, dtype=np.int32).reshape(h, w)


def test_square_image_splits_evenly():
    image = np.zeros((300, 300, 3), dtype=np.uint8)
    tiles = split_into_grid(image, grid_size=3)
    assert len(tiles) == 3
    assert all(len(row) == 3 for row in tiles)
    assert all(tile.shape == (100, 100, 3) for row in tiles for tile in row)


def test_tiles_are_taken_by_row_then_column():
    image = _numbered(90, 120)
    tiles = split_into_grid(image, grid_size=3)
    # 90 // 3 on the shorter axis
    assert tiles[0][0].shape == (30, 30)
    np.testing.assert_array_equal(tiles[1][2], image[30:60, 60:90])
    np.testing.assert_array_equal(tiles[2][0], image[60:90, 0:30])


def test_remainder_pixels_are_dropped():
    image = _numbered(100, 100)
    tiles = split_into_grid(image, grid_size=3)
    assert tiles[2][2].shape == (33, 33)
    np.testing.assert_array_equal(tiles[2][2], image[66:99, 66:99])


def test_tiles_are_copies():
    image = np.zeros((30, 30), dtype=np.uint8)
    tiles = split_into_grid(image, grid_size=3)
    tiles[0][0][:] = 255
    assert image.max() == 0


def test_flatten_is_row_major():
    image = _numbered(20, 20)
    flat = flatten_tiles(split_into_grid(image, grid_size=2))
    assert len(flat) == 4
    np.testing.assert_array_equal(flat[1], image[0:10, 10:20])
    np.testing.assert_array_equal(flat[2], image[10:20, 0:10])


@pytest.mark.parametrize("grid_size", [0, -2])
def test_invalid_grid_size(grid_size):
    with pytest.raises(ValueError, match="positive"):
        split_into_grid(np.zeros((9, 9)), grid_size=grid_size)


def test_image_too_small():
    with pytest.raises(ValueError, match="too small"):
        split_into_grid(np.zeros((2, 50)), grid_size=3)
