import numpy as np
import pytest

from polytrack.topomap import projection_maps


def test_single_pixel_lands_in_each_plane():
    frame = np.array([[[10, 20, 30]]], dtype=np.uint8)
    maps = projection_maps(frame)
    assert maps.rg.shape == (256, 256, 3)
    assert maps.rg[10, 20].tolist() == [10, 20, 30]
    assert maps.rb[10, 30].tolist() == [10, 20, 30]
    assert maps.gb[20, 30].tolist() == [10, 20, 30]
    assert int(maps.rg.sum()) == 60
    assert int(maps.rb.sum()) == 60
    assert int(maps.gb.sum()) == 60


def test_later_pixel_wins():
    frame = np.array([[[1, 2, 3], [1, 2, 9]]], dtype=np.uint8)
    maps = projection_maps(frame)
    assert maps.rg[1, 2].tolist() == [1, 2, 9]
    assert maps.rb[1, 3].tolist() == [1, 2, 3]
    assert maps.rb[1, 9].tolist() == [1, 2, 9]


def test_cells_hold_matching_channels():
    rng = np.random.default_rng(0)
    frame = rng.integers(0, 256, size=(12, 17, 3), dtype=np.uint8)
    maps = projection_maps(frame)
    rows, cols = np.nonzero(maps.rg.any(axis=2))
    assert np.array_equal(maps.rg[rows, cols, 0], rows.astype(np.uint8))
    assert np.array_equal(maps.rg[rows, cols, 1], cols.astype(np.uint8))
    rows, cols = np.nonzero(maps.gb.any(axis=2))
    assert np.array_equal(maps.gb[rows, cols, 1], rows.astype(np.uint8))
    assert np.array_equal(maps.gb[rows, cols, 2], cols.astype(np.uint8))


def test_every_pixel_is_represented():
    frame = np.array([[[5, 6, 7], [200, 100, 50]], [[0, 255, 128], [9, 9, 9]]], dtype=np.uint8)
    maps = projection_maps(frame)
    for r, g, b in frame.reshape(-1, 3).tolist():
        assert maps.rg[r, g].tolist() == [r, g, b]


def test_black_frame_stays_black():
    maps = projection_maps(np.zeros((4, 4, 3), dtype=np.uint8))
    assert not maps.rg.any()
    assert not maps.gb.any()


def test_bad_shape_rejected():
    with pytest.raises(ValueError):
        projection_maps(np.zeros((4, 4), dtype=np.uint8))
    with pytest.raises(ValueError):
        projection_maps(np.zeros((4, 4, 4), dtype=np.uint8))


def test_out_of_range_values_rejected():
    with pytest.raises(ValueError):
        projection_maps(np.full((1, 1, 3), 300, dtype=np.int32))