"""
Tests for LUT baking, sampling, image layout and mono ramps.
"""

from __future__ import annotations

import numpy as np
import pytest

from cblut import LMSChannel, LUTLayout
from cblut.lut import (
    apply_lut,
    apply_lut_nearest,
    apply_mono_lut,
    build_lut,
    grey_ramp,
    identity_lut,
    lut_from_image,
    lut_to_image,
    ramp_from_image,
    ramp_to_image,
    transform_pixels,
)
from cblut.lut.grid import lut_bits
from cblut.vision.simulate import simulate


def _random_pixels(shape=(64, 64)) -> np.ndarray:
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=shape + (4,), dtype=np.uint8)
    return pixels


def _level_sweep() -> np.ndarray:
    levels = np.arange(256, dtype=np.uint8)
    return np.stack([levels, levels[::-1], np.roll(levels, 100)], axis=-1)


def test_lut_bits() -> None:
    assert lut_bits(32) == 5
    assert lut_bits(2) == 1
    assert lut_bits(128) == 7
    for size in (0, 1, 3, 48, 256):
        with pytest.raises(ValueError):
            lut_bits(size)


def test_identity_lut_cell_centres() -> None:
    grid = identity_lut()
    assert grid.shape == (32, 32, 32, 4)
    assert grid.dtype == np.uint8
    # [b][g][r] indexing
    np.testing.assert_array_equal(grid[1, 2, 3], [3 * 8 + 4, 2 * 8 + 4, 1 * 8 + 4, 255])


def test_identity_transform_bakes_identity_grid() -> None:
    grid = build_lut(lambda rgb: rgb)
    np.testing.assert_array_equal(grid, identity_lut())


@pytest.mark.parametrize("size", [4, 16, 32, 64])
def test_identity_grid_applies_exactly(size: int) -> None:
    grid = identity_lut(size)
    pixels = _level_sweep()
    result = apply_lut(grid, pixels)
    np.testing.assert_array_equal(result[..., :3], pixels)
    assert np.all(result[..., 3] == 255)


def test_identity_round_trip_within_one_level() -> None:
    pixels = _random_pixels()
    result = apply_lut(build_lut(lambda rgb: rgb), pixels)
    diff = np.abs(result[..., :3].astype(int) - pixels[..., :3].astype(int))
    assert diff.max() <= 1
    assert np.all(result[..., 3] == 255)


def test_gain_lut_tracks_direct_transform() -> None:
    def gain(rgb: np.ndarray) -> np.ndarray:
        return 0.5 * rgb

    pixels = _random_pixels()
    via_lut = apply_lut(build_lut(gain), pixels).astype(int)
    direct = transform_pixels(gain, pixels).astype(int)
    assert np.abs(via_lut - direct).mean() < 4


def test_simulation_lut_tracks_direct_transform() -> None:
    def protan(rgb: np.ndarray) -> np.ndarray:
        return simulate(rgb, LMSChannel.L)

    pixels = _random_pixels()
    via_lut = apply_lut(build_lut(protan), pixels).astype(int)
    direct = transform_pixels(protan, pixels).astype(int)
    assert np.abs(via_lut - direct).mean() < 5


def test_extrapolation_reaches_the_ends() -> None:
    grid = identity_lut()
    black = np.array([0, 0, 0, 255], dtype=np.uint8)
    white = np.array([255, 255, 255, 255], dtype=np.uint8)

    np.testing.assert_array_equal(apply_lut(grid, black), black)
    np.testing.assert_array_equal(apply_lut(grid, white), white)

    # Nearest sampling and clamped interpolation stop at the outermost centres
    np.testing.assert_array_equal(apply_lut_nearest(grid, black)[:3], [4, 4, 4])
    np.testing.assert_array_equal(apply_lut_nearest(grid, white)[:3], [252, 252, 252])
    np.testing.assert_array_equal(apply_lut(grid, black, extrapolate=False)[:3], [4, 4, 4])
    np.testing.assert_array_equal(apply_lut(grid, white, extrapolate=False)[:3], [252, 252, 252])


def test_extrapolation_clamps_to_byte_range() -> None:
    def boost(rgb: np.ndarray) -> np.ndarray:
        return 1.5 * rgb

    grid = build_lut(boost)
    result = apply_lut(grid, np.array([255, 255, 255], dtype=np.uint8))
    np.testing.assert_array_equal(result, [255, 255, 255, 255])


def test_nearest_agrees_with_grid_axes() -> None:
    def swap_red_blue(rgb: np.ndarray) -> np.ndarray:
        return rgb[..., ::-1]

    grid = build_lut(swap_red_blue)
    result = apply_lut_nearest(grid, np.array([255, 0, 0], dtype=np.uint8))
    np.testing.assert_array_equal(result, [4, 4, 252, 255])


def test_apply_lut_rejects_bad_grid() -> None:
    with pytest.raises(ValueError):
        apply_lut(np.zeros((32, 32, 16, 4), dtype=np.uint8), _random_pixels())
    with pytest.raises(ValueError):
        apply_lut(np.zeros((24, 24, 24, 4), dtype=np.uint8), _random_pixels())


def test_lut_image_layout() -> None:
    grid = identity_lut()
    image = lut_to_image(grid)
    assert image.shape == (32, 1024, 4)

    for i, j, k in [(0, 0, 0), (1, 2, 3), (31, 0, 5), (7, 31, 31)]:
        np.testing.assert_array_equal(image[j, k + i * 32], grid[i, j, k])


def test_lut_image_raw_layout() -> None:
    grid = identity_lut()
    image = lut_to_image(grid, LUTLayout.BLUE_ROWS)
    for i, j, k in [(1, 2, 3), (31, 0, 5)]:
        np.testing.assert_array_equal(image[i, k + j * 32], grid[i, j, k])


@pytest.mark.parametrize("layout", list(LUTLayout))
def test_lut_image_recovers_grid(layout: LUTLayout) -> None:
    grid = build_lut(lambda rgb: simulate(rgb, LMSChannel.S), 16)
    image = lut_to_image(grid, layout)
    np.testing.assert_array_equal(lut_from_image(image, 16, layout), grid)


def test_lut_from_image_checks_dimensions() -> None:
    with pytest.raises(ValueError, match="width"):
        lut_from_image(np.zeros((32, 512, 4), dtype=np.uint8))
    with pytest.raises(ValueError, match="height"):
        lut_from_image(np.zeros((16, 1024, 4), dtype=np.uint8))


def test_build_lut_rejects_shape_change() -> None:
    with pytest.raises(ValueError):
        build_lut(lambda rgb: rgb[..., :2])


def test_mono_luminance_of_grey() -> None:
    rng = np.random.default_rng(3)
    ramp = rng.integers(0, 256, size=(256, 4), dtype=np.uint8)
    grey = np.array([128, 128, 128, 255], dtype=np.uint8)

    by_luminance = apply_mono_lut(ramp, grey)
    by_channel = apply_mono_lut(ramp, grey, channel=0)
    np.testing.assert_array_equal(by_luminance, by_channel)
    np.testing.assert_array_equal(by_channel[:3], ramp[128, :3])
    assert by_channel[3] == 255


def test_mono_channel_selects_index() -> None:
    ramp = grey_ramp()
    pixels = np.array([[10, 20, 30, 40]], dtype=np.uint8)
    np.testing.assert_array_equal(apply_mono_lut(ramp, pixels, channel=2), [[30, 30, 30, 255]])
    np.testing.assert_array_equal(apply_mono_lut(ramp, pixels, channel=3), [[40, 40, 40, 255]])
    np.testing.assert_array_equal(
        apply_mono_lut(ramp, pixels, channel="luminance"), apply_mono_lut(ramp, pixels)
    )


def test_mono_rejects_bad_channel_and_ramp() -> None:
    with pytest.raises(ValueError):
        apply_mono_lut(grey_ramp(), _random_pixels(), channel=4)
    with pytest.raises(ValueError):
        apply_mono_lut(grey_ramp()[:128], _random_pixels())


def test_ramp_image_round_trip() -> None:
    strip = ramp_to_image(grey_ramp())
    assert strip.shape == (8, 256, 4)
    np.testing.assert_array_equal(ramp_from_image(strip), grey_ramp())

    with pytest.raises(ValueError):
        ramp_from_image(np.zeros((8, 128, 4), dtype=np.uint8))
