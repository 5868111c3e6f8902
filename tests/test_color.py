"""
Tests for gamma encoding and the RGB <-> LMS conversions.
"""

from __future__ import annotations

import numpy as np
import pytest

from cblut.utils.color import (
    as_rgba8,
    decode,
    decode_centered,
    encode,
    encode_centered,
    lms_to_rgb,
    luminance,
    rgb_to_lms,
)


def _all_levels() -> np.ndarray:
    levels = np.arange(256, dtype=np.uint8)
    alpha = np.full(256, 255, dtype=np.uint8)
    return np.stack([levels, levels[::-1], levels, alpha], axis=-1)


def test_encode_inverts_decode_for_every_level() -> None:
    pixels = _all_levels()
    np.testing.assert_array_equal(encode(decode(pixels)), pixels)


def test_centered_pair_round_trips_cell_centres() -> None:
    centres = (np.arange(32) * 8 + 4).astype(np.uint8)
    pixels = np.stack([centres, centres[::-1], centres], axis=-1)
    result = encode_centered(decode_centered(pixels))
    np.testing.assert_array_equal(result[..., :3], pixels)
    assert np.all(result[..., 3] == 255)


def test_decode_ignores_alpha() -> None:
    rgb = np.array([10, 128, 250], dtype=np.uint8)
    rgba = np.array([10, 128, 250, 0], dtype=np.uint8)
    np.testing.assert_array_equal(decode(rgb), decode(rgba))


def test_decode_is_gamma_curve() -> None:
    rgb = decode(np.array([0, 51, 255], dtype=np.uint8))
    np.testing.assert_allclose(rgb, [0.0, 0.2 ** 2.2, 1.0])


def test_encode_clamps_out_of_gamut_values() -> None:
    pixel = encode(np.array([-0.5, 1.5, 0.0]))
    np.testing.assert_array_equal(pixel, [0, 255, 0, 255])


def test_encode_centered_saturates_at_one() -> None:
    pixel = encode_centered(np.array([1.0, 1.0 - 1e-12, 0.0]))
    assert pixel[0] == 255
    assert pixel[1] == 255
    assert pixel[2] == 0


def test_lms_round_trip() -> None:
    rgb = np.random.rand(16, 16, 3)
    np.testing.assert_allclose(lms_to_rgb(rgb_to_lms(rgb)), rgb, atol=1e-5)


def test_white_is_near_unit_lms() -> None:
    np.testing.assert_allclose(rgb_to_lms(np.ones(3)), np.ones(3), atol=1e-3)


def test_luminance_weights() -> None:
    assert luminance(np.ones(3)) == pytest.approx(1.0)
    assert luminance(np.array([0.0, 1.0, 0.0])) == pytest.approx(0.7152)


def test_as_rgba8_appends_opaque_alpha() -> None:
    pixels = as_rgba8(np.zeros((2, 2, 3), dtype=np.uint8))
    assert pixels.shape == (2, 2, 4)
    assert np.all(pixels[..., 3] == 255)


def test_as_rgba8_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        as_rgba8(np.zeros((4, 4, 2), dtype=np.uint8))
    with pytest.raises(ValueError):
        as_rgba8(np.array([0, 300, 0]))
