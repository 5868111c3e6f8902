"""
Gamma encoding and RGB <-> LMS basis changes.

All colour arrays carry the colour on their trailing axis, so the same
functions work on a single colour ``(3,)``, a pixel list ``(N, 3)`` or an
image ``(H, W, 3)``. Encoded pixels are uint8 RGBA with a trailing axis of 4.
"""

from __future__ import annotations

import numpy as np

GAMMA = 2.2

# Absorbs round-off in the gamma round trip so LUT cell centres encode back
# to themselves under truncation.
_CENTERED_EPSILON = 1e-6

# LMS colour space, models human eye response (ixora.io revision of the
# Vienot et al. approach, normalised so that white maps to roughly (1, 1, 1)).
LMS_FROM_RGB = np.array(
    [
        [0.31399022, 0.63951294, 0.04649755],
        [0.15537241, 0.75789446, 0.08670142],
        [0.01775239, 0.10944209, 0.87256922],
    ]
)

RGB_FROM_LMS = np.array(
    [
        [5.47221206, -4.6419601, 0.16963708],
        [-1.1252419, 2.29317094, -0.1678952],
        [0.02980165, -0.19318073, 1.16364789],
    ]
)

# Weighted LMS basis from Vienot et al. "Digital video colourmaps for checking
# the legibility of displays by dichromats". Only daltonisation uses it; it is
# not interchangeable with LMS_FROM_RGB (red -> (17.9, 3.5, 0.03) here).
LMS_FROM_RGB_VIENOT = np.array(
    [
        [17.8824, 43.5161, 4.11935],
        [3.45565, 27.1554, 3.86714],
        [0.0299566, 0.184309, 1.46709],
    ]
)

RGB_FROM_LMS_VIENOT = np.array(
    [
        [0.0809444479, -0.130504409, 0.116721066],
        [-0.0102485335, 0.0540193266, -0.113614708],
        [-0.000365296938, -0.00412161469, 0.693511405],
    ]
)

# sRGB (D65) luminance weights
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])

for _matrix in (
    LMS_FROM_RGB,
    RGB_FROM_LMS,
    LMS_FROM_RGB_VIENOT,
    RGB_FROM_LMS_VIENOT,
    LUMINANCE_WEIGHTS,
):
    _matrix.setflags(write=False)


def mat_mul(matrix: np.ndarray, colors: np.ndarray) -> np.ndarray:
    """Apply a 3x3 matrix to every colour on the trailing axis."""

    return np.dot(colors, matrix.T)


def dot(weights: np.ndarray, colors: np.ndarray) -> np.ndarray:
    """Weighted sum over the trailing colour axis."""

    return np.dot(colors, weights)


def clamp_unit(rgb: np.ndarray) -> np.ndarray:
    return np.clip(rgb, 0.0, 1.0)


def as_rgba8(pixels: np.ndarray) -> np.ndarray:
    """
    Validate an encoded pixel array and return it as uint8 RGBA.

    Arrays with a trailing axis of 3 gain an opaque alpha channel.
    """

    pixels = np.asarray(pixels)
    if pixels.ndim == 0 or pixels.shape[-1] not in (3, 4):
        raise ValueError(f"Expected pixels with 3 or 4 channels, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        if np.any(pixels < 0) or np.any(pixels > 255):
            raise ValueError("Pixel values must lie in [0, 255]")
        pixels = pixels.astype(np.uint8)
    if pixels.shape[-1] == 3:
        alpha = np.full(pixels.shape[:-1] + (1,), 255, dtype=np.uint8)
        pixels = np.concatenate([pixels, alpha], axis=-1)
    return pixels


def _decode(pixels: np.ndarray, scale: float) -> np.ndarray:
    pixels = as_rgba8(pixels)
    return np.power(pixels[..., :3].astype(np.float64) / scale, GAMMA)


def _encode(rgb: np.ndarray, scale: float, rounding: float) -> np.ndarray:
    rgb = np.asarray(rgb, dtype=np.float64)
    # Clipping first keeps the power curve real-valued; 0 and 1 are fixed points.
    f = np.power(clamp_unit(rgb), 1.0 / GAMMA)
    channels = np.floor(f * scale + rounding)
    channels = np.where(f >= 1.0, 255.0, channels)
    channels = np.clip(channels, 0.0, 255.0).astype(np.uint8)

    out = np.empty(rgb.shape[:-1] + (4,), dtype=np.uint8)
    out[..., :3] = channels
    out[..., 3] = 255
    return out


def decode(pixels: np.ndarray) -> np.ndarray:
    """
    Convert 8-bit gamma-encoded pixels to linear RGB.

    Parameters
    ----------
    pixels : np.ndarray
        uint8 RGB or RGBA, shape (..., 3) or (..., 4). Alpha is ignored.
    """

    return _decode(pixels, 255.0)


def encode(rgb: np.ndarray) -> np.ndarray:
    """Convert linear RGB to 8-bit RGBA, rounding to nearest, alpha 255."""

    return _encode(rgb, 255.0, 0.5)


def decode_centered(pixels: np.ndarray) -> np.ndarray:
    """
    256-scale decode used when sampling LUT cell centres.

    Must be paired with :func:`encode_centered`, never with :func:`encode`.
    """

    return _decode(pixels, 256.0)


def encode_centered(rgb: np.ndarray) -> np.ndarray:
    """256-scale, truncating encode used when storing LUT cells."""

    return _encode(rgb, 256.0, _CENTERED_EPSILON)


def rgb_to_lms(rgb: np.ndarray) -> np.ndarray:
    """Convert linear RGB to LMS (cone space). Linear values only."""

    return mat_mul(LMS_FROM_RGB, rgb)


def lms_to_rgb(lms: np.ndarray) -> np.ndarray:
    """Convert LMS back to linear RGB."""

    return mat_mul(RGB_FROM_LMS, lms)


def rgb_to_lms_vienot(rgb: np.ndarray) -> np.ndarray:
    return mat_mul(LMS_FROM_RGB_VIENOT, rgb)


def lms_vienot_to_rgb(lms: np.ndarray) -> np.ndarray:
    return mat_mul(RGB_FROM_LMS_VIENOT, lms)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """
    Compute sRGB/D65 luminance from linear RGB.

    Parameters
    ----------
    rgb : np.ndarray
        Linear RGB, shape (..., 3)
    """

    return dot(LUMINANCE_WEIGHTS, rgb)
