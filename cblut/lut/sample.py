"""
Applying LUT grids and ramps to 8-bit pixel streams.

Every function takes encoded pixels of shape (..., 3) or (..., 4) and
returns uint8 RGBA of the same leading shape with alpha forced to 255.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from cblut.lut.grid import ColorFunction, grid_bits
from cblut.lut.mono import validate_ramp
from cblut.utils.color import as_rgba8, decode, encode, luminance


def _with_alpha(rgb: np.ndarray) -> np.ndarray:
    out = np.empty(rgb.shape[:-1] + (4,), dtype=np.uint8)
    out[..., :3] = rgb
    out[..., 3] = 255
    return out


def apply_lut(grid: np.ndarray, pixels: np.ndarray, extrapolate: bool = True) -> np.ndarray:
    """
    Apply a LUT grid with per-channel interpolation between two corners.

    Each pixel is located between two diagonal grid corners, ``c0`` at
    indices ``i0`` and ``c1`` at ``i1 = i0 + 1``, and every output channel is
    blended from those two corners with its own fixed-point weight. Pixels
    below the first or above the last cell centre either extrapolate the
    slope of the outermost pair of cells or, with ``extrapolate=False``,
    take the edge cell's value.

    Parameters
    ----------
    grid : np.ndarray
        uint8 LUT grid, shape (N, N, N, 4), indexed [b][g][r]
    pixels : np.ndarray
        uint8 RGB(A) pixels, shape (..., 3) or (..., 4)
    extrapolate : bool
        Extrapolate beyond the outermost cell centres instead of clamping
    """

    bits = grid_bits(grid)
    size = 1 << bits
    f_shift = 8 - bits
    f_half = 1 << (f_shift - 1)
    step = 1 << f_shift  # one grid cell in fractional units
    f_mask = step - 1

    pixels = as_rgba8(pixels)

    co = pixels[..., :3].astype(np.int32) + f_half
    i1 = co >> f_shift
    i0 = i1 - 1
    s = co & f_mask

    below = i0 < 0
    above = ~below & (i1 >= size)

    i0 = np.where(below, i0 + 1, i0)
    i1 = np.where(above, i1 - 1, i1)
    if extrapolate:
        i1 = np.where(below, i1 + 1, i1)
        s = np.where(below, s - step, s)
        i0 = np.where(above, i0 - 1, i0)
        s = np.where(above, s + step, s)

    if (
        np.any(i0 < 0)
        or np.any(i0 >= size)
        or np.any(i1 < 0)
        or np.any(i1 >= size)
    ):
        raise RuntimeError("LUT boundary handling produced an out-of-range grid index")

    c0 = grid[i0[..., 2], i0[..., 1], i0[..., 0], :3].astype(np.int32)
    c1 = grid[i1[..., 2], i1[..., 1], i1[..., 0], :3].astype(np.int32)

    # Arithmetic shift, so negative extrapolated sums floor towards -inf.
    channels = ((step - s) * c0 + s * c1) >> f_shift
    channels = np.clip(channels, 0, 255)

    return _with_alpha(channels)


def apply_lut_nearest(grid: np.ndarray, pixels: np.ndarray) -> np.ndarray:
    """Point-sample a LUT grid by truncating each channel to the grid's bit width."""

    bits = grid_bits(grid)
    f_shift = 8 - bits

    pixels = as_rgba8(pixels)
    index = pixels[..., :3] >> f_shift

    return _with_alpha(grid[index[..., 2], index[..., 1], index[..., 0], :3])


def apply_mono_lut(
    ramp: np.ndarray,
    pixels: np.ndarray,
    channel: Optional[Union[int, str]] = None,
) -> np.ndarray:
    """
    Map pixels through a 256-entry mono -> RGBA ramp.

    Parameters
    ----------
    ramp : np.ndarray
        uint8 RGBA ramp, shape (256, 4)
    pixels : np.ndarray
        uint8 RGB(A) pixels
    channel : int, "luminance" or None
        Channel (0-3) used to index the ramp. None or "luminance" uses the
        sRGB/D65 luminance of the decoded colour, re-encoded to 8 bits.
    """

    ramp = validate_ramp(ramp)
    pixels = as_rgba8(pixels)

    if channel is None or (isinstance(channel, str) and channel == "luminance"):
        lum = luminance(decode(pixels))
        grey = np.repeat(np.expand_dims(lum, -1), 3, axis=-1)
        index = encode(grey)[..., 0]
    elif isinstance(channel, (int, np.integer)) and 0 <= channel < 4:
        index = pixels[..., channel]
    else:
        raise ValueError(f"Mono LUT channel must be 0-3 or 'luminance', got {channel!r}")

    return _with_alpha(ramp[index, :3])


def transform_pixels(transform: ColorFunction, pixels: np.ndarray) -> np.ndarray:
    """Apply a linear RGB transform to every pixel directly, without a LUT."""

    return encode(transform(decode(pixels)))
