"""
3-D LUT grid construction and the LUT image format.

A grid is a uint8 array of shape (N, N, N, 4) indexed ``[b][g][r]``, with
``N = 1 << bits``. Each cell holds the transformed colour of the centre of
its 8-bit input bucket.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from cblut.core.config import LUTLayout
from cblut.utils.color import as_rgba8, decode_centered, encode_centered

logger = logging.getLogger(__name__)

LUT_BITS = 5
LUT_SIZE = 1 << LUT_BITS

ColorFunction = Callable[[np.ndarray], np.ndarray]


def lut_bits(size: int) -> int:
    """Bit width of a LUT edge length; the edge must be a power of two."""

    if size < 2 or size > 128 or size & (size - 1):
        raise ValueError(f"LUT size {size} must be a power of two in [2, 128]")
    return size.bit_length() - 1


def grid_bits(grid: np.ndarray) -> int:
    """Validate a LUT grid and return its bit width."""

    if grid.ndim != 4 or grid.shape[-1] != 4 or len(set(grid.shape[:3])) != 1:
        raise ValueError(f"Expected N x N x N x 4 LUT grid, got shape {grid.shape}")
    if grid.dtype != np.uint8:
        raise ValueError(f"Expected uint8 LUT grid, got {grid.dtype}")
    return lut_bits(grid.shape[0])


def _cell_centres(size: int) -> np.ndarray:
    """8-bit RGBA of every cell centre, shape (N, N, N, 4), indexed [b][g][r]."""

    scale = 256 // size
    offset = scale // 2
    centres = np.arange(size) * scale + offset

    b, g, r = np.meshgrid(centres, centres, centres, indexing="ij")
    alpha = np.full_like(r, 255)
    return np.stack([r, g, b, alpha], axis=-1).astype(np.uint8)


def identity_lut(size: int = LUT_SIZE) -> np.ndarray:
    """Exact identity grid, each cell storing its own centre."""

    lut_bits(size)
    return _cell_centres(size)


def build_lut(transform: ColorFunction, size: int = LUT_SIZE) -> np.ndarray:
    """
    Bake a linear RGB -> linear RGB transform into a LUT grid.

    Parameters
    ----------
    transform : callable
        Vectorised transform taking and returning linear RGB, shape (..., 3)
    size : int
        Grid edge length, a power of two (32 by default)
    """

    lut_bits(size)
    logger.debug("Building %dx%dx%d LUT", size, size, size)

    rgb = decode_centered(_cell_centres(size))
    result = np.asarray(transform(rgb))

    if result.shape != rgb.shape:
        raise ValueError(
            f"Transform changed the colour array shape from {rgb.shape} to {result.shape}"
        )

    return encode_centered(result)


def lut_to_image(grid: np.ndarray, layout: LUTLayout = LUTLayout.BLUE_TILES) -> np.ndarray:
    """
    Lay a grid out as an RGBA image of height N and width N^2.

    With the default layout, pixel (x = r + b * N, y = g) holds cell [b][g][r],
    i.e. one N x N tile per blue slice, side by side.
    """

    grid_bits(grid)
    size = grid.shape[0]

    if layout == LUTLayout.BLUE_TILES:
        image = grid.transpose(1, 0, 2, 3)
    elif layout == LUTLayout.BLUE_ROWS:
        image = grid
    else:
        raise ValueError(f"Unknown LUT layout: {layout}")

    return np.ascontiguousarray(image.reshape(size, size * size, 4))


def lut_from_image(
    image: np.ndarray,
    size: int = LUT_SIZE,
    layout: LUTLayout = LUTLayout.BLUE_TILES,
) -> np.ndarray:
    """Recover a grid from its image form, rejecting mismatched dimensions."""

    lut_bits(size)
    image = as_rgba8(image)

    if image.ndim != 3:
        raise ValueError(f"Expected H x W x 4 LUT image, got shape {image.shape}")

    height, width = image.shape[:2]
    if width != size * size:
        raise ValueError(f"Expecting RGB LUT width of {size * size}, got {width}")
    if height != size:
        raise ValueError(f"Expecting RGB LUT height of {size}, got {height}")

    cube = image.reshape(size, size, size, 4)

    if layout == LUTLayout.BLUE_TILES:
        grid = cube.transpose(1, 0, 2, 3)
    elif layout == LUTLayout.BLUE_ROWS:
        grid = cube
    else:
        raise ValueError(f"Unknown LUT layout: {layout}")

    return np.ascontiguousarray(grid)
