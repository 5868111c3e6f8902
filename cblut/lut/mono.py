"""
Mono -> RGBA ramps for false-colour visualisation.

Ramps are 256-entry uint8 RGBA tables, typically gamma-encoded
colourblind-savvy maps such as cividis or viridis supplied as images.
"""

from __future__ import annotations

import numpy as np

from cblut.utils.color import as_rgba8

RAMP_SIZE = 256


def validate_ramp(ramp: np.ndarray) -> np.ndarray:
    ramp = as_rgba8(ramp)
    if ramp.shape != (RAMP_SIZE, 4):
        raise ValueError(f"Expected {RAMP_SIZE} x 4 mono ramp, got shape {ramp.shape}")
    return ramp


def grey_ramp() -> np.ndarray:
    """Identity ramp: entry i is the opaque grey (i, i, i)."""

    values = np.arange(RAMP_SIZE, dtype=np.uint8)
    ramp = np.empty((RAMP_SIZE, 4), dtype=np.uint8)
    ramp[:, :3] = values[:, np.newaxis]
    ramp[:, 3] = 255
    return ramp


def ramp_from_image(image: np.ndarray) -> np.ndarray:
    """Read a ramp from the first row of a 256-wide image."""

    image = as_rgba8(image)
    if image.ndim != 3:
        raise ValueError(f"Expected H x W x 4 ramp image, got shape {image.shape}")
    if image.shape[1] != RAMP_SIZE:
        raise ValueError(f"Expecting mono LUT width of {RAMP_SIZE}, got {image.shape[1]}")
    return image[0].copy()


def ramp_to_image(ramp: np.ndarray, height: int = 8) -> np.ndarray:
    """Repeat a ramp vertically into a 256 x ``height`` strip."""

    ramp = validate_ramp(ramp)
    return np.repeat(ramp[np.newaxis], height, axis=0)
