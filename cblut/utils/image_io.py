"""
PNG reading and writing for RGBA8 images.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from cblut.utils.color import as_rgba8

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_rgba(path: PathLike) -> np.ndarray:
    """Load an image as an (H, W, 4) uint8 RGBA array."""

    with Image.open(path) as img:
        return np.array(img.convert("RGBA"), dtype=np.uint8)


def save_rgba(path: PathLike, pixels: np.ndarray) -> Path:
    """Save an (H, W, 3|4) uint8 array as a PNG."""

    path = Path(path)
    pixels = as_rgba8(pixels)
    if pixels.ndim != 3:
        raise ValueError(f"Expected H×W×4 image, got shape {pixels.shape}")

    logger.info("Saving %s", path)
    Image.fromarray(np.ascontiguousarray(pixels)).save(path)
    return path


def image_stem(path: PathLike) -> str:
    """Base name of an image file without directory or extension."""

    return Path(path).stem
