"""3-D LUT construction and sampling."""

from cblut.lut.grid import (
    LUT_BITS,
    LUT_SIZE,
    build_lut,
    identity_lut,
    lut_from_image,
    lut_to_image,
)
from cblut.lut.mono import grey_ramp, ramp_from_image, ramp_to_image
from cblut.lut.sample import apply_lut, apply_lut_nearest, apply_mono_lut, transform_pixels

__all__ = [
    "LUT_BITS",
    "LUT_SIZE",
    "build_lut",
    "identity_lut",
    "lut_to_image",
    "lut_from_image",
    "apply_lut",
    "apply_lut_nearest",
    "apply_mono_lut",
    "transform_pixels",
    "grey_ramp",
    "ramp_from_image",
    "ramp_to_image",
]
