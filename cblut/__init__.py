"""Colour-blind LUTs (cblut).

Simulation of and correction for dichromatic colour vision, with any
per-pixel colour transform baked into a 32^3 lookup table.
"""

from cblut.core.config import CBLutConfig, Deficiency, ImageOp, LUTLayout
from cblut.core.pipeline import CBLutGenerator, make_swatch, process_image
from cblut.lut import apply_lut, apply_lut_nearest, apply_mono_lut, build_lut
from cblut.vision import LMSChannel, correct, daltonise, simulate
from cblut.vision.factory import create_transform

__all__ = [
    "CBLutGenerator",
    "CBLutConfig",
    "Deficiency",
    "ImageOp",
    "LUTLayout",
    "LMSChannel",
    "simulate",
    "daltonise",
    "correct",
    "create_transform",
    "build_lut",
    "apply_lut",
    "apply_lut_nearest",
    "apply_mono_lut",
    "make_swatch",
    "process_image",
]

__version__ = "1.0.0"
