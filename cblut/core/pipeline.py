"""
Main cblut processing driver.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np

from cblut.core.config import CBLutConfig, Deficiency, ImageOp
from cblut.lut.grid import build_lut, identity_lut, lut_from_image, lut_to_image
from cblut.lut.mono import ramp_to_image
from cblut.lut.sample import apply_lut, apply_mono_lut, transform_pixels
from cblut.utils.color import as_rgba8, encode, lms_to_rgb
from cblut.vision.constants import LMSChannel
from cblut.vision.factory import create_transform
from cblut.vision.simulate import lms_swap, remap_to_s

logger = logging.getLogger(__name__)

# ("swap", channel) exchanges two LMS channels, ("remap", channel) folds a
# protan or deutan image onto S.
PreprocessStep = Tuple[str, LMSChannel]

_PREPROCESSORS = {
    "swap": lms_swap,
    "remap": remap_to_s,
}


class CBLutGenerator:
    """
    Colour-blind simulation and correction driver.

    For every requested operation and deficiency the generator either:
        1. bakes a LUT and returns it in image form (no input image),
        2. bakes a LUT and applies it to the input image, or
        3. transforms every pixel of the input image directly (``use_lut=False``).
    """

    def __init__(self, config: Optional[CBLutConfig] = None) -> None:
        self.config = config or CBLutConfig()
        self.config.validate()

        size = self.config.lut_size
        logger.info("Initializing cblut")
        logger.info("  Deficiency: %s", self.config.deficiency.value)
        logger.info("  Strength: %.3f", self.config.strength)
        if self.config.use_lut:
            logger.info(
                "  LUT: %dx%dx%d, extrapolate=%s", size, size, size, self.config.extrapolate
            )
        else:
            logger.info("  LUT: disabled, transforming pixels directly")

    def run(
        self,
        op: ImageOp,
        image: Optional[np.ndarray] = None,
        name: Optional[str] = None,
    ) -> Dict[str, np.ndarray]:
        """
        Run one operation for every configured deficiency.

        Returns a mapping from output base name (e.g. ``protanope_simulate_lut``
        or ``photo_deuteranope_correct``) to an RGBA image.
        """

        if image is not None:
            image = self._check_image(image)
            name = name or "image"

        if op == ImageOp.PASS_THROUGH:
            deficiencies: Tuple[Deficiency, ...] = (Deficiency.IDENTITY,)
        else:
            deficiencies = self.config.deficiency.expand()
            if Deficiency.IDENTITY in deficiencies:
                raise ValueError(f"Operation {op.value} needs a colour vision deficiency")

        results: Dict[str, np.ndarray] = {}
        for deficiency in deficiencies:
            key = self._output_name(op, deficiency, name if image is not None else None)
            results[key] = self._run_single(op, deficiency, image)

        return results

    def run_all(
        self,
        ops: Iterable[ImageOp],
        image: Optional[np.ndarray] = None,
        name: Optional[str] = None,
    ) -> Dict[str, np.ndarray]:
        """Run several operations in the given order, merging their outputs."""

        results: Dict[str, np.ndarray] = {}
        for op in ops:
            results.update(self.run(op, image, name))
        return results

    def apply_lut_image(self, lut_image: np.ndarray, image: np.ndarray) -> Dict[str, np.ndarray]:
        """Apply a LUT stored in image form to an input image."""

        image = self._check_image(image)
        grid = lut_from_image(lut_image, self.config.lut_size, self.config.lut_layout)

        logger.debug("Applying %d^3 LUT image to %s image", grid.shape[0], image.shape)
        return {"apply_lut": apply_lut(grid, image, extrapolate=self.config.extrapolate)}

    def apply_mono_ramp(
        self,
        ramp: np.ndarray,
        ramp_name: str,
        image: Optional[np.ndarray] = None,
        name: Optional[str] = None,
        channel: Optional[int] = None,
    ) -> Dict[str, np.ndarray]:
        """Apply a mono ramp to an image, or emit the ramp strip itself."""

        if image is None:
            return {f"{ramp_name}_lut": ramp_to_image(ramp)}

        image = self._check_image(image)
        logger.debug(
            "Applying mono ramp %s via %s",
            ramp_name,
            "luminance" if channel is None else f"channel {channel}",
        )
        return {f"{name or 'image'}_{ramp_name}": apply_mono_lut(ramp, image, channel)}

    def preprocess(self, image: np.ndarray, steps: Sequence[PreprocessStep]) -> np.ndarray:
        """Apply LMS swap / remap steps to an input image, in order."""

        image = self._check_image(image)
        for kind, channel in steps:
            if kind not in _PREPROCESSORS:
                raise ValueError(f"Unknown preprocessing step: {kind}")
            logger.debug("Preprocessing: %s %s", kind, LMSChannel(channel).name)
            image = transform_pixels(partial(_PREPROCESSORS[kind], channel=channel), image)
        return image

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_single(
        self,
        op: ImageOp,
        deficiency: Deficiency,
        image: Optional[np.ndarray],
    ) -> np.ndarray:
        transform = create_transform(op, deficiency.channel, self.config.strength)

        if image is not None and not self.config.use_lut:
            logger.debug("%s (%s): transforming pixels directly", op.value, deficiency.value)
            return transform_pixels(transform, image)

        logger.debug("%s (%s): baking LUT", op.value, deficiency.value)
        if op == ImageOp.PASS_THROUGH:
            grid = identity_lut(self.config.lut_size)
        else:
            grid = build_lut(transform, self.config.lut_size)

        if image is None:
            return lut_to_image(grid, self.config.lut_layout)

        return apply_lut(grid, image, extrapolate=self.config.extrapolate)

    @staticmethod
    def _output_name(op: ImageOp, deficiency: Deficiency, image_name: Optional[str]) -> str:
        parts = [image_name] if image_name else []
        parts.append(deficiency.value)
        if op != ImageOp.PASS_THROUGH:
            parts.append(op.value)

        name = "_".join(parts)
        return name if image_name else f"{name}_lut"

    @staticmethod
    def _check_image(image: np.ndarray) -> np.ndarray:
        image = as_rgba8(image)
        if image.ndim != 3:
            raise ValueError(f"Expected H×W×4 image, got shape {image.shape}")
        return image


def make_swatch(size: int = 256) -> np.ndarray:
    """
    Test swatch varying horizontally only in L, and vertically in M and S.

    L and M overlap heavily, so their range is kept narrow to stay within
    the RGB gamut; S is largely independent.
    """

    coords = (np.arange(size) + 0.5) / size
    lms = np.empty((size, size, 3))
    lms[..., 0] = coords[np.newaxis, :]
    lms[..., 1] = coords[:, np.newaxis]
    lms[..., 2] = 1.0 - lms[..., 1]

    lms = 0.75 * (np.array([0.46, 0.45, 0.25]) + np.array([0.08, 0.1, 0.5]) * lms)
    return encode(lms_to_rgb(lms))


def process_image(
    image: np.ndarray,
    op: ImageOp = ImageOp.CORRECT,
    deficiency: Deficiency = Deficiency.PROTANOPE,
    strength: float = 1.0,
    use_lut: bool = True,
) -> np.ndarray:
    """
    Convenience wrapper: apply one operation for one deficiency to an image.
    """

    if deficiency == Deficiency.ALL:
        raise ValueError("process_image needs a single deficiency, not ALL")

    config = CBLutConfig(deficiency=deficiency, strength=strength, use_lut=use_lut)
    generator = CBLutGenerator(config)
    results = generator.run(op, image)
    return next(iter(results.values()))

