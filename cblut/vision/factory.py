"""
Factory utilities for selecting a per-pixel colour transform.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

import numpy as np

from cblut.core.config import ImageOp
from cblut.vision.constants import LMSChannel


def _identity(rgb: np.ndarray) -> np.ndarray:
    return rgb


def create_transform(
    op: ImageOp,
    channel: Optional[LMSChannel] = None,
    strength: float = 1.0,
) -> Callable[[np.ndarray], np.ndarray]:
    """Return the linear RGB -> linear RGB function for an image operation."""

    if op == ImageOp.PASS_THROUGH:
        return _identity

    if channel is None:
        raise ValueError(f"Operation {op.value} needs a deficient channel")

    if op == ImageOp.SIMULATE:
        from cblut.vision.simulate import simulate

        return partial(simulate, channel=channel, strength=strength)

    if op == ImageOp.ERROR:
        from cblut.vision.simulate import simulation_error

        return partial(simulation_error, channel=channel, strength=strength)

    if op == ImageOp.DALTONISE:
        from cblut.vision.enhance import daltonise

        return partial(daltonise, channel=channel, strength=strength)

    if op == ImageOp.CORRECT:
        from cblut.vision.enhance import correct

        return partial(correct, channel=channel, strength=strength)

    if op == ImageOp.DALTONISE_SIMULATE:
        from cblut.vision.enhance import daltonise_then_simulate

        return partial(daltonise_then_simulate, channel=channel, strength=strength)

    if op == ImageOp.CORRECT_SIMULATE:
        from cblut.vision.enhance import correct_then_simulate

        return partial(correct_then_simulate, channel=channel, strength=strength)

    raise ValueError(f"Unknown image operation: {op}")
