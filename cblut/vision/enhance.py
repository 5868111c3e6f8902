"""
Daltonisation and hybrid correction for dichromats.

Both strategies return unclamped linear RGB; callers clamp before feeding
the result into another stage.
"""

from __future__ import annotations

import numpy as np

from cblut.utils.color import (
    clamp_unit,
    dot,
    lms_to_rgb,
    lms_vienot_to_rgb,
    mat_mul,
    rgb_to_lms,
    rgb_to_lms_vienot,
)
from cblut.vision.constants import (
    CORRECT_AMOUNT,
    CORRECT_BRIGHTEN,
    DALTON_ERROR_TO_DELTA,
    LMS_DELTA_RECIP,
    LMS_SIMULATE,
    VIENOT_SIMULATION_MATRICES,
    LMSChannel,
)
from cblut.vision.simulate import ChannelLike, simulate


def _simulate_vienot(rgb: np.ndarray, channel: LMSChannel) -> np.ndarray:
    lms = mat_mul(VIENOT_SIMULATION_MATRICES[channel], rgb_to_lms_vienot(rgb))
    return lms_vienot_to_rgb(lms)


def daltonise(rgb: np.ndarray, channel: ChannelLike, strength: float = 1.0) -> np.ndarray:
    """
    Daltonise colours for the given deficiency (Fidaner, Lin and Ozguven).

    The error between the colour and what a dichromat sees of it is routed
    into the channels the viewer can still distinguish.

    Parameters
    ----------
    rgb : np.ndarray
        Linear RGB, shape (..., 3)
    channel : LMSChannel
        Deficient cone (L, M or S)
    strength : float
        Scale of the routed error, 0 is the identity
    """

    channel = LMSChannel(channel)
    rgb = np.asarray(rgb, dtype=np.float64)

    rgb_sim = _simulate_vienot(rgb, channel)
    delta = mat_mul(DALTON_ERROR_TO_DELTA[channel], strength * (rgb - rgb_sim))

    return rgb + delta


def correction_vector(channel: ChannelLike, strength: float) -> np.ndarray:
    """
    Per-channel LMS weights applied to the deficient channel's error.

    Redistribution (hue shift) is weighted by strength squared, brightening
    of the deficient channel by (1 - strength). The deficient channel's own
    entry only ever carries the brightening term.
    """

    channel = LMSChannel(channel)
    redistribute = strength * strength
    brighten = 1.0 - strength

    vector = redistribute * CORRECT_AMOUNT[channel] * LMS_DELTA_RECIP[:, channel]
    vector[channel] = brighten * CORRECT_BRIGHTEN
    return vector


def correct(rgb: np.ndarray, channel: ChannelLike, strength: float = 1.0) -> np.ndarray:
    """
    Correct colours for a dichromat by mixing amplification and hue shifting.

    At low strength the deficient channel is mostly brightened; at full
    strength its error is redistributed into the other two cones instead.
    """

    channel = LMSChannel(channel)
    lms = rgb_to_lms(np.asarray(rgb, dtype=np.float64))

    original = lms[..., channel]
    simulated = dot(LMS_SIMULATE[channel], lms)
    error = strength * (original - simulated)

    lms_corrected = lms + np.expand_dims(error, -1) * correction_vector(channel, strength)

    return lms_to_rgb(lms_corrected)


def daltonise_then_simulate(rgb: np.ndarray, channel: ChannelLike, strength: float = 1.0) -> np.ndarray:
    """Preview a daltonised colour as the dichromat would see it."""

    return simulate(clamp_unit(daltonise(rgb, channel, strength)), channel, strength)


def correct_then_simulate(rgb: np.ndarray, channel: ChannelLike, strength: float = 1.0) -> np.ndarray:
    """Preview a corrected colour as the dichromat would see it."""

    return simulate(clamp_unit(correct(rgb, channel, strength)), channel, strength)
