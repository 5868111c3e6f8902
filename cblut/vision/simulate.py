"""
Dichromat simulation in LMS cone space.
"""

from __future__ import annotations

from typing import Union

import numpy as np

from cblut.utils.color import dot, lms_to_rgb, mat_mul, rgb_to_lms
from cblut.vision.constants import LMS_SIMULATE, SIMULATION_MATRICES, LMSChannel

ChannelLike = Union[LMSChannel, int]


def simulate(rgb: np.ndarray, channel: ChannelLike, strength: float = 1.0) -> np.ndarray:
    """
    Simulate how a dichromat sees linear RGB colours.

    The deficient cone response is blended towards the value predicted from
    the other two cones. ``strength`` < 1 models anomalous trichromacy
    (e.g. protanomaly), 1 complete loss (protanopia).

    Parameters
    ----------
    rgb : np.ndarray
        Linear RGB, shape (..., 3)
    channel : LMSChannel
        Deficient cone (L, M or S)
    strength : float
        0 leaves the colour untouched, 1 removes the channel's own signal
    """

    channel = LMSChannel(channel)
    lms = rgb_to_lms(np.asarray(rgb, dtype=np.float64))

    affected = lms[..., channel]
    sim = dot(LMS_SIMULATE[channel], lms)
    lms[..., channel] = affected + strength * (sim - affected)

    return lms_to_rgb(lms)


def simulation_error(rgb: np.ndarray, channel: ChannelLike, strength: float = 1.0) -> np.ndarray:
    """Difference between the original colour and its simulated version."""

    rgb = np.asarray(rgb, dtype=np.float64)
    return rgb - simulate(rgb, channel, strength)


def lms_swap(rgb: np.ndarray, channel: ChannelLike) -> np.ndarray:
    """
    Exchange two cone responses: L<->M, M<->S or S<->L for L, M, S.

    Used to turn a test image aimed at one deficiency into one aimed at
    another.
    """

    channel = LMSChannel(channel)
    other = (channel + 1) % 3
    lms = rgb_to_lms(np.asarray(rgb, dtype=np.float64))
    lms[..., [channel, other]] = lms[..., [other, channel]]
    return lms_to_rgb(lms)


def remap_to_s(rgb: np.ndarray, channel: ChannelLike) -> np.ndarray:
    """
    Convert a protan (L) or deutan (M) test image into a tritan one.

    The colour is simulated at full strength, and the information lost on
    the deficient channel is re-encoded on the S channel.
    """

    channel = LMSChannel(channel)
    if channel == LMSChannel.S:
        raise ValueError("Only L or M channels can be remapped to S")

    lms = rgb_to_lms(np.asarray(rgb, dtype=np.float64))
    lms_sim = mat_mul(SIMULATION_MATRICES[channel], lms)

    error = lms[..., channel] - lms_sim[..., channel]
    lms_sim[..., LMSChannel.S] += 10.0 * error

    return lms_to_rgb(lms_sim)
