"""Dichromacy channel definitions and simulation/correction matrices."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict

import numpy as np


class LMSChannel(IntEnum):
    """Cone response whose independent signal is lost."""

    L = 0  # long wavelength, protanope
    M = 1  # medium wavelength, deuteranope
    S = 2  # short wavelength, tritanope


# Full dichromat simulation in the LMS basis of LMS_FROM_RGB. The lost channel
# is rebuilt from the other two along the confusion line.
LMS_PROTANOPE = np.array(
    [
        [0.0, 1.05118294, -0.05116099],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
    ]
)

LMS_DEUTERANOPE = np.array(
    [
        [1.0, 0.0, 0.0],
        [0.9513092, 0.0, 0.04866992],
        [0.0, 0.0, 1.0],
    ]
)

LMS_TRITANOPE = np.array(
    [
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [-0.86744736, 1.86727089, 0.0],
    ]
)

# Row c is the lost-channel row of the matching dichromat matrix above.
LMS_SIMULATE = np.array(
    [
        [0.0, 1.05118294, -0.05116099],
        [0.9513092, 0.0, 0.04866992],
        [-0.86744736, 1.86727089, 0.0],
    ]
)

# transpose(1 / LMS_SIMULATE), zero where LMS_SIMULATE is zero. Column c
# spreads an L/M/S error into the two preserved cone channels.
LMS_DELTA_RECIP = np.array(
    [
        [0.0, 1.05118299, -1.15280771],
        [0.951309144, 0.0, 0.535540938],
        [-19.5461426, 20.5465717, 0.0],
    ]
)

# Redistribution tuning per channel.
CORRECT_AMOUNT = np.array([-0.25, -0.3, -0.07])

# Brightening gain applied to the deficient channel.
CORRECT_BRIGHTEN = 2.0

# Vienot et al. dichromat matrices, in the LMS_FROM_RGB_VIENOT basis.
LMS_PROTANOPE_VIENOT = np.array(
    [
        [0.0, 2.02344, -2.52581],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
    ]
)

LMS_DEUTERANOPE_VIENOT = np.array(
    [
        [1.0, 0.0, 0.0],
        [0.494207, 0.0, 1.24827],
        [0.0, 0.0, 1.0],
    ]
)

LMS_TRITANOPE_VIENOT = np.array(
    [
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [-0.395913, 0.801109, 0.0],
    ]
)

# Fidaner, Lin and Ozguven error redistribution: the RGB error of the lost
# channel is routed into the two channels the viewer can still see.
DALTON_ERROR_TO_DELTA_P = np.array(
    [
        [0.0, 0.0, 0.0],
        [0.7, 1.0, 0.0],
        [0.7, 0.0, 1.0],
    ]
)

DALTON_ERROR_TO_DELTA_D = np.array(
    [
        [1.0, 0.7, 0.0],
        [0.0, 0.0, 0.0],
        [0.0, 0.7, 1.0],
    ]
)

DALTON_ERROR_TO_DELTA_T = np.array(
    [
        [1.0, 0.0, 0.7],
        [0.0, 1.0, 0.7],
        [0.0, 0.0, 0.0],
    ]
)

SIMULATION_MATRICES: Dict[LMSChannel, np.ndarray] = {
    LMSChannel.L: LMS_PROTANOPE,
    LMSChannel.M: LMS_DEUTERANOPE,
    LMSChannel.S: LMS_TRITANOPE,
}

VIENOT_SIMULATION_MATRICES: Dict[LMSChannel, np.ndarray] = {
    LMSChannel.L: LMS_PROTANOPE_VIENOT,
    LMSChannel.M: LMS_DEUTERANOPE_VIENOT,
    LMSChannel.S: LMS_TRITANOPE_VIENOT,
}

DALTON_ERROR_TO_DELTA: Dict[LMSChannel, np.ndarray] = {
    LMSChannel.L: DALTON_ERROR_TO_DELTA_P,
    LMSChannel.M: DALTON_ERROR_TO_DELTA_D,
    LMSChannel.S: DALTON_ERROR_TO_DELTA_T,
}

for _matrix in (
    LMS_PROTANOPE,
    LMS_DEUTERANOPE,
    LMS_TRITANOPE,
    LMS_SIMULATE,
    LMS_DELTA_RECIP,
    CORRECT_AMOUNT,
    LMS_PROTANOPE_VIENOT,
    LMS_DEUTERANOPE_VIENOT,
    LMS_TRITANOPE_VIENOT,
    DALTON_ERROR_TO_DELTA_P,
    DALTON_ERROR_TO_DELTA_D,
    DALTON_ERROR_TO_DELTA_T,
):
    _matrix.setflags(write=False)
