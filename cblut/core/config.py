"""
Configuration primitives for cblut.

Defines enums for deficiency types, image operations and LUT image
layouts, and a dataclass collecting configurable parameters.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from cblut.vision.constants import LMSChannel


class Deficiency(Enum):
    """Colour vision deficiency selection."""

    IDENTITY = "identity"        # Normal vision, used for pass-through
    PROTANOPE = "protanope"      # L cones lost, reds darken (1% of men)
    DEUTERANOPE = "deuteranope"  # M cones lost (1% of men)
    TRITANOPE = "tritanope"      # S cones lost (0.003% of population)
    ALL = "all"                  # Protanope, deuteranope and tritanope in turn

    @property
    def channel(self) -> Optional[LMSChannel]:
        return _DEFICIENCY_CHANNEL.get(self)

    def expand(self) -> Tuple["Deficiency", ...]:
        """Concrete deficiencies this selection stands for, in order."""

        if self is Deficiency.ALL:
            return (Deficiency.PROTANOPE, Deficiency.DEUTERANOPE, Deficiency.TRITANOPE)
        return (self,)


_DEFICIENCY_CHANNEL = {
    Deficiency.PROTANOPE: LMSChannel.L,
    Deficiency.DEUTERANOPE: LMSChannel.M,
    Deficiency.TRITANOPE: LMSChannel.S,
}


class ImageOp(Enum):
    """Per-pixel operation to apply or bake into a LUT."""

    SIMULATE = "simulate"                        # What a dichromat sees
    ERROR = "error"                              # Original minus simulated
    DALTONISE = "daltonise"                      # Fidaner daltonisation
    CORRECT = "correct"                          # Brighten / hue-shift hybrid
    DALTONISE_SIMULATE = "simulate_daltonised"   # Daltonise, then simulate
    CORRECT_SIMULATE = "simulate_corrected"      # Correct, then simulate
    PASS_THROUGH = "identity"                    # No-op, for testing


class LUTLayout(Enum):
    """How an N x N x N grid is tiled into an N^2 x N image."""

    BLUE_TILES = "blue_tiles"  # x = r + b * N, y = g
    BLUE_ROWS = "blue_rows"    # x = r + g * N, y = b (raw row-major dump)


@dataclass
class CBLutConfig:
    """
    Complete configuration for cblut processing.

    Defaults bake a 32^3 LUT at full strength for all three dichromacies.
    """

    deficiency: Deficiency = Deficiency.ALL
    strength: float = 1.0  # 0 = normal vision, 1 = complete channel loss

    # LUT options
    use_lut: bool = True  # False transforms every pixel directly
    lut_bits: int = 5  # 32 x 32 x 32, compromise between accuracy and memory
    extrapolate: bool = True  # Extrapolate past the outermost grid samples
    lut_layout: LUTLayout = LUTLayout.BLUE_TILES

    @property
    def lut_size(self) -> int:
        return 1 << self.lut_bits

    def validate(self) -> None:
        """Validate configuration parameters."""

        if not (0.0 <= self.strength <= 1.0):
            raise ValueError(f"Strength {self.strength} out of range [0, 1]")

        if not (1 <= self.lut_bits <= 7):
            raise ValueError(f"LUT bits {self.lut_bits} out of range [1, 7]")
