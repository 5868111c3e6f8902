"""Dichromacy simulation and enhancement models."""

from cblut.vision.constants import LMSChannel
from cblut.vision.enhance import correct, daltonise
from cblut.vision.simulate import simulate, simulation_error

__all__ = [
    "LMSChannel",
    "simulate",
    "simulation_error",
    "daltonise",
    "correct",
]
