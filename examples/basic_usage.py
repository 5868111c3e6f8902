"""
Basic usage examples for cblut.
"""

from __future__ import annotations

import numpy as np

from cblut import (
    CBLutConfig,
    CBLutGenerator,
    Deficiency,
    ImageOp,
    LMSChannel,
    apply_lut,
    build_lut,
    make_swatch,
    process_image,
    simulate,
)


def example_simple() -> np.ndarray:
    """Correct a random image for protanopia through a baked LUT."""

    img = (np.random.rand(256, 256, 4) * 255).astype(np.uint8)
    result = process_image(img, ImageOp.CORRECT, Deficiency.PROTANOPE)
    print(f"Simple example mean change: {np.abs(result.astype(int) - img.astype(int))[..., :3].mean():0.2f}")
    return result


def example_lut_images() -> dict:
    """Emit the simulation LUTs for all three dichromacies at half strength."""

    config = CBLutConfig(deficiency=Deficiency.ALL, strength=0.5)
    generator = CBLutGenerator(config)
    luts = generator.run(ImageOp.SIMULATE)
    for name, lut in luts.items():
        print(f"{name}: {lut.shape[1]}x{lut.shape[0]}")
    return luts


def example_custom_transform() -> np.ndarray:
    """Bake an arbitrary linear RGB transform and apply it to the swatch."""

    def tritan_preview(rgb: np.ndarray) -> np.ndarray:
        return simulate(rgb, LMSChannel.S, strength=0.8)

    grid = build_lut(tritan_preview)
    result = apply_lut(grid, make_swatch())
    print(f"Custom transform output range: [{result[..., :3].min()}, {result[..., :3].max()}]")
    return result


if __name__ == "__main__":
    print("Running cblut basic examples...")
    example_simple()
    example_lut_images()
    example_custom_transform()
