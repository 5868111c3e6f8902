"""
Command line front end: emit LUTs, or process images through them.

Example::

    cblut -f image.png -p -sxy
        # simulated, daltonised and corrected versions of image.png, protanopia only
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from cblut.core.config import CBLutConfig, Deficiency, ImageOp, LUTLayout
from cblut.core.pipeline import CBLutGenerator, PreprocessStep, make_swatch
from cblut.lut.grid import LUT_BITS
from cblut.lut.mono import grey_ramp, ramp_from_image
from cblut.utils.image_io import image_stem, load_rgba, save_rgba
from cblut.vision.constants import LMSChannel

logger = logging.getLogger(__name__)

BUILTIN_RAMPS = {
    "grey": grey_ramp,
}


def _channel(value: str) -> LMSChannel:
    try:
        return LMSChannel[value.upper()]
    except KeyError:
        raise argparse.ArgumentTypeError(f"expected L, M or S, got {value!r}") from None


def _swap_step(value: str) -> PreprocessStep:
    return ("swap", _channel(value))


def _remap_step(value: str) -> PreprocessStep:
    channel = _channel(value)
    if channel == LMSChannel.S:
        raise argparse.ArgumentTypeError("only L or M can be remapped to S")
    return ("remap", channel)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cblut",
        description="Colour-blind simulation and correction, baked into 3-D LUTs.",
    )

    source = parser.add_argument_group("input")
    source.add_argument("-f", "--file", type=Path, help="image to process rather than emitting a LUT")
    source.add_argument(
        "-F", "--swatch", action="store_true",
        help="use a generated swatch varying in L, for protanope correction testing",
    )

    options = parser.add_argument_group("options")
    deficiency = options.add_mutually_exclusive_group()
    deficiency.add_argument("-p", dest="deficiency", action="store_const", const=Deficiency.PROTANOPE,
                            help="protanope image or LUT")
    deficiency.add_argument("-d", dest="deficiency", action="store_const", const=Deficiency.DEUTERANOPE,
                            help="deuteranope image or LUT")
    deficiency.add_argument("-t", dest="deficiency", action="store_const", const=Deficiency.TRITANOPE,
                            help="tritanope image or LUT")
    deficiency.add_argument("-a", dest="deficiency", action="store_const", const=Deficiency.ALL,
                            help="all of the above (default)")
    options.add_argument(
        "-m", "--strength", type=float, default=1.0,
        help="strength of the deficiency, default 1 (affected channel completely lost)",
    )
    options.add_argument("-n", "--no-lut", action="store_true",
                         help="transform the input image directly rather than through a LUT")
    options.add_argument("--no-extrapolate", action="store_true",
                         help="clamp to the outermost LUT cells instead of extrapolating")
    options.add_argument("--bits", type=int, default=LUT_BITS, help="LUT edge bits, default 5 (32^3)")
    options.add_argument(
        "--layout", choices=[layout.value for layout in LUTLayout], default=LUTLayout.BLUE_TILES.value,
        help="LUT image layout",
    )
    options.add_argument("-g", "--swap", dest="preprocess", action="append", type=_swap_step,
                         metavar="{L,M,S}", help="swap LM/MS/SL channels of the input image first")
    options.add_argument("-r", "--remap", dest="preprocess", action="append", type=_remap_step,
                         metavar="{L,M}", help="remap L or M onto S, turning a protan/deutan test image tritan")
    options.add_argument("-o", "--output-dir", type=Path, default=Path("."), help="output directory")
    options.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    ops = parser.add_argument_group("operations (run in the order given)")
    for flag, op, text in (
        ("-s", ImageOp.SIMULATE, "simulate the deficiency"),
        ("-e", ImageOp.ERROR, "error between original colour and simulated version"),
        ("-x", ImageOp.DALTONISE, "daltonise (Fidaner)"),
        ("-X", ImageOp.DALTONISE_SIMULATE, "daltonise and then simulate"),
        ("-y", ImageOp.CORRECT, "correct"),
        ("-Y", ImageOp.CORRECT_SIMULATE, "correct and then simulate"),
        ("-i", ImageOp.PASS_THROUGH, "identity image or LUT (for testing)"),
    ):
        ops.add_argument(flag, dest="ops", action="append_const", const=op, help=text)

    ops.add_argument("-l", "--lut", type=Path, help="apply the given LUT image to the input (requires -f)")
    ops.add_argument(
        "-c", "--colour-map", nargs="+", metavar=("NAME", "CHANNEL"),
        help="apply a mono ramp: 'grey' or the path of a 256-wide ramp image; "
             "CHANNEL indexes the ramp, otherwise sRGB/D65 luminance is used",
    )
    return parser


def _load_input(args: argparse.Namespace) -> Tuple[Optional[np.ndarray], str]:
    if args.file is not None:
        return load_rgba(args.file), image_stem(args.file)
    if args.swatch:
        return make_swatch(), "swatch"
    return None, "unknown"


def _load_ramp(values: List[str]) -> Tuple[np.ndarray, str, Optional[int]]:
    if len(values) > 2:
        raise ValueError("Expecting a ramp name and at most one channel")

    name = values[0]
    channel = int(values[1]) if len(values) == 2 else None

    if name in BUILTIN_RAMPS:
        return BUILTIN_RAMPS[name](), name, channel
    return ramp_from_image(load_rgba(name)), image_stem(name), channel


def _save_all(results: Dict[str, np.ndarray], output_dir: Path) -> None:
    for key, pixels in results.items():
        save_rgba(output_dir / f"{key}.png", pixels)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not (args.ops or args.lut or args.colour_map):
        parser.print_help()
        return 0

    config = CBLutConfig(
        deficiency=args.deficiency or Deficiency.ALL,
        strength=args.strength,
        use_lut=not args.no_lut,
        lut_bits=args.bits,
        extrapolate=not args.no_extrapolate,
        lut_layout=LUTLayout(args.layout),
    )

    try:
        generator = CBLutGenerator(config)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    try:
        image, name = _load_input(args)
    except OSError as exc:
        logger.error("Couldn't read %s: %s", args.file, exc)
        return 1

    if args.preprocess:
        if image is None:
            logger.error("No input image to preprocess")
            return 1
        image = generator.preprocess(image, args.preprocess)

    args.output_dir.mkdir(parents=True, exist_ok=True)

    if args.ops:
        _save_all(generator.run_all(args.ops, image, name), args.output_dir)

    if args.lut is not None:
        if image is None:
            logger.error("No input image to apply LUT to")
            return 1
        try:
            lut_image = load_rgba(args.lut)
            results = generator.apply_lut_image(lut_image, image)
        except (OSError, ValueError) as exc:
            logger.error("Couldn't apply RGB LUT %s: %s", args.lut, exc)
            return 1
        _save_all(results, args.output_dir)

    if args.colour_map:
        try:
            ramp, ramp_name, channel = _load_ramp(args.colour_map)
            results = generator.apply_mono_ramp(ramp, ramp_name, image, name, channel)
        except (OSError, ValueError) as exc:
            logger.error("Unknown mono LUT or bad ramp %s: %s", args.colour_map[0], exc)
            return 1
        _save_all(results, args.output_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
