"""
pixiedust: crop, resize and re-encode an image as WebP.

Usage:
  pixiedust in.png -o out.webp
  pixiedust in.gif -o out.webp --gif-width 480 --gif-height 360
  pixiedust in.jpg -o out.webp --crop --crop-width 400 --crop-height 300 --crop-x 640 --crop-y 360
  pixiedust in.jpg -o out.webp --crop-size 400x300 --chain-crop --crop-output crop.webp
  pixiedust in.jpg -o out.webp --width 256 --height 256 --resize-fill
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Tuple

from pixiedust.app.pipeline import run_pipeline
from pixiedust.core.errors import PixieDustError
from pixiedust.core.models import (
    DEFAULT_ANIMATED_BOUND,
    DEFAULT_STATIC_BOUND,
    CropSpec,
    Dimensions,
    ProcessingParams,
    ResizePolicy,
)
from pixiedust.validation.validator import format_report_text


def _parse_size(text: str) -> Tuple[int, int]:
    """Parse 'WIDTHxHEIGHT'."""
    parts = text.lower().split("x")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError("Invalid crop! Use the following format: widthxheight")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError("Invalid crop! Use the following format: widthxheight") from None


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pixiedust",
        description="Crop, resize and re-encode an image (animated images included) as WebP.",
    )
    p.add_argument("input", nargs="?", help="Path to input image")
    p.add_argument("--input", "-i", dest="input_opt", help="Path to input image (alternative to the positional)")
    p.add_argument("--output", "-o", required=True, help="Path to output image (written as WebP)")

    crop = p.add_argument_group("crop")
    crop.add_argument("--crop", action="store_true", help="Crop before resizing")
    crop.add_argument("--crop-width", type=int, default=0, help="Crop width in pixels (> 0)")
    crop.add_argument("--crop-height", type=int, default=0, help="Crop height in pixels (> 0)")
    crop.add_argument("--crop-x", type=int, default=0, help="Crop center x (0 with --crop-y 0 = image center)")
    crop.add_argument("--crop-y", type=int, default=0, help="Crop center y (0 with --crop-x 0 = image center)")
    crop.add_argument("--crop-size", type=_parse_size, metavar="WxH",
                      help="Shorthand: enable cropping with this size")
    crop.add_argument("--chain-crop", action="store_true",
                      help="Write the cropped image first, then resize from that file")
    crop.add_argument("--crop-output", help="Where --chain-crop writes the cropped image (default: temp dir)")

    size = p.add_argument_group("resize")
    size.add_argument("--width", type=int, default=DEFAULT_STATIC_BOUND.width, help="Static image max width (default: 1920)")
    size.add_argument("--height", type=int, default=DEFAULT_STATIC_BOUND.height, help="Static image max height (default: 1080)")
    size.add_argument("--gif-width", type=int, default=DEFAULT_ANIMATED_BOUND.width, help="Animated image max width (default: 800)")
    size.add_argument("--gif-height", type=int, default=DEFAULT_ANIMATED_BOUND.height, help="Animated image max height (default: 600)")
    size.add_argument("--resize-fill", action="store_true", help="Resize to the exact bound, ignoring aspect ratio")

    enc = p.add_argument_group("encode")
    enc.add_argument("--quality", type=int, default=30, help="WebP quality 0-100 (default: 30)")
    enc.add_argument("--encode-timeout", type=float, default=30.0, help="Max seconds for encoding (default: 30)")

    p.add_argument("--report", action="store_true", help="Print a per-stage report after a successful run")
    p.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging verbosity",
    )
    return p


def _params_from_args(args: argparse.Namespace) -> ProcessingParams:
    crop: Optional[CropSpec] = None
    if args.crop_size is not None:
        w, h = args.crop_size
        crop = CropSpec(center_x=args.crop_x, center_y=args.crop_y, width=w, height=h)
    elif args.crop:
        crop = CropSpec(center_x=args.crop_x, center_y=args.crop_y, width=args.crop_width, height=args.crop_height)

    return ProcessingParams(
        input_path=args.input_opt or args.input or "",
        output_path=args.output,
        crop=crop,
        static_bound=Dimensions(args.width, args.height),
        animated_bound=Dimensions(args.gif_width, args.gif_height),
        policy=ResizePolicy.FILL if args.resize_fill else ResizePolicy.FIT,
        quality=args.quality,
        encode_timeout=args.encode_timeout,
        chain_crop=args.chain_crop,
        crop_output_path=args.crop_output,
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    if args.input and args.input_opt:
        parser.error("give the input path either positionally or with --input, not both")
    if not (args.input or args.input_opt):
        parser.error("an input path is required")
    if args.crop_size is not None and (args.crop or args.crop_width or args.crop_height):
        parser.error("use either --crop-size or --crop with --crop-width/--crop-height, not both")

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        report = run_pipeline(_params_from_args(args))
    except PixieDustError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.report:
        print(format_report_text(report, title="PixieDust Run Report"))
    print(f"Saved: {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
