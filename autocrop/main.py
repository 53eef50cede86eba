"""Command-line entry point.

    autocrop <image_path> <output_png_path> [energy_threshold]

Exit status 1 for usage errors, 2 when the image cannot be read or written.
"""

from __future__ import annotations

import argparse
import math
import os
import sys
from dataclasses import replace

from autocrop.bounds import to_threshold
from autocrop.config import DEFAULT_THRESHOLD, AlphaWeighting, AutocropConfig
from autocrop.decoder import decode_image, save_pixel_buffer
from autocrop.logger import get_logger, setup_logger
from autocrop.settings_manager import SettingsManager

EXIT_USAGE = 1
EXIT_IO = 2


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise _UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="autocrop",
        description="Crop away low-energy borders of an image.",
    )
    parser.add_argument("image_path", help="Image file to crop")
    parser.add_argument("output_path", help="Where to write the cropped PNG")
    parser.add_argument("energy_threshold", nargs="?", help="Energy threshold between 0.0 and 1.0")
    parser.add_argument("--margin", type=int, help="Safety margin in pixels")
    parser.add_argument(
        "--alpha-weighting",
        choices=[w.value for w in AlphaWeighting],
        help="How alpha enters neighbour luminance",
    )
    parser.add_argument("--settings", help="JSON settings file with defaults")
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    return parser


def _apply_logging_options(args: argparse.Namespace) -> None:
    if args.log_level:
        os.environ["AUTOCROP_LOG_LEVEL"] = args.log_level
    if args.log_cats:
        os.environ["AUTOCROP_LOG_CATS"] = args.log_cats
    setup_logger()


def _resolve(args: argparse.Namespace) -> tuple[float, AutocropConfig]:
    settings = SettingsManager(args.settings) if args.settings else None
    config = settings.to_config() if settings else AutocropConfig()
    threshold = settings.threshold if settings else DEFAULT_THRESHOLD

    if args.energy_threshold is not None:
        try:
            threshold = float(args.energy_threshold)
        except ValueError as e:
            raise _UsageError(f"invalid threshold: {e}") from e
        if math.isnan(threshold):
            raise _UsageError("invalid threshold: nan")

    overrides = {}
    if args.margin is not None:
        overrides["margin"] = args.margin
    if args.alpha_weighting:
        overrides["alpha_weighting"] = args.alpha_weighting
    if overrides:
        try:
            config = replace(config, **overrides)
        except ValueError as e:
            raise _UsageError(str(e)) from e

    return threshold, config


def run(argv: list[str] | None = None) -> int:
    """Application entrypoint (packaging-friendly)."""
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
        _apply_logging_options(args)
        threshold, config = _resolve(args)
    except _UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"autocrop: {e}", file=sys.stderr)
        return EXIT_USAGE

    logger = get_logger("main")
    _, buffer, err = decode_image(args.image_path)
    if buffer is None:
        print(f"could not read image: {err}", file=sys.stderr)
        return EXIT_IO

    result = to_threshold(buffer, threshold, config)
    logger.info("cropped %s from %dx%d to %dx%d", args.image_path, buffer.width, buffer.height, result.width, result.height)

    try:
        save_pixel_buffer(result, args.output_path)
    except Exception as e:
        logger.debug("encode failed", exc_info=True)
        print(f"could not write output image: {e}", file=sys.stderr)
        return EXIT_IO
    return 0


if __name__ == "__main__":
    sys.exit(run())
