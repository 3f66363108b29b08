"""Command line interface: round an image's corners and add a drop shadow."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, Sequence

from .codec import decode_image, encode_png, read_input, write_output
from .config import settings
from .exceptions import InvalidParamsError, ShadowStagError
from .pipeline import ShadowPipeline

logger = logging.getLogger("shadowstag")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser; defaults come from the settings."""
    parser = argparse.ArgumentParser(
        prog="shadowstag",
        description="Image Rounder and Shadow Adder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s < in.png > out.png              # stdin to stdout
  %(prog)s -i in.jpg -o out.png -r 16      # files, larger corner radius
  %(prog)s -e 10,10 -s 0 -b 8 -a 200       # soft shadow to the lower right
""",
    )
    parser.add_argument(
        "--input", "-i",
        default=None,
        help="Input image file (default: read from stdin)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output image file (default: write to stdout)",
    )
    parser.add_argument(
        "--radius", "-r",
        type=int,
        default=None,
        help=(
            f"Corner radius for rounding the output canvas, which includes the shadow margin "
            f"unless --no-expand is given (default: {settings.CORNER_RADIUS}, env: SHADOWSTAG_CORNER_RADIUS)"
        ),
    )
    parser.add_argument(
        "--offset", "-e",
        default=None,
        help=f"Shadow offset in format x,y (default: {settings.OFFSET_X},{settings.OFFSET_Y})",
    )
    parser.add_argument(
        "--alpha", "-a",
        type=int,
        default=None,
        help=f"Shadow alpha 0-255 (default: {settings.SHADOW_ALPHA}, env: SHADOWSTAG_SHADOW_ALPHA)",
    )
    parser.add_argument(
        "--spread", "-s",
        type=int,
        default=None,
        help=f"Shadow spread distance (default: {settings.SPREAD}, env: SHADOWSTAG_SPREAD)",
    )
    parser.add_argument(
        "--blur", "-b",
        type=int,
        default=None,
        help=f"Shadow blur radius (default: {settings.BLUR}, env: SHADOWSTAG_BLUR)",
    )
    parser.add_argument(
        "--color", "-c",
        default=None,
        help=f"Shadow color as #RRGGBB (default: {settings.SHADOW_COLOR})",
    )
    parser.add_argument(
        "--no-expand",
        action="store_true",
        help="Keep the input canvas size instead of growing it to fit the shadow",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """
    Send log output to stderr; stdout may carry the image.

    Raises an InvalidParamsError if the configured log level is unknown.
    """
    level = logging.DEBUG if verbose else settings.LOG_LEVEL.upper()
    try:
        logger.setLevel(level)
    except ValueError as e:
        raise InvalidParamsError(f"Invalid log level {settings.LOG_LEVEL!r} in SHADOWSTAG_LOG_LEVEL") from e
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.propagate = False


def main(
    argv: Sequence[str] | None = None,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> int:
    """
    Run the command line tool.

    :param argv: Arguments, sys.argv[1:] by default
    :param stdin: Binary input stream, sys.stdin.buffer by default
    :param stdout: Binary output stream, sys.stdout.buffer by default
    :return: The process exit code
    """
    args = build_parser().parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer

    try:
        configure_logging(args.verbose)
        pipeline = ShadowPipeline.from_options(
            offset=args.offset,
            radius=args.radius,
            spread=args.spread,
            blur=args.blur,
            alpha=args.alpha,
            color=args.color,
            expand_canvas=False if args.no_expand else None,
        )
        image = decode_image(read_input(args.input, stdin))
        result = pipeline.run(image)
        write_output(encode_png(result.image), args.output, stdout)
    except ShadowStagError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Failed to write output: {e}", file=sys.stderr)
        return 1

    if args.output is not None:
        logger.info(f"Image with rounded corners and drop shadow saved as: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
