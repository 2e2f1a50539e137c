"""
Entry point: render the bundled example diagrams to SVG.

Usage:
    python main.py <example> [--output OUTPUT] [--width W] [--height H]

Examples:
    python main.py --list
    python main.py three-circles-horizontal --output circles.svg
    python main.py line-endings --width 400           # height derived
    python main.py three-circles-vertical --natural   # natural size
    python main.py line --config project.reldraw.json -v

Exit status: 0 on success, 1 if rendering or writing fails, 2 on bad usage.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from relative_drawing.errors import DrawingError
from relative_drawing.examples import EXAMPLES, Example, get_example
from relative_drawing.logging_config import LogContext, log_timing, setup_logging
from relative_drawing.project_config import (
    ProjectConfig,
    apply_config_to_globals,
    create_sample_config,
    load_config,
)

logger = logging.getLogger("relative_drawing.main")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def output_path_for(example: Example, output: Optional[str], config: ProjectConfig) -> Path:
    """Output file: --output, else <output_dir>/<prefix><name>.svg."""
    if output:
        return Path(output)
    directory = Path(config.output.output_dir) if config.output.output_dir else Path.cwd()
    return directory / f"{config.output.prefix}{example.name}.svg"


def render_example(
    example: Example,
    output: Path,
    width: Optional[float] = None,
    height: Optional[float] = None,
    natural: bool = False,
) -> Path:
    """Build one example and write it as SVG.

    Args:
        example: Example to render
        output: SVG file to write
        width: Explicit width (None: example default)
        height: Explicit height (None: example default)
        natural: Ignore all dimensions and render at natural size

    Returns:
        Path written
    """
    drawing = example.build()
    if not natural:
        if width is None and height is None:
            width, height = example.width, example.height
        if width is not None:
            drawing.set_explicit_width(width)
        if height is not None:
            drawing.set_explicit_height(height)

    with LogContext(example=example.name):
        with log_timing(logger, f"Rendering {example.name}", level=logging.INFO,
                        shapes=len(drawing)):
            return drawing.write_to_file(output)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render example diagrams laid out from relative constraints.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "example",
        nargs="?",
        help="Example to render (see --list).",
    )
    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="List the available examples and exit.",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output SVG file (default: <output_dir>/<example>.svg).",
    )
    parser.add_argument(
        "--width",
        type=float,
        default=None,
        help="Explicit drawing width (overrides the example default).",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=None,
        help="Explicit drawing height (overrides the example default).",
    )
    parser.add_argument(
        "--natural",
        action="store_true",
        help="Render at natural size, without explicit dimensions.",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a .reldraw.json configuration file.",
    )
    parser.add_argument(
        "--init-config",
        default=None,
        metavar="PATH",
        dest="init_config",
        help="Write a sample configuration file to PATH and exit.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log at DEBUG level.",
    )
    parser.add_argument(
        "--log-json",
        default=None,
        metavar="PATH",
        dest="log_json",
        help="Also write JSON log lines to PATH.",
    )
    return parser


def _validate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if args.list or args.init_config:
        return
    if not args.example:
        parser.error("an example name is required (see --list)")
    try:
        get_example(args.example)
    except KeyError as exc:
        parser.error(exc.args[0])
    for name in ("width", "height"):
        value = getattr(args, name)
        if value is not None and value < 0:
            parser.error(f"--{name} must be non-negative")
    if args.natural and (args.width is not None or args.height is not None):
        parser.error("--natural cannot be combined with --width/--height")


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _validate(parser, args)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        json_file=args.log_json,
    )

    if args.list:
        for name, example in EXAMPLES.items():
            print(f"{name:28} {example.description}")
        return 0

    if args.init_config:
        try:
            create_sample_config(args.init_config)
        except OSError as exc:
            logger.error("Cannot write configuration: %s", exc)
            return 1
        return 0

    example = get_example(args.example)
    output = output_path_for(example, args.output, ProjectConfig())
    config = load_config(diagram_path=output, explicit_config=args.config)
    apply_config_to_globals(config)
    if not args.output:
        output = output_path_for(example, None, config)

    width, height = args.width, args.height
    if width is None and height is None and not args.natural:
        width, height = config.output.width, config.output.height

    try:
        render_example(example, output, width, height, natural=args.natural)
    except DrawingError as exc:
        logger.error("Cannot render %s: %s", example.name, exc)
        return 1
    except OSError as exc:
        logger.error("Cannot write %s: %s", output, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
