"""Command-line interface for dominant-colours."""

import argparse
import logging
import sys
from typing import Optional

from .pipeline import DominantColourExtractor
from .render import render
from .swatch import save_swatch
from .types import ExtractionError, ExtractorConfig, OutputFormat


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="dominant-colours",
        description="Extract dominant colours from images using k-means clustering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dominant-colours photo.jpg
  dominant-colours photo.jpg -c 8 --format json
  dominant-colours photo.jpg --swatch -o palette.svg
        """,
    )

    parser.add_argument("filename", help="Image file to analyze")

    parser.add_argument(
        "-c",
        "--colours",
        type=int,
        default=6,
        help="Number of colours to extract (default: 6)",
    )

    parser.add_argument(
        "-f",
        "--format",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=OutputFormat.TEXT,
        help="Output format for colour data (default: text)",
    )

    parser.add_argument(
        "-s", "--swatch", action="store_true", help="Output SVG swatch"
    )

    parser.add_argument(
        "-o",
        "--output",
        default="swatch.svg",
        help="SVG swatch output file (default: swatch.svg)",
    )

    parser.add_argument(
        "--max-iterations",
        type=int,
        default=100,
        help="Maximum k-means iterations per run (default: 100)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for centroid initialization (default: 42)",
    )

    parser.add_argument(
        "--resize",
        type=int,
        default=150,
        help="Resize image to fit a NxN box before clustering, 0 to disable (default: 150)",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log clustering progress"
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    try:
        config = ExtractorConfig(
            n_colours=parsed.colours,
            max_iterations=parsed.max_iterations,
            random_state=parsed.seed,
            resize_to=parsed.resize or None,
        )

        print("Analyzing image...", file=sys.stderr)
        colours = DominantColourExtractor(config).process(parsed.filename)

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ExtractionError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error processing image: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(render(colours, parsed.format))

    if parsed.swatch:
        print(f"Saving colour swatch to {parsed.output}...", file=sys.stderr)
        try:
            save_swatch(colours, parsed.output)
        except OSError as e:
            print(f"Error: Failed to save colour swatch: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
