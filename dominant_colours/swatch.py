"""SVG swatch export for ranked colour results."""
import logging
from pathlib import Path
from typing import Sequence, Union

from .types import ColourResult

logger = logging.getLogger(__name__)

LABEL_HEIGHT = 40


def swatch_tile(result: ColourResult, index: int, tile_size: int = 100) -> str:
    """
    Build the SVG elements for one swatch tile.

    Args:
        result: Colour to draw
        index: Position of the tile, left to right
        tile_size: Width and height of the colour square

    Returns:
        SVG fragment with a filled rect and two text labels
    """
    r, g, b = result.rgb
    x = index * tile_size
    font_size = max(1, tile_size // 10)

    return (
        f'<rect x="{x}" y="0" width="{tile_size}" height="{tile_size}" '
        f'fill="rgb({r}, {g}, {b})"/>\n'
        f'  <text x="{x + 5}" y="{tile_size + 15}" font-family="Arial" '
        f'font-size="{font_size}" fill="black">{r}, {g}, {b}</text>\n'
        f'  <text x="{x + 5}" y="{tile_size + 30}" font-family="Arial" '
        f'font-size="{font_size}" fill="black">{result.percentage:.1f}%</text>'
    )


def swatch_svg(results: Sequence[ColourResult], tile_size: int = 100) -> str:
    """
    Generate an SVG strip with one equal-width tile per colour.

    Tiles are laid out left to right in the order given, so a ranked
    list renders most dominant first.

    Args:
        results: Ranked colour results
        tile_size: Width and height of each colour square

    Returns:
        Complete SVG string
    """
    if tile_size < 1:
        raise ValueError(f"tile_size must be >= 1, got {tile_size}")

    width = tile_size * max(1, len(results))
    height = tile_size + LABEL_HEIGHT

    tiles = [swatch_tile(result, i, tile_size) for i, result in enumerate(results)]
    svg_content = '\n  '.join(tiles)

    svg = f'''<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}" width="{width}" height="{height}">
  {svg_content}
</svg>'''

    return svg


def save_swatch(
    results: Sequence[ColourResult],
    output_path: Union[str, Path],
    tile_size: int = 100
) -> Path:
    """
    Render and save an SVG swatch.

    Args:
        results: Ranked colour results
        output_path: Output file path
        tile_size: Width and height of each colour square

    Returns:
        Path the swatch was written to
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(swatch_svg(results, tile_size))

    logger.info(f"Saved swatch with {len(results)} tiles to {output_path}")
    return output_path
