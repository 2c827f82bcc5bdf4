"""Text and JSON rendering of ranked colour results."""

import json
from typing import Sequence

from .types import RGB, ColourResult, OutputFormat

TEXT_HEADER = "Dominant colours (sorted by prevalence):"


def rgb_to_hex(rgb: RGB) -> str:
    """Format an RGB triple as a lowercase ``#rrggbb`` string.

    Args:
        rgb: Tuple of three ints in [0, 255]

    Returns:
        Hex colour string
    """
    r, g, b = (int(c) for c in rgb[:3])
    for c in (r, g, b):
        if not 0 <= c <= 255:
            raise ValueError(f"Channel value out of range: {c}")
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(value: str) -> RGB:
    """Parse ``#rrggbb`` (leading ``#`` optional, any case) into an RGB triple."""
    digits = value[1:] if value.startswith("#") else value
    if len(digits) != 6:
        raise ValueError(f"Expected 6 hex digits, got {value!r}")
    try:
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    except ValueError as e:
        raise ValueError(f"Invalid hex colour {value!r}") from e


def format_line(result: ColourResult) -> str:
    r, g, b = result.rgb
    return f"RGB: ({r}, {g}, {b}) - {result.percentage:.1f}% of image"


def format_text(results: Sequence[ColourResult]) -> str:
    """Render results as a header plus one line per colour."""
    lines = [TEXT_HEADER]
    lines.extend(format_line(result) for result in results)
    return "\n".join(lines)


def format_json(results: Sequence[ColourResult], indent: int = 2) -> str:
    """Render results as a JSON document with a ``colours`` array."""
    document = {"colours": [result.to_dict() for result in results]}
    return json.dumps(document, indent=indent)


def render(results: Sequence[ColourResult], fmt: OutputFormat = OutputFormat.TEXT) -> str:
    """Render results in the requested output format."""
    if fmt is OutputFormat.TEXT:
        return format_text(results)
    if fmt is OutputFormat.JSON:
        return format_json(results)
    raise ValueError(f"Unknown output format: {fmt!r}")
