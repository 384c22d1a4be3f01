"""Render images as ASCII art, optionally with Floyd-Steinberg dithering."""

from __future__ import annotations

import math
from dataclasses import dataclass

from PIL import Image

from moggu.filters import grayscale

DETAILED_RAMP = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
SIMPLE_RAMP = "@%#*+=-:. "

# Terminal cells are roughly twice as tall as they are wide.
_CELL_ASPECT = 0.5


@dataclass
class AsciiConfig:
    """Options that control ASCII rendering."""

    max_width: int = 120
    contrast_boost: float = 1.2
    invert: bool = False
    detailed: bool = False
    dither: bool = True

    @property
    def ramp(self) -> str:
        """Characters from darkest to lightest."""
        return DETAILED_RAMP if self.detailed else SIMPLE_RAMP


def _round_half_away(value: float) -> int:
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def _dither(rows: list[list[float]], levels: int) -> None:
    """Quantise ``rows`` in place to ``levels`` grey levels, diffusing the error."""
    steps = levels - 1
    height = len(rows)
    for y, row in enumerate(rows):
        width = len(row)
        below = rows[y + 1] if y + 1 < height else None
        # The iterator reads each entry lazily, so error pushed right is seen.
        for x, old in enumerate(row):
            new = _round_half_away(old / 255.0 * steps) / steps * 255.0
            row[x] = new
            error = old - new
            if x + 1 < width:
                row[x + 1] += error * 7.0 / 16.0
            if below is not None:
                if x > 0:
                    below[x - 1] += error * 3.0 / 16.0
                below[x] += error * 5.0 / 16.0
                if x + 1 < width:
                    below[x + 1] += error * 1.0 / 16.0


def _char_for(value: int, config: AsciiConfig, ramp: str) -> str:
    brightness = ((value / 255.0 - 0.5) * config.contrast_boost + 0.5) * 255.0
    if math.isnan(brightness):
        brightness = 0.0
    brightness = min(max(brightness, 0.0), 255.0)
    if config.invert:
        brightness = 255.0 - brightness
    return ramp[_round_half_away(brightness / 255.0 * (len(ramp) - 1))]


def to_ascii(img: Image.Image, config: AsciiConfig | None = None) -> str:
    """Return ``img`` drawn with characters, one line per output row."""
    config = config if config is not None else AsciiConfig()
    ramp = config.ramp
    width, height = img.size
    new_width = config.max_width
    new_height = int(new_width * (height / width) * _CELL_ASPECT)
    if new_width <= 0 or new_height <= 0:
        return ""

    small = img.convert("RGBA").resize((new_width, new_height), Image.Resampling.LANCZOS)
    luma = grayscale(small).convert("L").tobytes()
    rows = [list(luma[start:start + new_width]) for start in range(0, len(luma), new_width)]

    if config.dither:
        float_rows = [[float(v) for v in row] for row in rows]
        _dither(float_rows, len(ramp))
        rows = [[int(min(max(v, 0.0), 255.0)) for v in row] for row in float_rows]

    return "".join(
        "".join(_char_for(value, config, ramp) for value in row) + "\n" for row in rows
    )