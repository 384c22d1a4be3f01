"""Command-line front end for the image filters and ASCII renderer."""

from __future__ import annotations

import re
import sys
from pathlib import Path

from PIL import Image

from moggu.ascii_art import AsciiConfig, to_ascii
from moggu.filters import (
    add_noise,
    adjust_brightness,
    adjust_contrast,
    adjust_saturation,
    apply_sepia,
    apply_vignette,
    box_blur,
    flip_horizontal,
    flip_vertical,
    gaussian_blur,
    grayscale,
    invert_colors,
    rotate90,
    rotate180,
    rotate270,
    sharpen,
)

PROGRAM_NAME = "moggu"

_INTEGER = re.compile(r"[+-]?\d+")
_SIGMA_ERROR = "Invalid sigma value. Must be a number like 5.0"
_STRENGTH_ERROR = "Invalid strength value. Must be a number like 1.0"

_SIMPLE_MODES = {
    "rotate90": ("Rotating image 90 degree clock wise...", rotate90),
    "rotate180": ("Rotating image 180 degree clock wise...", rotate180),
    "rotate270": ("Rotating image 270 degree clock wise...", rotate270),
    "flip-horizontal": ("Flipping image horizontally...", flip_horizontal),
    "flip-vertical": ("Flipping image vertically...", flip_vertical),
    "invert": ("Inverting the image colors...", invert_colors),
    "sepia": ("Applying sepia filter to the image...", apply_sepia),
}

_REQUIRED_VALUE_ERRORS = {
    "sharpen": "Error: Sharpen mode requires a strenght value.",
    "saturate": "Error: saturate mode requires a factor",
    "brightness": "Error: Brightness mode requires a value.",
    "contrast": "Error: Contrast mode requires a value.",
    "vignette": "Error: Vignette mode requires a strength value.",
    "noise": "Error: Noise filter requires a strength value.",
}


class CliError(Exception):
    """A failure reported to the user with a non-zero exit status."""


def _parse_float(text: str, message: str = "invalid float literal") -> float:
    try:
        return float(text.strip() if text == text.strip() else "x")
    except ValueError:
        raise CliError(message) from None


def _parse_int(text: str, low: int, high: int, message: str | None = None) -> int:
    if not _INTEGER.fullmatch(text):
        raise CliError(message or "invalid digit found in string")
    value = int(text)
    if not low <= value <= high:
        raise CliError(message or "number out of range for target type")
    return value


def _fmt(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def parse_ascii_options(args: list[str]) -> AsciiConfig:
    """Build an ASCII config from option arguments, ignoring unknown ones."""
    config = AsciiConfig()
    for arg in args:
        if arg == "--invert":
            config.invert = True
        elif arg == "--detailed":
            config.detailed = True
        elif arg == "--no-dither":
            config.dither = False
        elif arg.startswith("--width="):
            try:
                config.max_width = _parse_int(arg.removeprefix("--width="), 0, 2**32 - 1)
            except CliError:
                pass
        elif arg.startswith("--contrast="):
            try:
                config.contrast_boost = _parse_float(arg.removeprefix("--contrast="))
            except CliError:
                pass
    return config


def print_usage(program_name: str) -> None:
    """Write the usage text to standard error."""
    lines = [
        f"Usage: {program_name} <mode> <input> <output> [options]",
        "",
        "Modes:",
        "  grayscale <in> <out>              - Convert to a grayscale image file.",
        "  gaussian-blur <in> <out> <sigma>  - Apply a high-quality Gaussian blur (e.g., sigma 5.0). Alias: 'blur'.",
        "  box-blur <in> <out> <radius>      - Apply a simple, from-scratch box blur (e.g., radius 3).",
        "  rotate90 <in> <out>               - Rotate image 90 degrees clockwise.",
        "  rotate180 <in> <out>              - Rotate image 180 degrees.",
        "  rotate270 <in> <out>              - Rotate image 270 degrees clockwise.",
        "  flip-horizontal <in> <out>        - Flip image horizontally.",
        "  flip-vertical <in> <out>          - Flip image vertically.",
        "  ascii <in> <out> [options]    - Convert to a high-quality ASCII art text file.",
        "",
        "Options:",
        "  --width=N                     - Set maximum width in characters (default: 120).",
        "  --contrast=F                  - Adjust contrast. >1.0 increases, <1.0 decreases (default: 1.2).",
        "  --detailed                    - Use a larger, more detailed character set.",
        "  --invert                      - Invert the brightness for light-on-dark terminals.",
        "  --no-dither                   - Disable dithering for a simpler, banded look.",
    ]
    print("\n".join(lines), file=sys.stderr)


def _run(mode: str, img: Image.Image, args: list[str], output: str, prog: str) -> int:
    if mode in _SIMPLE_MODES:
        message, operation = _SIMPLE_MODES[mode]
        print(message)
        operation(img).save(output)
        return 0

    if mode == "grayscale":
        print("Converting to grayscale...")
        result = grayscale(img)
        print(f"Saving grayscale image to: {output}")
        result.save(output)
        return 0

    if mode == "ascii":
        config = parse_ascii_options(args[3:])
        print(
            "Converting to ASCII art with config: "
            f"({config.max_width}, {config.contrast_boost!r}, {str(config.invert).lower()}, "
            f"{str(config.detailed).lower()}, {str(config.dither).lower()})"
        )
        art = to_ascii(img, config)
        print(f"Saving ASCII art to: {output}")
        Path(output).write_text(art, encoding="utf-8", newline="")
        return 0

    if mode in ("blur", "gaussian-blur", "box-blur"):
        if len(args) != 4:
            print("Error: Blur mode requires a sigma value.", file=sys.stderr)
            print(f"Usage: {prog} blur <input> <output> <sigma>", file=sys.stderr)
            if len(args) < 4:
                return 1
        if mode == "box-blur":
            radius = _parse_int(args[3], 0, 2**32 - 1, _SIGMA_ERROR)
            print(f"Applying blur to the image with sigma: {radius}")
            result = box_blur(img, radius)
        else:
            sigma = _parse_float(args[3], _SIGMA_ERROR)
            print(f"Applying blur to the image with sigma: {_fmt(sigma)}")
            result = gaussian_blur(img, sigma)
        print(f"Saving the blurred image to: {output}")
        result.save(output)
        return 0

    if mode in _REQUIRED_VALUE_ERRORS:
        if len(args) != 4:
            print(_REQUIRED_VALUE_ERRORS[mode], file=sys.stderr)
            if mode == "sharpen":
                print(f"Usage: {prog} sharpen <input> <output> <strength>", file=sys.stderr)
            return 0
        value = args[3]
        if mode == "sharpen":
            strength = _parse_float(value, _STRENGTH_ERROR)
            print(f"Applying sharpen filter with strength: {_fmt(strength)}")
            result = sharpen(img, strength)
        elif mode == "saturate":
            result = adjust_saturation(img, _parse_float(value))
        elif mode == "brightness":
            amount = _parse_int(value, -(2**31), 2**31 - 1)
            print(f"Adjusting brightness by {amount}")
            result = adjust_brightness(img, amount)
        elif mode == "contrast":
            factor = _parse_float(value)
            print(f"Adjusting Contrast by {_fmt(factor)}")
            result = adjust_contrast(img, factor)
        elif mode == "vignette":
            strength = _parse_float(value)
            print(f"Applying vignette with strength: {_fmt(strength)}")
            result = apply_vignette(img, strength)
        else:
            result = add_noise(img, _parse_int(value, 0, 255))
        result.save(output)
        return 0

    print_usage(prog)
    raise CliError("Unknown mode specified.")


def main(argv: list[str] | None = None) -> int:
    """Run the image tool; ``argv`` excludes the program name."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print_usage(PROGRAM_NAME)
        return 0

    mode, input_path, output_path = args[:3]
    try:
        print(f"Opening image: {input_path}")
        with Image.open(input_path) as opened:
            opened.load()
            img = opened.copy()
        print(f"Image dimensions: {img.width}x{img.height}")
        status = _run(mode, img, args, output_path, PROGRAM_NAME)
    except (CliError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if status == 0:
        print("Operation complete.")
    return status


if __name__ == "__main__":
    sys.exit(main())