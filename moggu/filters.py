"""Pixel-level image filters operating on Pillow images.

Every filter takes a :class:`PIL.Image.Image` and returns a new image.
Unless stated otherwise, the result is an 8-bit RGB image and any alpha
channel of the input is dropped.
"""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Iterable, Sequence

from PIL import Image, ImageFilter

Pixel = tuple[int, int, int]

_SHARPEN_KERNEL = (
    (0, -1, -1.0),
    (-1, 0, -1.0),
    (0, 0, 5.0),
    (1, 0, -1.0),
    (0, 1, -1.0),
)

_LUMA_WEIGHTS = (2126, 7152, 722)


def _to_byte(value: float) -> int:
    """Clamp a float to 0..255 and truncate it, as a saturating cast does."""
    if math.isnan(value):
        return 0
    return int(min(max(value, 0.0), 255.0))


def _rgb_pixels(img: Image.Image) -> list[Pixel]:
    data = img.convert("RGB").tobytes()
    return list(zip(data[0::3], data[1::3], data[2::3]))


def _to_image(size: tuple[int, int], pixels: Iterable[Pixel]) -> Image.Image:
    raw = bytes(channel for pixel in pixels for channel in pixel)
    return Image.frombytes("RGB", size, raw)


def _map_pixels(img: Image.Image, fn: Callable[[Pixel], Pixel]) -> Image.Image:
    rgb = img.convert("RGB")
    return _to_image(rgb.size, (fn(p) for p in _rgb_pixels(rgb)))


def _map_channels(img: Image.Image, fn: Callable[[int], int]) -> Image.Image:
    """Apply the same per-value function to each of the R, G and B channels."""
    table = [fn(v) for v in range(256)]
    return img.convert("RGB").point(table * 3)


def _integral(pixels: Sequence[Pixel], width: int, height: int, channel: int) -> list[list[int]]:
    table = [[0] * (width + 1)]
    for y in range(height):
        row_total = 0
        above = table[-1]
        row = [0]
        for x, pixel in enumerate(pixels[y * width:(y + 1) * width]):
            row_total += pixel[channel]
            row.append(above[x + 1] + row_total)
        table.append(row)
    return table


def _region_sum(table: list[list[int]], x0: int, y0: int, x1: int, y1: int) -> int:
    return table[y1 + 1][x1 + 1] - table[y0][x1 + 1] - table[y1 + 1][x0] + table[y0][x0]


def box_blur(img: Image.Image, radius: int) -> Image.Image:
    """Average each pixel over the square of the given radius, clipped at the edges."""
    if radius < 0:
        raise ValueError("radius must not be negative")
    width, height = img.size
    pixels = _rgb_pixels(img)
    tables = [_integral(pixels, width, height, c) for c in range(3)]

    def blurred() -> Iterable[Pixel]:
        for y in range(height):
            y0, y1 = max(0, y - radius), min(height - 1, y + radius)
            for x in range(width):
                x0, x1 = max(0, x - radius), min(width - 1, x + radius)
                count = (y1 - y0 + 1) * (x1 - x0 + 1)
                yield tuple(_region_sum(t, x0, y0, x1, y1) // count for t in tables)

    return _to_image((width, height), blurred())


def flip_horizontal(img: Image.Image) -> Image.Image:
    """Mirror the image left to right."""
    return img.convert("RGB").transpose(Image.Transpose.FLIP_LEFT_RIGHT)


def flip_vertical(img: Image.Image) -> Image.Image:
    """Mirror the image top to bottom."""
    return img.convert("RGB").transpose(Image.Transpose.FLIP_TOP_BOTTOM)


def rotate90(img: Image.Image) -> Image.Image:
    """Rotate the image 90 degrees clockwise."""
    return img.convert("RGB").transpose(Image.Transpose.ROTATE_270)


def rotate180(img: Image.Image) -> Image.Image:
    """Rotate the image 180 degrees."""
    return img.convert("RGB").transpose(Image.Transpose.ROTATE_180)


def rotate270(img: Image.Image) -> Image.Image:
    """Rotate the image 270 degrees clockwise."""
    return img.convert("RGB").transpose(Image.Transpose.ROTATE_90)


def sharpen(img: Image.Image, strength: float) -> Image.Image:
    """Blend each interior pixel with a 3x3 sharpening convolution.

    Pixels on the one-pixel border are left black.
    """
    width, height = img.size
    pixels = _rgb_pixels(img)
    out: list[Pixel] = [(0, 0, 0)] * (width * height)

    for y in range(1, height - 1):
        for x in range(1, width - 1):
            sums = [0.0, 0.0, 0.0]
            for dx, dy, weight in _SHARPEN_KERNEL:
                neighbour = pixels[(y + dy) * width + (x + dx)]
                for c in range(3):
                    sums[c] += neighbour[c] * weight
            original = pixels[y * width + x]
            out[y * width + x] = tuple(
                _to_byte(original[c] * (1.0 - strength) + sums[c] * strength)
                for c in range(3)
            )
    return _to_image((width, height), out)


def adjust_brightness(img: Image.Image, value: int) -> Image.Image:
    """Add ``value`` to every channel, clamping to 0..255."""
    return _map_channels(img, lambda v: min(max(v + value, 0), 255))


def adjust_contrast(img: Image.Image, factor: float) -> Image.Image:
    """Scale every channel's distance from 128 by ``factor``."""
    return _map_channels(img, lambda v: _to_byte(factor * (v - 128.0) + 128.0))


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert 8-bit RGB to (hue in degrees, saturation, lightness)."""
    red, green, blue = r / 255.0, g / 255.0, b / 255.0
    high = max(red, green, blue)
    low = min(red, green, blue)
    lightness = (high + low) / 2.0
    hue = 0.0
    saturation = 0.0

    if high != low:
        diff = high - low
        if lightness > 0.5:
            saturation = diff / (2.0 - high - low)
        else:
            saturation = diff / (high + low)
        if high == red:
            hue = (green - blue) / diff + (6.0 if green < blue else 0.0)
        elif high == green:
            hue = (blue - red) / diff + 2.0
        else:
            hue = (red - green) / diff + 4.0
        hue /= 6.0
    return hue * 360.0, saturation, lightness


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 1.0 / 2.0:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """Convert (hue in degrees, saturation, lightness) to 8-bit RGB."""
    if s == 0.0:
        value = _to_byte(l * 255.0)
        return value, value, value

    q = l * (1.0 + s) if l < 0.5 else l + s - l * s
    p = 2.0 * l - q
    hue = h / 360.0
    red = _hue_to_rgb(p, q, hue + 1.0 / 3.0)
    green = _hue_to_rgb(p, q, hue)
    blue = _hue_to_rgb(p, q, hue - 1.0 / 3.0)
    return _to_byte(red * 255.0), _to_byte(green * 255.0), _to_byte(blue * 255.0)


def adjust_saturation(img: Image.Image, factor: float) -> Image.Image:
    """Scale the HSL saturation of every pixel by ``factor``."""

    def saturate(pixel: Pixel) -> Pixel:
        h, s, l = rgb_to_hsl(*pixel)
        return hsl_to_rgb(h, min(max(s * factor, 0.0), 1.0), l)

    return _map_pixels(img, saturate)


def invert_colors(img: Image.Image) -> Image.Image:
    """Replace every channel value v with 255 - v."""
    return _map_channels(img, lambda v: 255 - v)


def apply_sepia(img: Image.Image) -> Image.Image:
    """Apply the classic sepia tone matrix."""

    def sepia(pixel: Pixel) -> Pixel:
        r, g, b = pixel
        return (
            _to_byte(r * 0.393 + g * 0.769 + b * 0.189),
            _to_byte(r * 0.349 + g * 0.686 + b * 0.168),
            _to_byte(r * 0.272 + g * 0.534 + b * 0.131),
        )

    return _map_pixels(img, sepia)


def apply_vignette(img: Image.Image, strength: float) -> Image.Image:
    """Darken pixels by the square of their normalised distance from the centre."""
    width, height = img.size
    center_x, center_y = width / 2.0, height / 2.0
    max_dist = math.hypot(center_x, center_y)
    pixels = _rgb_pixels(img)

    def vignetted() -> Iterable[Pixel]:
        for index, pixel in enumerate(pixels):
            y, x = divmod(index, width)
            dist = math.hypot(x - center_x, y - center_y) / max_dist
            factor = 1.0 - dist ** 2 * strength
            yield tuple(_to_byte(v * factor) for v in pixel)

    return _to_image((width, height), vignetted())


def add_noise(img: Image.Image, strength: int, rng: random.Random | None = None) -> Image.Image:
    """Add one uniform random offset in [-strength, strength] to each pixel."""
    if not 0 <= strength <= 255:
        raise ValueError("strength must be between 0 and 255")
    rng = rng if rng is not None else random.Random()

    def noisy(pixel: Pixel) -> Pixel:
        noise = rng.randint(-strength, strength)
        return tuple(min(max(v + noise, 0), 255) for v in pixel)

    return _map_pixels(img, noisy)


def gaussian_blur(img: Image.Image, sigma: float) -> Image.Image:
    """Apply a Gaussian blur with standard deviation ``sigma``, keeping the mode."""
    if img.mode not in ("L", "LA", "RGB", "RGBA"):
        img = img.convert("RGBA")
    return img.filter(ImageFilter.GaussianBlur(radius=sigma))


def grayscale(img: Image.Image) -> Image.Image:
    """Convert to luma using Rec. 709 weights, keeping alpha if present."""
    has_alpha = "A" in img.getbands() or img.mode == "P" and "transparency" in img.info
    rgba = img.convert("RGBA")
    data = rgba.tobytes()
    wr, wg, wb = _LUMA_WEIGHTS
    lumas = [
        (wr * r + wg * g + wb * b) // 10000
        for r, g, b in zip(data[0::4], data[1::4], data[2::4])
    ]
    if has_alpha:
        raw = bytes(v for pair in zip(lumas, data[3::4]) for v in pair)
        return Image.frombytes("LA", rgba.size, raw)
    return Image.frombytes("L", rgba.size, bytes(lumas))