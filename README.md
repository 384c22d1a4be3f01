# moggu

A small image tool with two commands. `moggu` applies filters to image files
and turns images into ASCII art. `moggu-generator` writes a test gradient
image in binary PPM format to standard output.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Filtering images

```
moggu <mode> <input> <output> [options]
```

The input is opened with Pillow, and the output format is taken from the
output file's extension.

| Mode | Arguments | Effect |
|------|-----------|--------|
| `grayscale` | `<in> <out>` | Convert to luma (Rec. 709 weights), keeping alpha if the input has it |
| `gaussian-blur` (alias `blur`) | `<in> <out> <sigma>` | Gaussian blur, for example sigma `5.0` |
| `box-blur` | `<in> <out> <radius>` | Box blur with a non-negative integer radius |
| `sharpen` | `<in> <out> <strength>` | 3×3 sharpening, blended by strength (for example `1.0`); the one-pixel border comes out black |
| `saturate` | `<in> <out> <factor>` | Scale HSL saturation |
| `brightness` | `<in> <out> <value>` | Add an integer to every channel |
| `contrast` | `<in> <out> <factor>` | Stretch each channel around 128 |
| `invert` | `<in> <out>` | Invert colours |
| `sepia` | `<in> <out>` | Sepia tone |
| `vignette` | `<in> <out> <strength>` | Darken towards the corners |
| `noise` | `<in> <out> <strength>` | Add random noise, strength 0–255 |
| `rotate90`, `rotate180`, `rotate270` | `<in> <out>` | Rotate clockwise |
| `flip-horizontal`, `flip-vertical` | `<in> <out>` | Mirror the image |
| `ascii` | `<in> <out> [options]` | Write ASCII art to a text file |

Apart from `grayscale` and the Gaussian blur, every mode writes an RGB image
and drops any alpha channel.

Examples:

```
moggu sepia photo.png photo-sepia.png
moggu box-blur photo.png soft.png 3
moggu ascii photo.png photo.txt --width=80 --detailed
```

With fewer than three arguments, `moggu` prints its usage and exits with
status 0. A mode that needs a value but is given none prints an error and
writes nothing. An unknown mode, an unreadable file or a malformed value ends
with an error message and exit status 1.

### ASCII options

- `--width=N`: width in characters (default 120); the height follows the
  image's aspect ratio, halved because terminal cells are tall
- `--contrast=F`: contrast boost; above 1.0 increases it, below 1.0 decreases it (default 1.2)
- `--detailed`: use a larger character ramp
- `--invert`: invert brightness, for light-on-dark terminals
- `--no-dither`: turn off Floyd–Steinberg dithering

Unknown options and values that do not parse are ignored.

## Generating a test image

```
moggu-generator > gradient.ppm
```

This writes a 256×256 P6 image to standard output. Red rises from left to
right, green rises from top to bottom, and blue is fixed at 128.

## Using it from Python

```python
import random

from PIL import Image
from moggu.filters import add_noise, apply_sepia, box_blur, rotate90
from moggu.ascii_art import AsciiConfig, to_ascii
from moggu.generator import gradient_ppm

img = Image.open("photo.png")
apply_sepia(img).save("sepia.png")
rotate90(img).save("rotated.png")
box_blur(img, 2).save("soft.png")
add_noise(img, 20, random.Random(1)).save("noisy.png")
print(to_ascii(img, AsciiConfig(max_width=60, detailed=True)))

with open("gradient.ppm", "wb") as fh:
    fh.write(gradient_ppm(64, 32))
```

`moggu.filters` also provides `flip_horizontal`, `flip_vertical`,
`rotate180`, `rotate270`, `sharpen`, `adjust_brightness`, `adjust_contrast`,
`adjust_saturation`, `invert_colors`, `apply_vignette`, `gaussian_blur`,
`grayscale`, and the colour conversions `rgb_to_hsl` and `hsl_to_rgb`.
`moggu.cli.parse_ascii_options` turns a list of option strings into an
`AsciiConfig`.