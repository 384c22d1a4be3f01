"""Write a test-pattern gradient as a binary PPM image to standard output."""

from __future__ import annotations

import argparse
import sys

DEFAULT_SIZE = 256
BLUE = 128


def gradient_ppm(width: int = DEFAULT_SIZE, height: int = DEFAULT_SIZE) -> bytes:
    """Return a P6 image whose red follows x and green follows y, wrapping at 256."""
    header = f"P6\n{width} {height}\n255\n".encode("ascii")
    rows = (
        bytes(v for x in range(width) for v in (x & 0xFF, y & 0xFF, BLUE))
        for y in range(height)
    )
    return header + b"".join(rows)


def main(argv: list[str] | None = None) -> int:
    """Write the default gradient to standard output."""
    parser = argparse.ArgumentParser(
        prog="moggu-generator",
        description="Write a 256x256 gradient PPM image to standard output.",
    )
    parser.parse_args(argv)
    out = sys.stdout.buffer
    out.write(gradient_ppm())
    out.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())