"""Image filters, ASCII art conversion and a gradient PPM generator."""

__version__ = "0.1.0"