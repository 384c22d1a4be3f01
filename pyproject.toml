[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "moggu"
version = "0.1.0"
description = "Command-line image filters and ASCII art conversion, plus a gradient PPM generator"
requires-python = ">=3.10"
keywords = ["image", "filters", "ascii-art", "blur", "sepia", "ppm"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
moggu = "moggu.cli:main"
moggu-generator = "moggu.generator:main"

[tool.hatch.build.targets.wheel]
packages = ["moggu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
