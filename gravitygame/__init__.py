"""A gravity-flipping side-scrolling platformer, with a small JSON scanner, level loader and collision rules."""

__version__ = "0.1.0"