"""Pixel-buffer builders shared by the test modules."""

from __future__ import annotations

from typing import Tuple

from palette_extractor.clustering import PixelBuffer

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


def make_buffer(*runs: Tuple[Tuple[int, int, int, int], int]) -> PixelBuffer:
    """Build a 1-pixel-high buffer from ``(pixel, repeat)`` runs."""
    pixels = [px for px, n in runs for _ in range(n)]
    return PixelBuffer.from_pixels(pixels, len(pixels), 1 if pixels else 0)
