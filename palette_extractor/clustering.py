"""
clustering.py
─────────────
Groups raw RGBA samples into similarity clusters and scores them.

Each cluster is represented by the first pixel that started it. A pixel
joins the first cluster (in creation order) whose representative lies
strictly closer than the similarity threshold in RGB space; otherwise it
starts a new cluster. Pixels with alpha below ``ALPHA_CUTOFF`` are ignored.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Tuple

from .colors import Color, vibrance

logger = logging.getLogger(__name__)

ALPHA_CUTOFF = 125
SORT_MODES: Tuple[str, ...] = ("dominance", "vibrance")

Pixel = Tuple[int, int, int, int]


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major RGBA8 pixels, four bytes per pixel."""

    data: bytes
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative buffer size: {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise ValueError(
                f"Pixel buffer holds {len(self.data)} bytes, "
                f"expected {expected} for {self.width}x{self.height} RGBA"
            )

    @classmethod
    def from_pixels(cls, pixels: Iterable[Pixel], width: int, height: int) -> "PixelBuffer":
        """Pack ``(r, g, b, a)`` tuples into a buffer."""
        return cls(bytes(channel for px in pixels for channel in px), width, height)


def iter_pixels(buffer: bytes) -> Iterator[Pixel]:
    """Yield ``(r, g, b, a)`` tuples; a trailing partial pixel is ignored."""
    data = memoryview(buffer)
    for i in range(0, len(data) - 3, 4):
        yield data[i], data[i + 1], data[i + 2], data[i + 3]


def distance(c1: Tuple[int, ...], c2: Tuple[int, ...]) -> float:
    """Euclidean distance over the first three channels."""
    return math.sqrt(
        (c1[0] - c2[0]) ** 2 + (c1[1] - c2[1]) ** 2 + (c1[2] - c2[2]) ** 2
    )


def cluster_pixels(
    buffer: bytes | PixelBuffer,
    threshold: float = 50,
    sort_by: str = "dominance",
) -> List[Color]:
    """
    Cluster *buffer* and return one Color per cluster, in creation order.

    ``rank`` is the member count in ``dominance`` mode, or the
    representative's saturation × value in ``vibrance`` mode.
    """
    if sort_by not in SORT_MODES:
        raise ValueError(f"sort_by must be one of {SORT_MODES}, got {sort_by!r}")
    if isinstance(buffer, PixelBuffer):
        buffer = buffer.data

    representatives: List[Pixel] = []
    counts: List[int] = []
    count_members = sort_by == "dominance"

    for pixel in iter_pixels(buffer):
        if pixel[3] < ALPHA_CUTOFF:
            continue
        for idx, rep in enumerate(representatives):
            if pixel == rep or distance(pixel, rep) < threshold:
                if count_members:
                    counts[idx] += 1
                break
        else:
            representatives.append(pixel)
            counts.append(1)

    clusters = [Color(*rep, rank=count) for rep, count in zip(representatives, counts)]
    if not count_members:
        clusters = [replace(c, rank=vibrance(c)) for c in clusters]

    logger.debug("Clustered %d bytes into %d colours (%s)", len(buffer), len(clusters), sort_by)
    return clusters


def rank_colors(clusters: List[Color]) -> List[Color]:
    """Sort by descending rank; ties keep creation order."""
    return sorted(clusters, key=lambda c: c.rank, reverse=True)
