"""
extractor.py
────────────
Ranks clustered colours, derives the darker/lighter variants of the
dominant colour and renders results as text.

``extract_from_pixels`` is the synchronous core. ``extract`` wraps it with
image acquisition and honours a cancellation token, so a caller that has
gone away never receives a half-applied result.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from .clustering import PixelBuffer, cluster_pixels, rank_colors
from .colors import Color, darker, formatter_for, lighter
from .errors import ExtractionCancelled
from .loader import load_pixels
from .options import ExtractOptions, merge_options
from .settings import get_settings

logger = logging.getLogger(__name__)

Loader = Callable[[Any, int], Awaitable[PixelBuffer]]


# ── Result types ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FormattedColors:
    """Text rendering of an :class:`ExtractionResult`."""

    dominant_color: str
    darker_color:   str
    lighter_color:  str
    colors:         Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["colors"] = list(self.colors)
        return data


@dataclass(frozen=True)
class ExtractionResult:
    """Ranked colours; the three singles are all ``None`` iff ``colors`` is empty."""

    dominant_color: Optional[Color] = None
    darker_color:   Optional[Color] = None
    lighter_color:  Optional[Color] = None
    colors:         Tuple[Color, ...] = field(default_factory=tuple)

    def format(self, fmt: str = "rgba", max_colors: int = 3) -> FormattedColors:
        return format_colors(self, merge_options(format=fmt, max_colors=max_colors))


class CancellationToken:
    """Signals that the result of an in-flight extraction must be discarded."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise ExtractionCancelled("Extraction was cancelled by the caller.")


# ── Core ──────────────────────────────────────────────────────────────────────

def select(ranked: List[Color]) -> ExtractionResult:
    """Build a result from colours already sorted by descending rank."""
    if not ranked:
        return ExtractionResult()
    dominant = ranked[0]
    return ExtractionResult(
        dominant_color=dominant,
        darker_color=darker(dominant),
        lighter_color=lighter(dominant),
        colors=tuple(ranked),
    )


def extract_from_pixels(
    buffer: PixelBuffer | bytes,
    options: Optional[ExtractOptions] = None,
) -> ExtractionResult:
    """Cluster, rank and select colours from a raw RGBA buffer."""
    opts = options or get_settings().default_options
    clusters = cluster_pixels(buffer, opts.color_similarity_threshold, opts.sort_by)
    return select(rank_colors(clusters))


def format_colors(
    result: ExtractionResult,
    options: Optional[ExtractOptions] = None,
) -> FormattedColors:
    """
    Render *result* in ``options.format``.

    Only the ``colors`` list is truncated to ``options.max_colors``; the
    dominant, darker and lighter entries always come from the top colour.
    """
    opts = options or get_settings().default_options
    fmt = formatter_for(opts.format)
    return FormattedColors(
        dominant_color=fmt(result.dominant_color),
        darker_color=fmt(result.darker_color),
        lighter_color=fmt(result.lighter_color),
        colors=tuple(fmt(c) for c in result.colors[: opts.max_colors]),
    )


# ── Async entry points ────────────────────────────────────────────────────────

async def extract(
    image_ref: Any,
    options: Optional[ExtractOptions] = None,
    *,
    token: Optional[CancellationToken] = None,
    loader: Optional[Loader] = None,
) -> ExtractionResult:
    """
    Acquire *image_ref* and extract its colours.

    Raises
    ------
    AcquisitionError, RenderSurfaceError
        If the image could not be turned into pixels.
    ExtractionCancelled
        If *token* was cancelled before the result was ready.
    """
    loader = loader or load_pixels
    options = options or get_settings().default_options

    if token is not None:
        token.raise_if_cancelled()
    pixels = await loader(image_ref, options.max_size)
    if token is not None:
        token.raise_if_cancelled()

    result = extract_from_pixels(pixels, options)
    logger.debug(
        "Extracted %d colours from %dx%d sample",
        len(result.colors), pixels.width, pixels.height,
    )
    return result


async def extract_formatted(
    image_ref: Any,
    options: Optional[ExtractOptions] = None,
    *,
    token: Optional[CancellationToken] = None,
    loader: Optional[Loader] = None,
) -> FormattedColors:
    """:func:`extract` followed by :func:`format_colors`."""
    options = options or get_settings().default_options
    result = await extract(image_ref, options, token=token, loader=loader)
    return format_colors(result, options)
