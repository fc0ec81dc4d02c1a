"""Palette Extractor – dominant, darker, lighter and top colours of an image."""
from .colors import Color, format_color, parse_color
from .errors import (
    AcquisitionError,
    ColorExtractionError,
    ExtractionCancelled,
    MalformedInputError,
    RenderSurfaceError,
)
from .extractor import (
    CancellationToken,
    ExtractionResult,
    FormattedColors,
    extract,
    extract_formatted,
    extract_from_pixels,
    format_colors,
)
from .clustering import PixelBuffer
from .loader import load_pixels
from .log import configure_logging
from .options import DEFAULT_OPTIONS, ExtractOptions, load_options, merge_options
from .watcher import ColorWatcher, WatcherState

__all__ = [
    "Color",
    "format_color",
    "parse_color",
    "AcquisitionError",
    "ColorExtractionError",
    "ExtractionCancelled",
    "MalformedInputError",
    "RenderSurfaceError",
    "CancellationToken",
    "ExtractionResult",
    "FormattedColors",
    "extract",
    "extract_formatted",
    "extract_from_pixels",
    "format_colors",
    "PixelBuffer",
    "load_pixels",
    "configure_logging",
    "DEFAULT_OPTIONS",
    "ExtractOptions",
    "load_options",
    "merge_options",
    "ColorWatcher",
    "WatcherState",
]
