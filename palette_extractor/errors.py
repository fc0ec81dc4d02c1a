"""
errors.py
─────────
Exception hierarchy raised by the extraction pipeline.
"""

from __future__ import annotations


class ColorExtractionError(Exception):
    """Base class for every error raised by palette_extractor."""


class AcquisitionError(ColorExtractionError):
    """The image could not be fetched, opened or decoded."""


class RenderSurfaceError(ColorExtractionError):
    """A readable RGBA pixel surface could not be produced from the image."""


class MalformedInputError(ColorExtractionError, ValueError):
    """A colour string could not be parsed back into a Color."""


class ExtractionCancelled(ColorExtractionError):
    """The caller abandoned the extraction before its result was committed."""
