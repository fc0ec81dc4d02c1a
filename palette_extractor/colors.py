"""
colors.py
─────────
Colour value type, derived variants and text formatting.

Every formatter is null-safe: passing ``None`` returns a fixed fallback
literal instead of raising, so a missing dominant colour still renders.
"""

from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

from .errors import MalformedInputError

Format = str
FORMATS: Tuple[Format, ...] = ("hex", "rgb", "rgba", "hsl", "hsv")

DARKEN_STEP = 50
LIGHTEN_STEP = 30


# ── Colour value ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Color:
    """An RGBA colour plus the score it was ranked by."""

    r: int
    g: int
    b: int
    a: int = 255
    rank: float = 0

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


# ── Colour-space math ─────────────────────────────────────────────────────────

def rgb_to_hsv(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert 0–255 channels to ``(h, s, v)``, each in [0, 1]."""
    return colorsys.rgb_to_hsv(r / 255, g / 255, b / 255)


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert 0–255 channels to ``(h, s, l)``, each in [0, 1]."""
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    return h, s, l


def _round(x: float) -> int:
    """Round half up, so 0.5 always goes to 1."""
    return math.floor(x + 0.5)


def vibrance(color: Color) -> float:
    """Saturation × value of *color*, in [0, 1]."""
    _, s, v = rgb_to_hsv(color.r, color.g, color.b)
    return s * v


# ── Derived variants ──────────────────────────────────────────────────────────

def darker(color: Color) -> Color:
    """Subtract 50 from each RGB channel, floored at 0."""
    return replace(
        color,
        r=max(0, color.r - DARKEN_STEP),
        g=max(0, color.g - DARKEN_STEP),
        b=max(0, color.b - DARKEN_STEP),
    )


def lighter(color: Color) -> Color:
    """Add 30 to each RGB channel, capped at 255."""
    return replace(
        color,
        r=min(255, color.r + LIGHTEN_STEP),
        g=min(255, color.g + LIGHTEN_STEP),
        b=min(255, color.b + LIGHTEN_STEP),
    )


# ── Text formatters ───────────────────────────────────────────────────────────

def to_rgba(color: Optional[Color]) -> str:
    if color is None:
        return "rgba(0,0,0,0)"
    return f"rgba({color.r},{color.g},{color.b},{color.a})"


def to_rgb(color: Optional[Color]) -> str:
    if color is None:
        return "rgb(0,0,0)"
    return f"rgb({color.r},{color.g},{color.b})"


def to_hex(color: Optional[Color]) -> str:
    """Lowercase ``#rrggbb``; alpha is dropped."""
    if color is None:
        return "#000000"
    return "#{:02x}{:02x}{:02x}".format(*color.rgb)


def to_hsl(color: Optional[Color]) -> str:
    if color is None:
        return "hsl(0,0%,0%)"
    h, s, l = rgb_to_hsl(color.r, color.g, color.b)
    return f"hsl({_round(h * 360)}, {_round(s * 100)}%, {_round(l * 100)}%)"


def to_hsv(color: Optional[Color]) -> str:
    if color is None:
        return "hsv(0,0%,0%)"
    h, s, v = rgb_to_hsv(color.r, color.g, color.b)
    if v == 0:
        # Black short-circuits with the value channel left unrounded.
        return f"hsv(0, 0%, {v * 100:g}%)"
    return f"hsv({_round(h * 360)}, {_round(s * 100)}%, {_round(v * 100)}%)"


_FORMATTERS: Dict[Format, Callable[[Optional[Color]], str]] = {
    "hex":  to_hex,
    "rgb":  to_rgb,
    "rgba": to_rgba,
    "hsl":  to_hsl,
    "hsv":  to_hsv,
}


def formatter_for(fmt: Format) -> Callable[[Optional[Color]], str]:
    """Return the formatter for *fmt*, raising ``ValueError`` if unknown."""
    try:
        return _FORMATTERS[fmt]
    except KeyError:
        raise ValueError(
            f"Unknown colour format {fmt!r}; expected one of {', '.join(FORMATS)}"
        ) from None


def format_color(color: Optional[Color], fmt: Format = "rgba") -> str:
    return formatter_for(fmt)(color)


# ── Parsing (interop helper) ──────────────────────────────────────────────────

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")
_FUNC_RE = re.compile(
    r"^(rgba|rgb|hsl|hsv)\(\s*([\d.]+)\s*,\s*([\d.]+)%?\s*,\s*([\d.]+)%?\s*(?:,\s*([\d.]+)\s*)?\)$"
)


def _to_bytes(r: float, g: float, b: float) -> Tuple[int, int, int]:
    return round(r * 255), round(g * 255), round(b * 255)


def parse_color(text: str) -> Color:
    """
    Parse any string produced by the formatters back into a Color.

    HSL and HSV strings are rounded, so the result is only approximately
    the colour that produced them.

    Raises
    ------
    MalformedInputError
        If *text* is not in one of the supported formats.
    """
    value = text.strip()
    m = _HEX_RE.match(value)
    if m:
        n = int(m.group(1), 16)
        return Color((n >> 16) & 0xFF, (n >> 8) & 0xFF, n & 0xFF)

    m = _FUNC_RE.match(value)
    if not m:
        raise MalformedInputError(f"Unrecognised colour string: {text!r}")

    kind, x, y, z, w = m.groups()
    if (kind == "rgba") != (w is not None):
        raise MalformedInputError(f"Wrong channel count for {kind}: {text!r}")

    try:
        if kind in ("rgb", "rgba"):
            channels = [int(x), int(y), int(z), int(w) if w is not None else 255]
        else:
            h, s, third = float(x) / 360, float(y) / 100, float(z) / 100
    except ValueError as exc:
        raise MalformedInputError(f"Invalid number in {text!r}") from exc

    if kind in ("rgb", "rgba"):
        if any(c > 255 for c in channels):
            raise MalformedInputError(f"Channel out of range: {text!r}")
        return Color(*channels)

    if kind == "hsl":
        return Color(*_to_bytes(*colorsys.hls_to_rgb(h, third, s)))
    return Color(*_to_bytes(*colorsys.hsv_to_rgb(h, s, third)))
