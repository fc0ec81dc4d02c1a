"""Tests for colour formatting and derived variants."""

from __future__ import annotations

import pytest

from palette_extractor.colors import (
    FORMATS,
    Color,
    darker,
    format_color,
    lighter,
    parse_color,
    rgb_to_hsv,
    to_hex,
    to_hsl,
    to_hsv,
    to_rgb,
    to_rgba,
    vibrance,
)
from palette_extractor.errors import MalformedInputError

FALLBACKS = {
    "hex": "#000000",
    "rgb": "rgb(0,0,0)",
    "rgba": "rgba(0,0,0,0)",
    "hsl": "hsl(0,0%,0%)",
    "hsv": "hsv(0,0%,0%)",
}


@pytest.mark.parametrize("fmt", FORMATS)
def test_none_formats_to_fallback(fmt: str) -> None:
    assert format_color(None, fmt) == FALLBACKS[fmt]


def test_rgb_and_rgba_literals() -> None:
    color = Color(12, 34, 56, 200)

    assert to_rgba(color) == "rgba(12,34,56,200)"
    assert to_rgb(color) == "rgb(12,34,56)"


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((255, 0, 0), "#ff0000"),
        ((10, 20, 30), "#0a141e"),
        ((0, 0, 0), "#000000"),
        ((171, 205, 239), "#abcdef"),
    ],
)
def test_hex_is_lowercase_and_zero_padded(rgb, expected) -> None:
    out = to_hex(Color(*rgb, a=7))

    assert out == expected
    assert len(out) == 7
    assert out == out.lower()


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((255, 0, 0), "hsl(0, 100%, 50%)"),
        ((51, 102, 153), "hsl(210, 50%, 40%)"),
        ((0, 0, 255), "hsl(240, 100%, 50%)"),
        ((128, 128, 128), "hsl(0, 0%, 50%)"),
        ((255, 255, 255), "hsl(0, 0%, 100%)"),
    ],
)
def test_hsl(rgb, expected) -> None:
    assert to_hsl(Color(*rgb)) == expected


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((255, 0, 0), "hsv(0, 100%, 100%)"),
        ((51, 102, 153), "hsv(210, 67%, 60%)"),
        ((0, 255, 0), "hsv(120, 100%, 100%)"),
        ((128, 128, 128), "hsv(0, 0%, 50%)"),
        ((0, 0, 0), "hsv(0, 0%, 0%)"),
    ],
)
def test_hsv(rgb, expected) -> None:
    assert to_hsv(Color(*rgb)) == expected


def test_hue_wraps_when_blue_exceeds_green() -> None:
    # magenta-ish: red is max and g < b
    h, _, _ = rgb_to_hsv(255, 0, 128)
    assert 0.9 < h < 1.0


def test_vibrance_is_saturation_times_value() -> None:
    assert vibrance(Color(255, 0, 0)) == pytest.approx(1.0)
    assert vibrance(Color(128, 128, 128)) == 0
    assert vibrance(Color(0, 0, 0)) == 0
    assert vibrance(Color(51, 102, 153)) == pytest.approx((0.4 / 0.6) * 0.6)


def test_darker_floors_at_zero_and_keeps_alpha() -> None:
    out = darker(Color(10, 100, 255, 130, rank=4))

    assert (out.r, out.g, out.b, out.a) == (0, 50, 205, 130)
    assert out.rank == 4


def test_lighter_caps_at_255_and_keeps_alpha() -> None:
    out = lighter(Color(250, 100, 0, 200))

    assert (out.r, out.g, out.b, out.a) == (255, 130, 30, 200)


def test_unknown_format_raises() -> None:
    with pytest.raises(ValueError):
        format_color(Color(1, 2, 3), "cmyk")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#0a141e", (10, 20, 30, 255)),
        ("rgb(1,2,3)", (1, 2, 3, 255)),
        ("rgba(1,2,3,130)", (1, 2, 3, 130)),
        ("hsl(0, 100%, 50%)", (255, 0, 0, 255)),
        ("hsv(120, 100%, 100%)", (0, 255, 0, 255)),
        ("hsv(0,0%,0%)", (0, 0, 0, 255)),
    ],
)
def test_parse_color(text: str, expected) -> None:
    assert parse_color(text).rgba == expected


@pytest.mark.parametrize(
    "text",
    ["", "red", "#12345", "rgb(1,2)", "rgba(1,2,3)", "rgb(1,2,3,4)", "rgb(300,0,0)"],
)
def test_parse_color_rejects_malformed(text: str) -> None:
    with pytest.raises(MalformedInputError):
        parse_color(text)
