"""
loader.py
─────────
Turns an image reference into a small RGBA pixel buffer.

Accepted references: a filesystem path, an ``http(s)://`` URL, a base64
``data:`` URI, raw encoded image bytes, or an open ``PIL.Image.Image``.
The image is downsampled so its longest edge is at most ``max_size``.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Tuple, Union

import requests
from PIL import Image, UnidentifiedImageError

from .errors import AcquisitionError, RenderSurfaceError
from .clustering import PixelBuffer
from .settings import get_settings

logger = logging.getLogger(__name__)

ImageRef = Union[str, Path, bytes, Image.Image]


# ── Reference resolution ──────────────────────────────────────────────────────

def _decode_data_uri(uri: str) -> bytes:
    """Decode a ``data:image/...;base64,...`` URI into raw bytes."""
    header, _, payload = uri.partition(",")
    if not payload or ";base64" not in header:
        raise AcquisitionError("Only base64-encoded data URIs are supported.")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AcquisitionError(f"Invalid base64 payload in data URI: {exc}") from exc


def _download(url: str) -> bytes:
    settings = get_settings()
    # Strip stray whitespace / newlines introduced by copy-paste or env vars
    url = url.strip().replace("\r", "").replace("\n", "")
    try:
        resp = requests.get(
            url,
            timeout=settings.http_timeout,
            headers={"User-Agent": settings.user_agent},
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise AcquisitionError(f"Could not download image from {url}: {exc}") from exc
    return resp.content


def _open(ref: ImageRef) -> Image.Image:
    """Open *ref* as a Pillow image without forcing a decode."""
    if isinstance(ref, Image.Image):
        return ref
    if isinstance(ref, str):
        ref = ref.strip()

    if isinstance(ref, (bytes, bytearray)):
        raw = bytes(ref)
    elif isinstance(ref, str) and ref.startswith("data:"):
        raw = _decode_data_uri(ref)
    elif isinstance(ref, str) and ref.startswith(("http://", "https://")):
        raw = _download(ref)
    elif isinstance(ref, (str, Path)):
        path = Path(ref)
        if not path.exists():
            raise AcquisitionError(f"Image not found: {path}")
        raw = path.read_bytes()
    else:
        raise AcquisitionError(f"Unsupported image reference type: {type(ref).__name__}")

    try:
        return Image.open(io.BytesIO(raw))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise AcquisitionError(f"Could not decode image: {exc}") from exc


# ── Downsampling ──────────────────────────────────────────────────────────────

def scaled_size(width: int, height: int, max_size: int) -> Tuple[int, int]:
    """Shrink ``(width, height)`` to fit *max_size*; never enlarges, never 0."""
    scale = min(1.0, max_size / max(width, height))
    return max(1, int(width * scale)), max(1, int(height * scale))


def load_pixels_sync(ref: ImageRef, max_size: int) -> PixelBuffer:
    """Blocking version of :func:`load_pixels`."""
    img = _open(ref)
    try:
        img.load()
    except (Image.DecompressionBombError, OSError, ValueError) as exc:
        raise AcquisitionError(f"Could not decode image: {exc}") from exc

    width, height = img.size
    if width <= 0 or height <= 0:
        raise RenderSurfaceError(f"Image has no drawable area ({width}x{height}).")

    try:
        surface = img.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise RenderSurfaceError(f"Could not convert image to RGBA: {exc}") from exc

    size = scaled_size(width, height, max_size)
    if size != surface.size:
        surface = surface.resize(size, Image.Resampling.BILINEAR)

    logger.debug("Loaded %dx%d image, sampling at %dx%d", width, height, *size)
    return PixelBuffer(surface.tobytes(), surface.width, surface.height)


async def load_pixels(ref: ImageRef, max_size: int) -> PixelBuffer:
    """Fetch, decode and downsample *ref* off the event loop."""
    return await asyncio.to_thread(load_pixels_sync, ref, max_size)
