"""
options.py
──────────
Extraction options: defaults, per-call overrides, validation and loading
from a JSON file.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .clustering import SORT_MODES
from .colors import FORMATS


@dataclass(frozen=True)
class ExtractOptions:
    """Tunables for a single extraction call."""

    max_colors: int = 3
    format: str = "rgba"
    max_size: int = 18
    color_similarity_threshold: float = 50
    sort_by: str = "dominance"

    def __post_init__(self) -> None:
        _validate(self)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# camelCase spellings accepted for callers porting option objects verbatim
_ALIASES = {
    "maxColors":                "max_colors",
    "maxSize":                  "max_size",
    "colorSimilarityThreshold": "color_similarity_threshold",
    "sortBy":                   "sort_by",
}
_FIELDS = {f.name for f in fields(ExtractOptions)}


def _validate(opts: ExtractOptions) -> None:
    if isinstance(opts.max_colors, bool) or not isinstance(opts.max_colors, int) or opts.max_colors < 0:
        raise ValueError(f"max_colors must be an integer >= 0, got {opts.max_colors!r}")
    if isinstance(opts.max_size, bool) or not isinstance(opts.max_size, int) or opts.max_size <= 0:
        raise ValueError(f"max_size must be an integer > 0, got {opts.max_size!r}")
    if (
        isinstance(opts.color_similarity_threshold, bool)
        or not isinstance(opts.color_similarity_threshold, (int, float))
        or opts.color_similarity_threshold < 0
    ):
        raise ValueError(
            "color_similarity_threshold must be a number >= 0, "
            f"got {opts.color_similarity_threshold!r}"
        )
    if opts.format not in FORMATS:
        raise ValueError(f"format must be one of {', '.join(FORMATS)}, got {opts.format!r}")
    if opts.sort_by not in SORT_MODES:
        raise ValueError(f"sort_by must be one of {', '.join(SORT_MODES)}, got {opts.sort_by!r}")


DEFAULT_OPTIONS = ExtractOptions()


def merge_options(
    base: Optional[ExtractOptions] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> ExtractOptions:
    """
    Return *base* (default: ``DEFAULT_OPTIONS``) with *overrides* applied.

    Keys may be snake_case or camelCase. Unknown keys raise ``ValueError``.
    """
    merged: Dict[str, Any] = {}
    for key, value in {**(overrides or {}), **kwargs}.items():
        name = _ALIASES.get(key, key)
        if name not in _FIELDS:
            raise ValueError(f"Unknown extraction option: {key!r}")
        merged[name] = value
    return replace(base or DEFAULT_OPTIONS, **merged)


def load_options(path: str | Path, base: Optional[ExtractOptions] = None) -> ExtractOptions:
    """
    Load option overrides from a JSON object file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file is not valid JSON, not an object, or holds bad values.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Options file not found: {p}")
    if p.suffix.lower() != ".json":
        raise ValueError(f"Options file must be a .json file, got: {p.suffix}")

    with p.open("r", encoding="utf-8") as fh:
        try:
            raw = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in options file: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError("Options file root must be a JSON object.")
    return merge_options(base, raw)
