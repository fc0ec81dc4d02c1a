"""
settings.py
───────────
Environment-driven settings: log level, download behaviour and the
default extraction options.

A ``.env`` file in the working directory is read as a fallback layer under
the real environment. It is never written back into ``os.environ``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

from .options import DEFAULT_OPTIONS, ExtractOptions, merge_options

# env var → (option field, cast)
_OPTION_VARS = {
    "PALETTE_MAX_COLORS":           ("max_colors", int),
    "PALETTE_FORMAT":               ("format", str),
    "PALETTE_MAX_SIZE":             ("max_size", int),
    "PALETTE_SIMILARITY_THRESHOLD": ("color_similarity_threshold", float),
    "PALETTE_SORT_BY":              ("sort_by", str),
}


@dataclass(frozen=True)
class Settings:
    """Logging, network and default-option settings."""

    log_level: str = "INFO"
    http_timeout: float = 30.0
    user_agent: str = "palette-extractor/0.1"
    default_options: ExtractOptions = DEFAULT_OPTIONS


# ── Sources ───────────────────────────────────────────────────────────────────

def read_env_file(path: str | Path = ".env") -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines of *path*; a missing file gives ``{}``."""
    env_path = Path(path)
    if not env_path.exists():
        return {}

    values: Dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        entry = line.strip()
        if not entry or entry.startswith("#") or "=" not in entry:
            continue
        key, value = entry.split("=", 1)
        values[key.strip()] = value.strip().strip("'\"")
    return values


def _option_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, (field_name, cast) in _OPTION_VARS.items():
        raw = env.get(env_name)
        if not raw:
            continue
        try:
            overrides[field_name] = cast(raw)
        except ValueError as exc:
            raise ValueError(f"{env_name} has an invalid value: {raw!r}") from exc
    return overrides


def settings_from_env(env: Mapping[str, str]) -> Settings:
    """Build Settings from an explicit mapping of variables."""
    timeout = env.get("PALETTE_HTTP_TIMEOUT", "30")
    try:
        http_timeout = float(timeout)
    except ValueError as exc:
        raise ValueError(f"PALETTE_HTTP_TIMEOUT has an invalid value: {timeout!r}") from exc

    return Settings(
        log_level=env.get("LOG_LEVEL", "INFO"),
        http_timeout=http_timeout,
        user_agent=env.get("PALETTE_USER_AGENT", "palette-extractor/0.1"),
        default_options=merge_options(DEFAULT_OPTIONS, _option_overrides(env)),
    )


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, computed once; real env wins over ``.env``."""
    return settings_from_env({**read_env_file(), **os.environ})
