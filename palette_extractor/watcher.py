"""
watcher.py
──────────
Observable wrapper that re-extracts whenever the watched image changes.

Each ``watch()`` call supersedes the previous one: its cancellation token
is tripped and a generation counter is bumped, and a result is committed
only when both still match at completion time.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Tuple

from .errors import ExtractionCancelled
from .extractor import CancellationToken, FormattedColors, Loader, extract_formatted
from .options import ExtractOptions
from .settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatcherState:
    """Snapshot of what a UI layer would bind to."""

    dominant_color: Optional[str] = None
    darker_color:   Optional[str] = None
    lighter_color:  Optional[str] = None
    colors:         Tuple[str, ...] = ()
    loading:        bool = False
    error:          Optional[Exception] = None


Listener = Callable[[WatcherState], None]


class ColorWatcher:
    """Keeps a :class:`WatcherState` in sync with the latest watched image."""

    def __init__(
        self,
        options: Optional[ExtractOptions] = None,
        *,
        loader: Optional[Loader] = None,
        keep_previous_on_error: bool = True,
    ) -> None:
        self.options = options or get_settings().default_options
        self.keep_previous_on_error = keep_previous_on_error
        self._loader = loader
        self._state = WatcherState()
        self._listeners: List[Listener] = []
        self._generation = 0
        self._token: Optional[CancellationToken] = None
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    # ── Public API ────────────────────────────────────────────────────────────

    @property
    def state(self) -> WatcherState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new state; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def watch(self, image_ref: Any) -> asyncio.Task:
        """Start extracting *image_ref*, abandoning any extraction in flight."""
        if self._closed:
            raise RuntimeError("ColorWatcher is closed.")
        if self._token is not None:
            self._token.cancel()

        self._generation += 1
        token = CancellationToken()
        self._token = token
        self._set(replace(self._state, loading=True, error=None))

        self._task = asyncio.create_task(self._run(image_ref, self._generation, token))
        return self._task

    async def wait(self) -> WatcherState:
        """Wait for the current extraction (if any) and return the state."""
        if self._task is not None:
            await self._task
        return self._state

    def close(self) -> None:
        """Drop whatever is in flight; no state changes happen afterwards."""
        self._closed = True
        if self._token is not None:
            self._token.cancel()
        self._listeners.clear()

    # ── Internals ─────────────────────────────────────────────────────────────

    def _is_current(self, generation: int, token: CancellationToken) -> bool:
        return not self._closed and not token.cancelled and generation == self._generation

    async def _run(self, image_ref: Any, generation: int, token: CancellationToken) -> None:
        try:
            formatted = await extract_formatted(
                image_ref, self.options, token=token, loader=self._loader
            )
        except ExtractionCancelled:
            logger.debug("Dropped superseded extraction (generation %d)", generation)
            return
        except Exception as exc:  # surfaced through state.error
            if not self._is_current(generation, token):
                return
            logger.warning("Colour extraction failed: %s", exc)
            self._commit_error(exc)
            return

        if not self._is_current(generation, token):
            logger.debug("Dropped superseded extraction (generation %d)", generation)
            return
        self._commit(formatted)

    def _commit(self, formatted: FormattedColors) -> None:
        self._set(WatcherState(
            dominant_color=formatted.dominant_color,
            darker_color=formatted.darker_color,
            lighter_color=formatted.lighter_color,
            colors=formatted.colors,
            loading=False,
            error=None,
        ))

    def _commit_error(self, exc: Exception) -> None:
        if self.keep_previous_on_error:
            self._set(replace(self._state, loading=False, error=exc))
        else:
            self._set(WatcherState(loading=False, error=exc))

    def _set(self, state: WatcherState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
