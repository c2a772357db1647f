"""Debounced search input handling.

:class:`SearchController` turns a stream of keystrokes into at most one
navigation update per quiet period.  Each keystroke cancels the pending update
and schedules a new one, so only the last value of a burst is applied.  The
update rewrites the current URL with :func:`build_search_url` and hands it to
a ``replace`` callback, which swaps the current navigation entry without
adding to history.

``static/js/search.js`` runs the same state machine in the browser.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

DEFAULT_WAIT = 0.5
QUERY_PARAM = "query"
PAGE_PARAM = "page"

IDLE = "idle"
PENDING = "pending"


def _set_param(params: List[Tuple[str, str]], key: str, value: str) -> List[Tuple[str, str]]:
    # Replaces the first occurrence in place and drops the rest, like
    # URLSearchParams.set in the browser.
    updated: List[Tuple[str, str]] = []
    replaced = False
    for name, current in params:
        if name != key:
            updated.append((name, current))
        elif not replaced:
            updated.append((key, value))
            replaced = True
    if not replaced:
        updated.append((key, value))
    return updated


def build_search_url(current_url: str, term: str) -> str:
    """Return ``current_url`` rewritten for a new search ``term``.

    Existing parameters are kept, ``page`` is always reset to ``1`` and
    ``query`` is set to ``term`` or removed when ``term`` is empty.

    >>> build_search_url("/dashboard/invoices", "lee")
    '/dashboard/invoices?page=1&query=lee'
    >>> build_search_url("/dashboard/invoices?query=lee&page=3", "")
    '/dashboard/invoices?page=1'
    """

    parts = urlsplit(current_url)
    params = parse_qsl(parts.query, keep_blank_values=True)
    params = _set_param(params, PAGE_PARAM, "1")
    if term:
        params = _set_param(params, QUERY_PARAM, term)
    else:
        params = [(name, value) for name, value in params if name != QUERY_PARAM]
    return urlunsplit(parts._replace(query=urlencode(params)))


class SearchController:
    """Trailing-edge debounce from search input to navigation.

    ``current_url`` returns the URL to rewrite at the moment the update fires;
    ``replace`` receives the new URL.  ``timer_factory`` follows the
    :class:`threading.Timer` signature and exists so tests can drive time.
    """

    def __init__(
        self,
        current_url: Callable[[], str],
        replace: Callable[[str], None],
        wait: float = DEFAULT_WAIT,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self._current_url = current_url
        self._replace = replace
        self.wait = wait
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._term: Optional[str] = None
        # Bumped on every schedule or cancel; a timer whose callback is already
        # running when it gets replaced sees a newer generation and does nothing.
        self._generation = 0

    @property
    def state(self) -> str:
        return PENDING if self._term is not None else IDLE

    # ------------------------------------------------------------------
    def on_input(self, term: str) -> None:
        """Schedule a navigation update for ``term``, replacing any pending one."""

        with self._lock:
            self._cancel_unlocked()
            self._term = term
            timer = self._timer_factory(
                self.wait, self._fire, args=(self._generation,)
            )
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """Drop the pending update, if any."""

        with self._lock:
            self._cancel_unlocked()

    def flush(self) -> None:
        """Apply the pending update now instead of waiting for the timer."""

        with self._lock:
            term = self._term
            self._cancel_unlocked()
        if term is not None:
            self._navigate(term)

    # ------------------------------------------------------------------
    def _cancel_unlocked(self) -> None:
        self._generation += 1
        self._term = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._term is None:
                return
            term = self._term
            self._term = None
            self._timer = None
        self._navigate(term)

    def _navigate(self, term: str) -> None:
        logger.debug("Searching... %s", term)
        self._replace(build_search_url(self._current_url(), term))
