"""Route-level caching with explicit, path-based invalidation.

Views store the data they render under a key derived from their route path.
Each path carries a version token in the backing Flask-Caching store; calling
:meth:`RouteCache.invalidate` replaces the token so every entry cached for that
path (whatever its query string) is treated as stale on the next request.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Callable, Optional, TypeVar

from flask import current_app

T = TypeVar("T")

logger = logging.getLogger(__name__)

INVALIDATED_EVENT = "route_invalidated"


class RouteCache:
    """Cache of view data keyed by route path, invalidated by path."""

    def __init__(self, cache, socketio=None, timeout: Optional[int] = None) -> None:
        self._cache = cache
        self._socketio = socketio
        self._timeout = timeout
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    @staticmethod
    def normalize(path: str) -> str:
        path = path.split("?", 1)[0]
        if len(path) > 1:
            path = path.rstrip("/")
        return path or "/"

    # ------------------------------------------------------------------
    def _version_key(self, path: str) -> str:
        return f"route-version:{path}"

    def _version(self, path: str) -> str:
        key = self._version_key(path)
        version = self._cache.get(key)
        if version is None:
            with self._lock:
                version = self._cache.get(key)
                if version is None:
                    version = uuid.uuid4().hex
                    self._cache.set(key, version, timeout=0)
        return version

    def _entry_key(self, path: str, variant: str) -> str:
        return f"route:{path}:{self._version(path)}:{variant}"

    # ------------------------------------------------------------------
    def get_or_load(
        self, path: str, loader: Callable[[], T], variant: str = ""
    ) -> T:
        """Return the cached value for ``path``/``variant`` or load and store it.

        ``variant`` distinguishes entries of the same route, typically the
        normalized query string.
        """

        path = self.normalize(path)
        key = self._entry_key(path, variant)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        value = loader()
        self._cache.set(key, value, timeout=self._timeout)
        return value

    def get(self, path: str, variant: str = "") -> Any:
        return self._cache.get(self._entry_key(self.normalize(path), variant))

    # ------------------------------------------------------------------
    def invalidate(self, route_key: str) -> None:
        """Mark everything cached for ``route_key`` as stale.

        Connected dashboards are told through a ``route_invalidated``
        Socket.IO event so they can refetch.
        """

        path = self.normalize(route_key)
        with self._lock:
            self._cache.set(self._version_key(path), uuid.uuid4().hex, timeout=0)
        logger.info("Invalidated cached route %s", path)
        if self._socketio is not None:
            self._socketio.emit(INVALIDATED_EVENT, {"path": path})


def get_route_cache() -> RouteCache:
    """Return the :class:`RouteCache` registered on the current app."""

    return current_app.extensions["route_cache"]


def invalidate(route_key: str) -> None:
    get_route_cache().invalidate(route_key)
