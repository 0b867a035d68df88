# dashboard/cache.py

import logging
import threading
from functools import lru_cache
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


class ViewCache:
    """
    Rendered views keyed by route path. A path stays cached until
    `revalidate_path` drops it; the next read renders it again.
    """

    def __init__(self):
        self._views: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get_or_render(self, path: str, render: Callable[[], Any]) -> Any:
        # Rendering under the lock keeps a concurrent revalidate from
        # being overwritten by a view rendered before it.
        with self._lock:
            if path not in self._views:
                self._views[path] = render()
            return self._views[path]

    def revalidate_path(self, path: str) -> None:
        with self._lock:
            dropped = self._views.pop(path, None) is not None
        logger.debug("Revalidated %s (cached=%s)", path, dropped)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._views


@lru_cache
def get_view_cache() -> ViewCache:
    return ViewCache()
