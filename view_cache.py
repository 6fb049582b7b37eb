# view_cache.py
import logging
import threading
from typing import Any, Dict, Optional, Tuple

INVOICES_PATH = "/dashboard/invoices"

logger = logging.getLogger("invoices.view_cache")


class ViewCache:
  """Rendered view payloads keyed by path; a revalidated path is recomputed on next read.

  Every revalidation bumps the path's generation. A payload computed under an
  older generation is dropped by ``put`` instead of being cached.
  """

  def __init__(self) -> None:
    self._views: Dict[str, Any] = {}
    self._generations: Dict[str, int] = {}
    self._lock = threading.Lock()
    self.revalidations: Dict[str, int] = {}

  def get(self, path: str) -> Tuple[Optional[Any], int]:
    with self._lock:
      return self._views.get(path), self._generations.get(path, 0)

  def put(self, path: str, payload: Any, generation: int) -> bool:
    with self._lock:
      if self._generations.get(path, 0) != generation:
        return False
      self._views[path] = payload
      return True

  def revalidate_path(self, path: str) -> None:
    with self._lock:
      self._views.pop(path, None)
      self._generations[path] = self._generations.get(path, 0) + 1
      self.revalidations[path] = self.revalidations.get(path, 0) + 1
    logger.debug("revalidated %s", path)


view_cache = ViewCache()

def get_view_cache() -> ViewCache:
  return view_cache
