import logging
import threading
from typing import Callable, Optional

from engblog.services.content_index import ContentIndex
from engblog.services.content_loader import load_index

logger = logging.getLogger(__name__)


class ContentStore:
    """Holds the current ContentIndex and swaps in a new one on reload."""

    def __init__(self, repo, loader: Callable = load_index):
        self.repo = repo
        self.loader = loader
        self._lock = threading.Lock()
        self._index: Optional[ContentIndex] = None

    @property
    def index(self) -> ContentIndex:
        index = self._index
        if index is None:
            return self.reload()
        return index

    def reload(self) -> ContentIndex:
        # Only one reload builds at a time; readers keep the old snapshot until the swap.
        with self._lock:
            try:
                index = self.loader(self.repo)
            except Exception as e:
                logger.error(f"Content reload failed, keeping previous snapshot: {e}")
                raise
            self._index = index
        logger.info("Content snapshot reloaded")
        return index
