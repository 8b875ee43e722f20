import logging
from typing import Dict, Optional

import pycouchdb

logger = logging.getLogger(__name__)


class ContentParser:
    """Reassembles LiveSync notes, which are stored as a parent doc plus leaf chunks."""

    def __init__(self, db):
        self.db = db

    def get_markdown_content(
        self, doc: dict, leaves: Optional[Dict[str, dict]] = None
    ) -> str:
        """Return the note text; `leaves` is an optional id -> doc prefetch."""
        children = doc.get("children") or []
        if not children:
            return self._as_text(doc.get("data"))

        parts = []
        for child_id in children:
            child = self._get_child(child_id, leaves)
            if child and child.get("type") == "leaf" and "data" in child:
                parts.append(self._as_text(child["data"]))
        return "".join(parts)

    def _get_child(self, child_id: str, leaves: Optional[Dict[str, dict]]) -> Optional[dict]:
        if leaves is not None and child_id in leaves:
            return leaves[child_id]
        try:
            return self.db.get(child_id)
        except pycouchdb.exceptions.NotFound:
            logger.warning(f"Missing chunk {child_id}, skipping")
            return None

    @staticmethod
    def _as_text(data) -> str:
        if isinstance(data, bytes):
            return data.decode("utf-8", errors="ignore")
        return data or ""
