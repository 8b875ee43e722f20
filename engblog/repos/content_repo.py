import logging
from pathlib import Path
from typing import List

from pydantic import BaseModel
from pydantic.config import ConfigDict

from engblog.settings import Settings, settings

logger = logging.getLogger(__name__)

BLOG = "blog"
AUTHORS = "authors"
CONTENT_SUFFIXES = (".md", ".mdx")


class ContentEntry(BaseModel):
    """One raw content file: front-matter and body still unparsed."""

    model_config = ConfigDict(frozen=True)

    id: str
    slug: str
    text: str


def _strip_suffix(path: str) -> str:
    for suffix in CONTENT_SUFFIXES:
        if path.endswith(suffix):
            return path[: -len(suffix)]
    return path


class CouchContentRepo:
    def __init__(self, couch_db, parser, settings_obj: Settings = settings):
        self.db = couch_db
        self.parser = parser
        self.settings = settings_obj

    def _prefix(self, collection: str) -> str:
        if collection == BLOG:
            return self.settings.BLOG_PREFIX
        if collection == AUTHORS:
            return self.settings.AUTHORS_PREFIX
        raise ValueError(f"Unknown collection: {collection}")

    def list_entries(self, collection: str) -> List[ContentEntry]:
        prefix = self._prefix(collection)
        all_docs = [row.get("doc", row) for row in self.db.all(include_docs=True)]
        leaves = {doc["_id"]: doc for doc in all_docs if doc.get("type") == "leaf"}

        entries = []
        for doc in all_docs:
            if not self._is_valid(doc, prefix):
                continue
            path = doc.get("path", doc["_id"])
            entries.append(
                ContentEntry(
                    id=doc["_id"],
                    slug=_strip_suffix(path.removeprefix(prefix)),
                    text=self.parser.get_markdown_content(doc, leaves),
                )
            )
        logger.debug(f"Found {len(entries)} {collection} documents in CouchDB")
        return entries

    @staticmethod
    def _is_valid(doc: dict | None, prefix: str) -> bool:
        if not doc:
            return False
        path = doc.get("path", doc.get("_id", ""))
        return (
            doc.get("type") == "plain"
            and path.startswith(prefix)
            and path.endswith(CONTENT_SUFFIXES)
            and not doc.get("deleted", False)
        )


class FileContentRepo:
    """Reads `<root>/blog` and `<root>/authors` from disk."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def list_entries(self, collection: str) -> List[ContentEntry]:
        if collection not in (BLOG, AUTHORS):
            raise ValueError(f"Unknown collection: {collection}")
        base = self.root / collection
        if not base.is_dir():
            logger.warning(f"Content directory {base} does not exist")
            return []

        files = sorted(p for p in base.rglob("*") if p.is_file() and p.suffix in CONTENT_SUFFIXES)
        entries = []
        for path in files:
            relative = path.relative_to(base).as_posix()
            entries.append(
                ContentEntry(
                    id=f"{collection}/{relative}",
                    slug=_strip_suffix(relative),
                    text=path.read_text(encoding="utf-8"),
                )
            )
        return entries
