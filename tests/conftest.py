import textwrap

import pycouchdb
import pytest

from engblog.models.content import Author, Post
from engblog.repos.content_repo import ContentEntry
from engblog.schemas.site import SiteMetadata
from engblog.services.content_index import ContentIndex


class FakeCouchDB:
    """
    Minimal in-memory CouchDB stand-in.
    Set track_calls=True to record the order of get() calls.
    """

    def __init__(self, docs: dict, track_calls: bool = False):
        self.docs = docs
        self.track_calls = track_calls
        self.calls = []

    def get(self, doc_id: str) -> dict:
        if self.track_calls:
            self.calls.append(doc_id)
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        return self.docs[doc_id]

    def all(self, include_docs: bool = True):
        if self.track_calls:
            self.calls.append(f"all(include_docs={include_docs})")
        if include_docs:
            return [{"doc": doc} for doc in self.docs.values()]
        return list(self.docs.values())


class FakeRepo:
    """
    Minimal content repo stand-in keyed by collection name.
    """

    def __init__(self, blog=None, authors=None):
        self.entries = {"blog": list(blog or []), "authors": list(authors or [])}
        self.calls = []

    def list_entries(self, collection):
        self.calls.append(collection)
        return list(self.entries[collection])


def make_entry(entry_id: str, slug: str, text: str) -> ContentEntry:
    return ContentEntry(id=entry_id, slug=slug, text=textwrap.dedent(text).lstrip())


def make_post(slug: str, **fields) -> Post:
    return Post(id=f"blog/{slug}.md", slug=slug, title=fields.pop("title", slug.title()), **fields)


@pytest.fixture
def site():
    return SiteMetadata(
        title="Test Engineering",
        author="Test Co",
        description="Notes from test engineers.",
        site_url="https://blog.example.com",
        email="blog@example.com",
    )


@pytest.fixture
def sample_index():
    posts = [
        make_post("a", date="2024-01-01", tags=["Rust"], authors=["jane"], summary="A post"),
        make_post("b", date="2024-06-01", tags=["rust", "go"], authors=["jane"]),
        make_post("c", tags=["Open Source"]),
        make_post("hidden", date="2025-01-01", tags=["rust"], authors=["jane"], draft=True),
    ]
    authors = [
        Author(slug="jane", name="Jane Doe"),
        Author(slug="al", name="al smith"),
    ]
    return ContentIndex(posts, authors)
