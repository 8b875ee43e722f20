"""Read-only queries over one snapshot of posts and authors.

A `ContentIndex` never mutates after construction, so a single instance can be
shared between request threads. Every query rescans the snapshot; there is no
cache to invalidate.
"""

import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from engblog.models.content import Author, Post
from engblog.utils import to_tag_slug

DEFAULT_AUTHOR = "default"


class AuthorCount(BaseModel):
    name: str
    count: int


class Page(BaseModel):
    items: List[Post]
    page: int
    per_page: int
    total: int
    total_pages: int


class ContentIndex:
    def __init__(self, posts: Iterable[Post] = (), authors: Iterable[Author] = ()):
        self._posts: Tuple[Post, ...] = tuple(posts)
        self._authors: Tuple[Author, ...] = tuple(authors)

    def list_posts(self) -> List[Post]:
        published = [post for post in self._posts if not post.draft]
        # sort is stable, so equal dates keep source order
        published.sort(key=lambda post: post.timestamp, reverse=True)
        return published

    def get_post(self, slug: str) -> Optional[Post]:
        for post in self._posts:
            if post.slug == slug and not post.draft:
                return post
        return None

    def list_authors(self) -> List[Author]:
        return sorted(self._authors, key=lambda author: (author.name or "").casefold())

    def get_author(self, slug: str) -> Optional[Author]:
        return next((author for author in self._authors if author.slug == slug), None)

    def posts_by_author(self, author_slug: str) -> List[Post]:
        return [post for post in self.list_posts() if author_slug in post.authors]

    def posts_by_tag(self, tag_slug: str) -> List[Post]:
        return [
            post
            for post in self.list_posts()
            if any(to_tag_slug(tag) == tag_slug for tag in post.tags)
        ]

    def tag_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for post in self.list_posts():
            for tag in post.tags:
                tag_slug = to_tag_slug(tag)
                counts[tag_slug] = counts.get(tag_slug, 0) + 1
        return counts

    def author_counts(self) -> Dict[str, AuthorCount]:
        names = {author.slug: author.name for author in self._authors}
        counts: Dict[str, AuthorCount] = {}
        for post in self.list_posts():
            for author_slug in post.authors or [DEFAULT_AUTHOR]:
                current = counts.get(author_slug)
                counts[author_slug] = AuthorCount(
                    name=names.get(author_slug, author_slug),
                    count=(current.count if current else 0) + 1,
                )
        return counts

    def adjacent_posts(self, slug: str) -> Optional[Tuple[Optional[Post], Optional[Post]]]:
        """Return (newer, older) neighbours of a listed post."""
        posts = self.list_posts()
        for position, post in enumerate(posts):
            if post.slug == slug:
                newer = posts[position - 1] if position > 0 else None
                older = posts[position + 1] if position + 1 < len(posts) else None
                return newer, older
        return None


def sorted_tag_counts(counts: Dict[str, int]) -> List[Tuple[str, int]]:
    """Display order: most used first, then alphabetical."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def sorted_author_counts(counts: Dict[str, AuthorCount]) -> List[Tuple[str, AuthorCount]]:
    return sorted(counts.items(), key=lambda item: (-item[1].count, item[0]))


def paginate(posts: Sequence[Post], page: int, per_page: int) -> Page:
    if page < 1:
        raise ValueError("page must be >= 1")
    if per_page < 1:
        raise ValueError("per_page must be >= 1")
    start = (page - 1) * per_page
    return Page(
        items=list(posts[start : start + per_page]),
        page=page,
        per_page=per_page,
        total=len(posts),
        total_pages=math.ceil(len(posts) / per_page),
    )
