import logging
from typing import Iterable, List

import frontmatter
import yaml
from pydantic import ValidationError

from engblog.models.content import Author, Post
from engblog.repos.content_repo import AUTHORS, BLOG, ContentEntry
from engblog.services.content_index import ContentIndex
from engblog.utils import slugify

logger = logging.getLogger(__name__)


class ContentValidationError(Exception):
    """A content entry does not match the post or author schema."""

    def __init__(self, entry_id: str, reason):
        self.entry_id = entry_id
        self.reason = reason
        super().__init__(f"Invalid content in {entry_id}: {reason}")


def legacy_slug(title: str) -> str:
    """Slug derived from a title, as the first generation of the blog did.

    Compatibility path: only used when an entry has neither a front-matter
    slug nor a path-derived one (in practice, a file named just `.md`).
    """
    return slugify(title)


def _split(entry: ContentEntry):
    try:
        parsed = frontmatter.loads(entry.text)
    except yaml.YAMLError as e:
        raise ContentValidationError(entry.id, f"bad front-matter: {e}") from e
    return parsed.metadata or {}, parsed.content


def parse_post(entry: ContentEntry) -> Post:
    metadata, body = _split(entry)
    slug = metadata.get("slug") or entry.slug
    if not slug and metadata.get("title"):
        slug = legacy_slug(str(metadata["title"]))

    try:
        return Post.model_validate(
            {**metadata, "id": entry.id, "slug": str(slug or ""), "content": body}
        )
    except ValidationError as e:
        raise ContentValidationError(entry.id, e) from e


def parse_author(entry: ContentEntry) -> Author:
    metadata, body = _split(entry)
    slug = metadata.get("slug") or entry.slug
    try:
        return Author.model_validate({**metadata, "slug": str(slug), "bio": body})
    except ValidationError as e:
        raise ContentValidationError(entry.id, e) from e


def check_unique_slugs(posts: Iterable[Post]) -> None:
    seen = {}
    for post in posts:
        if post.draft:
            continue
        if post.slug in seen:
            raise ContentValidationError(
                post.id, f"slug '{post.slug}' already used by {seen[post.slug]}"
            )
        seen[post.slug] = post.id


def load_posts(entries: Iterable[ContentEntry]) -> List[Post]:
    posts = [parse_post(entry) for entry in entries]
    check_unique_slugs(posts)
    return posts


def load_authors(entries: Iterable[ContentEntry]) -> List[Author]:
    authors = []
    seen = set()
    for entry in entries:
        author = parse_author(entry)
        if author.slug in seen:
            raise ContentValidationError(entry.id, f"author slug '{author.slug}' is duplicated")
        seen.add(author.slug)
        authors.append(author)
    return authors


def load_index(repo, syndicated=None) -> ContentIndex:
    """Read every post and author from `repo` into a fresh snapshot.

    Posts from the optional `syndicated` feed are merged in and share the
    same slug namespace as local posts.
    """
    posts = load_posts(repo.list_entries(BLOG))
    if syndicated is not None:
        posts += syndicated.list_posts()
        check_unique_slugs(posts)
    authors = load_authors(repo.list_entries(AUTHORS))
    logger.info(f"Loaded {len(posts)} posts and {len(authors)} authors")
    return ContentIndex(posts, authors)
