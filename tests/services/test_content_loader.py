import datetime

import pytest

from engblog.services.content_loader import (
    ContentValidationError,
    legacy_slug,
    load_authors,
    load_index,
    load_posts,
    parse_author,
    parse_post,
)
from tests.conftest import FakeRepo, make_entry, make_post


def test_parse_post_reads_front_matter_and_body():
    entry = make_entry(
        "blog/2024/hello.md",
        "2024/hello",
        """
        ---
        title: Hello World
        summary: First post
        date: 2024-06-01
        lastmod: 2024-06-02T10:30:00Z
        tags: [Rust, Open Source]
        authors: [jane]
        images: [/static/hello.png]
        postLayout: PostSimple
        canonicalUrl: https://example.com/hello
        series: intro
        ---
        Body text here.
        """,
    )

    post = parse_post(entry)

    assert post.id == "blog/2024/hello.md"
    assert post.slug == "2024/hello"
    assert post.title == "Hello World"
    assert post.date == datetime.datetime(2024, 6, 1, tzinfo=datetime.timezone.utc)
    assert post.lastmod == datetime.datetime(2024, 6, 2, 10, 30, tzinfo=datetime.timezone.utc)
    assert post.tags == ["Rust", "Open Source"]
    assert post.authors == ["jane"]
    assert post.images == ["/static/hello.png"]
    assert post.layout == "PostSimple"
    assert post.canonical_url == "https://example.com/hello"
    assert post.draft is False
    assert post.content == "Body text here."
    assert post.reading_time == "1 min"
    assert post.series == "intro"  # unknown keys pass through


def test_parse_post_defaults_missing_optional_fields():
    post = parse_post(make_entry("blog/bare.md", "bare", "---\ntitle: Bare\n---\n"))

    assert post.date is None
    assert post.tags == []
    assert post.authors == []
    assert post.images == []
    assert post.summary is None


def test_parse_post_prefers_front_matter_slug():
    post = parse_post(make_entry("blog/x.md", "x", "---\ntitle: X\nslug: custom\n---\n"))
    assert post.slug == "custom"


def test_parse_post_falls_back_to_legacy_title_slug():
    post = parse_post(make_entry("blog/.md", "", "---\ntitle: Crème Brûlée 101\n---\n"))
    assert post.slug == "creme-brulee-101"
    assert legacy_slug("Crème Brûlée 101") == "creme-brulee-101"


def test_parse_post_accepts_author_references():
    post = parse_post(
        make_entry(
            "blog/r.md",
            "r",
            """
            ---
            title: Refs
            authors:
              - id: jane
              - al
            ---
            """,
        )
    )
    assert post.authors == ["jane", "al"]


def test_parse_post_rejects_missing_title():
    with pytest.raises(ContentValidationError) as exc:
        parse_post(make_entry("blog/untitled.md", "untitled", "---\nsummary: no title\n---\n"))
    assert exc.value.entry_id == "blog/untitled.md"


def test_parse_post_rejects_bad_date():
    with pytest.raises(ContentValidationError):
        parse_post(make_entry("blog/d.md", "d", "---\ntitle: D\ndate: not-a-date\n---\n"))


def test_parse_post_rejects_broken_yaml():
    with pytest.raises(ContentValidationError):
        parse_post(make_entry("blog/y.md", "y", "---\ntitle: [unclosed\n---\n"))


def test_load_posts_rejects_duplicate_published_slugs():
    entries = [
        make_entry("blog/a.md", "a", "---\ntitle: A\n---\n"),
        make_entry("blog/b.md", "b", "---\ntitle: B\nslug: a\n---\n"),
    ]
    with pytest.raises(ContentValidationError):
        load_posts(entries)


def test_load_posts_allows_draft_sharing_slug():
    entries = [
        make_entry("blog/a.md", "a", "---\ntitle: A\n---\n"),
        make_entry("blog/a-draft.md", "a-draft", "---\ntitle: A2\nslug: a\ndraft: true\n---\n"),
    ]
    assert len(load_posts(entries)) == 2


def test_parse_author_keeps_profile_and_bio():
    author = parse_author(
        make_entry(
            "authors/jane.md",
            "jane",
            """
            ---
            name: Jane Doe
            occupation: Engineer
            github: https://github.com/jane
            ---
            Jane writes about Rust.
            """,
        )
    )
    assert author.slug == "jane"
    assert author.name == "Jane Doe"
    assert author.github == "https://github.com/jane"
    assert author.bio == "Jane writes about Rust."


def test_load_authors_rejects_duplicates():
    entries = [
        make_entry("authors/jane.md", "jane", "---\nname: Jane\n---\n"),
        make_entry("authors/other.md", "other", "---\nname: Jane 2\nslug: jane\n---\n"),
    ]
    with pytest.raises(ContentValidationError):
        load_authors(entries)


def test_load_index_reads_both_collections():
    repo = FakeRepo(
        blog=[make_entry("blog/a.md", "a", "---\ntitle: A\nauthors: [jane]\n---\n")],
        authors=[make_entry("authors/jane.md", "jane", "---\nname: Jane Doe\n---\n")],
    )

    index = load_index(repo)

    assert repo.calls == ["blog", "authors"]
    assert [p.slug for p in index.posts_by_author("jane")] == ["a"]
    assert index.get_author("jane").name == "Jane Doe"


class FakeSyndicated:
    def __init__(self, posts):
        self.posts = posts

    def list_posts(self):
        return list(self.posts)


def test_load_index_merges_syndicated_posts():
    repo = FakeRepo(blog=[make_entry("blog/a.md", "a", "---\ntitle: A\ndate: 2024-01-01\n---\n")])
    syndicated = FakeSyndicated(
        [make_post("kafka", date="2024-06-01", syndicated_from="http://localhost:3000/kafka/")]
    )

    index = load_index(repo, syndicated=syndicated)

    assert [p.slug for p in index.list_posts()] == ["kafka", "a"]
    assert index.get_post("kafka").syndicated_from == "http://localhost:3000/kafka/"


def test_load_index_rejects_syndicated_slug_clash():
    repo = FakeRepo(blog=[make_entry("blog/a.md", "a", "---\ntitle: A\n---\n")])

    with pytest.raises(ContentValidationError):
        load_index(repo, syndicated=FakeSyndicated([make_post("a")]))
