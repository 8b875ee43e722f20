from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from engblog import dependencies as deps
from engblog.routers import posts
from engblog.schemas.site import SiteMetadata
from engblog.services.content_index import ContentIndex
from tests.conftest import make_post


def make_app(index, locale="en-US"):
    site = SiteMetadata(title="T", author="A", description="D", site_url="https://x.test", locale=locale)
    app = FastAPI()
    app.dependency_overrides[deps.get_content_index] = lambda: index
    app.dependency_overrides[deps.get_site_metadata] = lambda: site
    app.include_router(posts.router)
    return app


def test_list_posts_returns_published_posts_newest_first(sample_index):
    client = TestClient(make_app(sample_index))

    res = client.get("/posts")

    assert res.status_code == 200
    body = res.json()
    assert [p["slug"] for p in body] == ["b", "a", "c"]
    assert body[0]["publishedAt"] == "2024-06-01T00:00:00+00:00"
    assert body[2]["publishedAt"] is None
    assert body[0]["readingTime"] == "1 min"
    assert body[0]["formattedDate"] == "June 1, 2024"
    assert body[2]["formattedDate"] == ""


def test_get_post_includes_neighbours(sample_index):
    client = TestClient(make_app(sample_index))

    res = client.get("/posts/a")

    assert res.status_code == 200
    body = res.json()
    assert body["slug"] == "a"
    assert body["summary"] == "A post"
    assert body["excerpt"] == "A post"
    assert body["syndicatedFrom"] is None
    assert body["newer"] == {"slug": "b", "title": "B"}
    assert body["older"] == {"slug": "c", "title": "C"}


def test_get_post_supports_nested_slugs():
    index = ContentIndex([make_post("2024/hello")])
    client = TestClient(make_app(index))

    res = client.get("/posts/2024/hello")

    assert res.status_code == 200
    assert res.json()["slug"] == "2024/hello"


def test_get_post_returns_404_for_missing_and_draft(sample_index):
    client = TestClient(make_app(sample_index))

    assert client.get("/posts/missing").status_code == 404
    assert client.get("/posts/hidden").status_code == 404


def test_list_posts_page(sample_index):
    client = TestClient(make_app(sample_index))

    res = client.get("/posts/page/2", params={"per_page": 2})

    assert res.status_code == 200
    body = res.json()
    assert [p["slug"] for p in body["items"]] == ["c"]
    assert body["page"] == 2
    assert body["perPage"] == 2
    assert body["total"] == 3
    assert body["totalPages"] == 2


def test_list_posts_page_past_end_is_404(sample_index):
    client = TestClient(make_app(sample_index))

    assert client.get("/posts/page/9", params={"per_page": 2}).status_code == 404
    assert client.get("/posts/page/0").status_code == 404


def test_first_page_of_empty_blog_is_ok():
    client = TestClient(make_app(ContentIndex()))

    res = client.get("/posts/page/1")

    assert res.status_code == 200
    assert res.json()["items"] == []


def test_list_posts_passes_through_http_exception():
    class BoomIndex(ContentIndex):
        def list_posts(self):
            raise HTTPException(status_code=418, detail="teapot")

    client = TestClient(make_app(BoomIndex()))

    res = client.get("/posts")
    assert res.status_code == 418
    assert res.json()["detail"] == "teapot"


def test_list_posts_returns_500_on_unexpected_error():
    class BoomIndex(ContentIndex):
        def list_posts(self):
            raise RuntimeError("boom")

    client = TestClient(make_app(BoomIndex()))

    res = client.get("/posts")
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve posts"


def test_formatted_date_follows_site_locale(sample_index):
    client = TestClient(make_app(sample_index, locale="en-GB"))

    res = client.get("/posts/b")

    assert res.status_code == 200
    assert res.json()["formattedDate"] == "1 June 2024"


def test_excerpt_trims_long_summaries():
    index = ContentIndex([make_post("long", summary="x" * 500)])
    client = TestClient(make_app(index))

    body = client.get("/posts").json()

    assert body[0]["summary"] == "x" * 500
    assert body[0]["excerpt"] == "x" * 397 + "..."
