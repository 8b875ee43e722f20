import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from engblog import dependencies as deps
from engblog.schemas.blog import PostDetail, PostPage, PostSummary
from engblog.schemas.site import SiteMetadata
from engblog.services.content_index import ContentIndex, paginate
from engblog.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    index: ContentIndex = Depends(deps.get_content_index),
    site: SiteMetadata = Depends(deps.get_site_metadata),
):
    """Get all published posts, newest first."""
    try:
        return [PostSummary.from_post(post, site.locale) for post in index.list_posts()]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/page/{page}", response_model=PostPage)
def list_posts_page(
    page: int,
    per_page: Optional[int] = Query(default=None, ge=1, le=100),
    index: ContentIndex = Depends(deps.get_content_index),
    site: SiteMetadata = Depends(deps.get_site_metadata),
):
    """Get one page of published posts."""
    if page < 1:
        raise HTTPException(status_code=404, detail="Page not found")
    try:
        result = paginate(index.list_posts(), page, per_page or settings.POSTS_PER_PAGE)
    except Exception as e:
        logger.error(f"Unexpected error paginating posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    if page > 1 and not result.items:
        raise HTTPException(status_code=404, detail="Page not found")
    return PostPage(
        items=[PostSummary.from_post(post, site.locale) for post in result.items],
        page=result.page,
        perPage=result.per_page,
        total=result.total,
        totalPages=result.total_pages,
    )


@router.get("/posts/{slug:path}", response_model=PostDetail)
def get_post(
    slug: str,
    index: ContentIndex = Depends(deps.get_content_index),
    site: SiteMetadata = Depends(deps.get_site_metadata),
):
    """Get a single post by slug."""
    try:
        post = index.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        newer, older = index.adjacent_posts(slug) or (None, None)
        return PostDetail.from_post(post, newer=newer, older=older, locale=site.locale)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
