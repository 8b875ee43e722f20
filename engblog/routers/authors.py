import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from engblog import dependencies as deps
from engblog.schemas.blog import AuthorCount, AuthorDetail, AuthorSummary, PostSummary
from engblog.schemas.site import SiteMetadata
from engblog.services.content_index import ContentIndex, sorted_author_counts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/authors", response_model=List[AuthorSummary])
def list_authors(index: ContentIndex = Depends(deps.get_content_index)):
    try:
        return [AuthorSummary.from_author(author) for author in index.list_authors()]
    except Exception as e:
        logger.error(f"Unexpected error listing authors: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve authors")


@router.get("/author-counts", response_model=List[AuthorCount])
def author_counts(index: ContentIndex = Depends(deps.get_content_index)):
    """Post counts per author, most prolific first."""
    try:
        return [
            AuthorCount(slug=slug, name=entry.name, count=entry.count)
            for slug, entry in sorted_author_counts(index.author_counts())
        ]
    except Exception as e:
        logger.error(f"Unexpected error counting authors: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve authors")


@router.get("/authors/{slug}", response_model=AuthorDetail)
def get_author(
    slug: str,
    index: ContentIndex = Depends(deps.get_content_index),
    site: SiteMetadata = Depends(deps.get_site_metadata),
):
    """Get an author profile with their posts."""
    try:
        author = index.get_author(slug)
        if not author:
            raise HTTPException(status_code=404, detail="Author not found")
        return AuthorDetail(
            **AuthorSummary.from_author(author).model_dump(),
            bio=author.bio,
            posts=[
                PostSummary.from_post(post, site.locale)
                for post in index.posts_by_author(slug)
            ],
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving author {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve author")
