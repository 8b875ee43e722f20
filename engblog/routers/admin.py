import logging

from fastapi import APIRouter, Depends, HTTPException

from engblog import dependencies as deps
from engblog.services.content_loader import ContentValidationError
from engblog.services.content_store import ContentStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/reload")
def reload_content(store: ContentStore = Depends(deps.get_content_store)):
    """Rebuild the content snapshot from the content source."""
    try:
        index = store.reload()
    except ContentValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error reloading content: {e}")
        raise HTTPException(status_code=500, detail="Failed to reload content")
    return {"posts": len(index.list_posts()), "authors": len(index.list_authors())}
