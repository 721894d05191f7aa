import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from app import dependencies as deps
from app.exceptions import GatewayUnavailable, PostNotFound
from app.repos.posts_repo import PrismicPostsRepo
from app.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/preview")
def enter_preview(
    token: str = Query(..., min_length=1),
    documentId: str = Query(..., min_length=1),
    repo: PrismicPostsRepo = Depends(deps.get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    """Store the preview ref and redirect to the previewed post."""
    try:
        slug = repo.get_slug_for_id(documentId, ref=token)
    except PostNotFound:
        raise HTTPException(status_code=404, detail="Document not found")
    except GatewayUnavailable as e:
        logger.error(f"CMS unavailable while resolving preview {documentId}: {e}")
        raise HTTPException(status_code=502, detail="Content service unavailable")

    response = RedirectResponse(url=f"/post/{slug}", status_code=307)
    response.set_cookie(current_settings.PREVIEW_COOKIE_NAME, token, httponly=True)
    return response


@router.get("/exit-preview")
def exit_preview(current_settings: Settings = Depends(get_settings)):
    response = RedirectResponse(url="/", status_code=307)
    response.delete_cookie(current_settings.PREVIEW_COOKIE_NAME)
    return response
