import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app import dependencies as deps
from app.exceptions import GatewayUnavailable, MalformedDocument, PostNotFound
from app.schemas.blog import PostListPage, PostPage, RequestContext
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=PostListPage)
def list_posts(
    page: int = Query(1, ge=1),
    service: PostsService = Depends(deps.get_posts_service),
    context: RequestContext = Depends(deps.get_request_context),
):
    """Post listing page props."""
    try:
        return service.list_page(context, page=page)
    except HTTPException:
        raise
    except GatewayUnavailable as e:
        logger.error(f"CMS unavailable while listing posts: {e}")
        raise HTTPException(status_code=502, detail="Content service unavailable")
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/post/{slug}", response_model=PostPage)
def get_post(
    slug: str,
    response: Response,
    service: PostsService = Depends(deps.get_posts_service),
    context: RequestContext = Depends(deps.get_request_context),
):
    """Post detail page props."""
    try:
        return service.get_post_page(slug, context)
    except HTTPException:
        raise
    except PostNotFound:
        response.status_code = 404
        return PostPage.not_found(preview=context.preview)
    except GatewayUnavailable as e:
        logger.error(f"CMS unavailable while retrieving post {slug}: {e}")
        raise HTTPException(status_code=502, detail="Content service unavailable")
    except MalformedDocument as e:
        logger.error(f"Post {slug} cannot be rendered: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
