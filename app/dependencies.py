from fastapi import Depends, Request

from app.db.prismic import get_prismic
from app.repos.posts_repo import PrismicPostsRepo
from app.schemas.blog import RequestContext
from app.services.posts_service import PostsService
from app.settings import Settings, get_settings


def get_posts_repo(client=Depends(get_prismic)):
    return PrismicPostsRepo(client)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)


def get_request_context(
    request: Request,
    current_settings: Settings = Depends(get_settings),
) -> RequestContext:
    return RequestContext.from_preview_ref(
        request.cookies.get(current_settings.PREVIEW_COOKIE_NAME)
    )
