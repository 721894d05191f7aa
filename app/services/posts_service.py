import logging
from typing import Optional

from app.schemas.blog import (
    AdjacentPosts,
    PostDetail,
    PostListItemView,
    PostListPage,
    PostPage,
    PostSummary,
    PostView,
    RenderState,
    RequestContext,
)
from app.services.date_formatter import (
    EDITED_DATE_PATTERN,
    PUBLISHED_DATE_PATTERN,
    format_date,
)
from app.services.rich_text import PrismicHtmlRenderer, RichTextRenderer, render_blocks
from app.services.text_metrics import calculate_reading_time, format_reading_time
from app.settings import settings

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(
        self,
        repo,
        renderer: Optional[RichTextRenderer] = None,
        *,
        locale: str = settings.DATE_LOCALE,
        tz: str = settings.DATE_TIMEZONE,
        words_per_minute: int = settings.WORDS_PER_MINUTE,
        site_name: str = settings.SITE_NAME,
    ):
        self.repo = repo
        self.renderer = renderer or PrismicHtmlRenderer()
        self.locale = locale
        self.tz = tz
        self.words_per_minute = words_per_minute
        self.site_name = site_name

    def list_page(self, context: RequestContext, page: int = 1) -> PostListPage:
        pagination = self.repo.list_posts(page=page, ref=context.ref)
        return PostListPage(
            state=RenderState.READY,
            preview=context.preview,
            posts=[self._list_item(post) for post in pagination.results],
            nextPage=page + 1 if pagination.next_page else None,
        )

    def get_post_page(self, slug: str, context: RequestContext) -> PostPage:
        """Full detail page for ``slug``; raises PostNotFound for unknown slugs."""
        post = self.repo.get_post(slug, ref=context.ref)
        navigation = self.repo.get_adjacent(post.id, ref=context.ref)
        return PostPage(
            state=RenderState.READY,
            preview=context.preview,
            post=self._post_view(post, navigation),
        )

    def _format(self, value, pattern: str = PUBLISHED_DATE_PATTERN) -> str:
        return format_date(value, pattern, locale=self.locale, tz=self.tz)

    def _list_item(self, post: PostSummary) -> PostListItemView:
        return PostListItemView(
            slug=post.uid,
            title=post.title,
            subtitle=post.subtitle,
            author=post.author,
            publishedAt=self._format(post.publishedAt),
        )

    def _post_view(self, post: PostDetail, navigation: AdjacentPosts) -> PostView:
        minutes = calculate_reading_time(post.content, self.words_per_minute)
        if minutes == 0:
            logger.info(f"Post {post.uid} has no words, reading time is 0 min")

        edited_at = None
        if post.updatedAt and post.updatedAt != post.publishedAt:
            edited_at = self._format(post.updatedAt, EDITED_DATE_PATTERN)

        return PostView(
            slug=post.uid,
            pageTitle=f"{post.title} | {self.site_name}",
            title=post.title,
            subtitle=post.subtitle,
            author=post.author,
            bannerUrl=post.bannerUrl,
            publishedAt=self._format(post.publishedAt),
            editedAt=edited_at,
            readingTime=format_reading_time(minutes),
            content=render_blocks(post.content, self.renderer),
            navigation=navigation,
        )
