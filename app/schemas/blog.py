from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Opaque Prismic structured-text node ({"type", "text", "spans", ...})
RichTextSpan = Dict[str, Any]


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ContentBlock(FrozenModel):
    heading: str
    body: List[RichTextSpan] = Field(default_factory=list)


class PostSummary(FrozenModel):
    id: str
    uid: str
    publishedAt: Optional[datetime] = None
    title: str
    subtitle: str = ""
    author: str


class PostDetail(PostSummary):
    updatedAt: Optional[datetime] = None
    bannerUrl: str = ""
    content: List[ContentBlock] = Field(default_factory=list)


class PostPagination(FrozenModel):
    results: List[PostSummary] = Field(default_factory=list)
    next_page: Optional[str] = None


class PostRef(FrozenModel):
    slug: str
    title: str


class AdjacentPosts(FrozenModel):
    previous: Optional[PostRef] = None
    next: Optional[PostRef] = None


class RenderState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    ERROR = "error"


class PostListItemView(FrozenModel):
    slug: str
    title: str
    subtitle: str
    author: str
    publishedAt: str


class PostListPage(FrozenModel):
    state: RenderState = RenderState.READY
    preview: bool = False
    posts: List[PostListItemView] = Field(default_factory=list)
    nextPage: Optional[int] = None


class RenderedBlock(FrozenModel):
    heading: str
    html: str


class PostView(FrozenModel):
    slug: str
    pageTitle: str
    title: str
    subtitle: str
    author: str
    bannerUrl: str
    publishedAt: str
    editedAt: Optional[str] = None
    readingTime: str
    content: List[RenderedBlock] = Field(default_factory=list)
    navigation: AdjacentPosts = Field(default_factory=AdjacentPosts)


class PostPage(FrozenModel):
    state: RenderState
    preview: bool = False
    post: Optional[PostView] = None

    @classmethod
    def loading(cls) -> "PostPage":
        return cls(state=RenderState.LOADING)

    @classmethod
    def not_found(cls, preview: bool = False) -> "PostPage":
        return cls(state=RenderState.NOT_FOUND, preview=preview)


class RequestContext(FrozenModel):
    """Per-request rendering context; ``ref`` is the Prismic preview ref."""

    preview: bool = False
    ref: Optional[str] = None

    @classmethod
    def from_preview_ref(cls, ref: Optional[str]) -> "RequestContext":
        return cls(preview=bool(ref), ref=ref or None)
