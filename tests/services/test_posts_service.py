import pytest

from app.exceptions import GatewayUnavailable, PostNotFound
from app.schemas.blog import (
    AdjacentPosts,
    ContentBlock,
    PostDetail,
    PostPagination,
    PostRef,
    PostSummary,
    RenderState,
    RequestContext,
)
from app.services.date_formatter import parse_timestamp
from app.services.posts_service import PostsService
from tests.conftest import FakeRepo, StaticRenderer


def make_detail(**overrides) -> PostDetail:
    fields = dict(
        id="doc-1",
        uid="hello",
        publishedAt=parse_timestamp("2021-03-15T19:25:28+0000"),
        updatedAt=parse_timestamp("2021-03-25T19:27:35+0000"),
        title="Hello",
        subtitle="World",
        author="Ada",
        bannerUrl="https://images.prismic.io/banner.png",
        content=[
            ContentBlock(heading="Intro", body=[{"type": "paragraph", "text": "one two three"}])
        ],
    )
    fields.update(overrides)
    return PostDetail(**fields)


def make_service(repo, **kwargs):
    kwargs.setdefault("renderer", StaticRenderer())
    kwargs.setdefault("locale", "pt_br")
    kwargs.setdefault("tz", "UTC")
    kwargs.setdefault("site_name", "spacetravelling")
    return PostsService(repo, **kwargs)


def test_list_page_formats_summaries():
    pagination = PostPagination(
        results=[
            PostSummary(
                id="1",
                uid="first",
                publishedAt=parse_timestamp("2023-03-15T00:00:00Z"),
                title="First",
                subtitle="Sub",
                author="Ada",
            ),
            PostSummary(id="2", uid="undated", title="Undated", author="Bob"),
        ],
        next_page="https://cdn.prismic.io/page=2",
    )
    repo = FakeRepo(pagination=pagination)

    page = make_service(repo).list_page(RequestContext(), page=1)

    assert page.state == RenderState.READY
    assert page.preview is False
    assert [p.slug for p in page.posts] == ["first", "undated"]
    assert page.posts[0].publishedAt == "15 mar 2023"
    assert page.posts[1].publishedAt == ""
    assert page.nextPage == 2
    assert repo.calls == [("list_posts", 1, None)]


def test_list_page_without_next_page():
    page = make_service(FakeRepo()).list_page(RequestContext(), page=3)

    assert page.posts == []
    assert page.nextPage is None


def test_preview_context_is_threaded_to_repo():
    repo = FakeRepo(posts=[make_detail()])
    context = RequestContext.from_preview_ref("preview-ref")

    page = make_service(repo).get_post_page("hello", context)

    assert page.preview is True
    assert ("get_post", "hello", "preview-ref") in repo.calls
    assert ("get_adjacent", "doc-1", "preview-ref") in repo.calls


def test_get_post_page_builds_view():
    adjacent = AdjacentPosts(next=PostRef(slug="next-post", title="Next"))
    repo = FakeRepo(posts=[make_detail()], adjacent=adjacent)

    page = make_service(repo).get_post_page("hello", RequestContext())
    post = page.post

    assert page.state == RenderState.READY
    assert post.slug == "hello"
    assert post.pageTitle == "Hello | spacetravelling"
    assert post.publishedAt == "15 mar 2021"
    assert post.editedAt == "* editado em 25 mar 2021, às 19:27"
    assert post.readingTime == "1 min"
    assert post.bannerUrl == "https://images.prismic.io/banner.png"
    assert [(b.heading, b.html) for b in post.content] == [
        ("Intro", "<p>one two three</p>")
    ]
    assert post.navigation.previous is None
    assert post.navigation.next.slug == "next-post"


def test_edited_line_hidden_when_never_edited():
    published = parse_timestamp("2021-03-15T19:25:28+0000")
    repo = FakeRepo(posts=[make_detail(updatedAt=published)])

    post = make_service(repo).get_post_page("hello", RequestContext()).post

    assert post.editedAt is None


def test_empty_post_reads_in_zero_minutes():
    repo = FakeRepo(posts=[make_detail(content=[])])

    post = make_service(repo).get_post_page("hello", RequestContext()).post

    assert post.readingTime == "0 min"
    assert post.content == []


def test_get_post_page_raises_not_found():
    with pytest.raises(PostNotFound):
        make_service(FakeRepo()).get_post_page("missing", RequestContext())


def test_get_post_page_propagates_gateway_errors():
    repo = FakeRepo(errors={"hello": GatewayUnavailable("down")})

    with pytest.raises(GatewayUnavailable):
        make_service(repo).get_post_page("hello", RequestContext())


def test_default_renderer_sanitizes_markup():
    post = make_detail(
        content=[
            ContentBlock(
                heading="XSS",
                body=[{"type": "paragraph", "text": "<img src=x onerror=alert(1)>"}],
            )
        ]
    )
    service = PostsService(FakeRepo(posts=[post]), locale="pt_br", tz="UTC")

    html = service.get_post_page("hello", RequestContext()).post.content[0].html

    assert "<img" not in html
    assert html.startswith("<p>")
