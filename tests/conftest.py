from app.db.prismic import QueryResponse
from app.exceptions import PostNotFound
from app.schemas.blog import AdjacentPosts, PostPagination


def make_raw_post(
    uid: str = "como-utilizar-hooks",
    doc_id: str = "YEB0lxIAACMAGd7_",
    *,
    title: str = "Como utilizar Hooks",
    subtitle: str = "Pensando em sincronização em vez de ciclos de vida",
    author: str = "Joseph Oliveira",
    first_publication_date: str | None = "2021-03-15T19:25:28+0000",
    last_publication_date: str | None = "2021-03-25T19:27:35+0000",
    banner_url: str = "https://images.prismic.io/spacetravelling/banner.png",
    content: list | None = None,
) -> dict:
    """Raw Prismic post document, shaped like the REST API returns it."""
    if content is None:
        content = [
            {
                "heading": "Proin et varius",
                "body": [
                    {
                        "type": "paragraph",
                        "text": "Lorem ipsum dolor sit amet",
                        "spans": [],
                    }
                ],
            }
        ]
    return {
        "id": doc_id,
        "uid": uid,
        "type": "posts",
        "href": f"https://spacetravelling.cdn.prismic.io/api/v2/documents/search?q={doc_id}",
        "tags": [],
        "slugs": [uid],
        "lang": "pt-br",
        "alternate_languages": [],
        "first_publication_date": first_publication_date,
        "last_publication_date": last_publication_date,
        "data": {
            "title": title,
            "subtitle": subtitle,
            "author": author,
            "banner": {"url": banner_url, "alt": None, "dimensions": {}},
            "content": content,
        },
    }


def make_raw_list_item(uid: str, doc_id: str, **kwargs) -> dict:
    raw = make_raw_post(uid, doc_id, **kwargs)
    raw["data"] = {
        key: raw["data"][key] for key in ("title", "subtitle", "author")
    }
    return raw


class FakePrismicClient:
    """
    Minimal PrismicClient stand-in.
    ``responses`` is consumed in call order; every call is recorded.
    """

    def __init__(self, responses=None, documents=None):
        self.responses = list(responses or [])
        self.documents = documents or {}
        self.calls = []

    def query(self, query_predicates, **options):
        self.calls.append(("query", list(query_predicates), options))
        if not self.responses:
            return QueryResponse()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get_by_uid(self, doc_type, uid, *, ref=None):
        self.calls.append(("get_by_uid", doc_type, uid, ref))
        for doc in self.documents.values():
            if doc.get("uid") == uid:
                return doc
        raise PostNotFound(uid)

    def get_by_id(self, doc_id, *, ref=None):
        self.calls.append(("get_by_id", doc_id, ref))
        if doc_id not in self.documents:
            raise PostNotFound(doc_id)
        return self.documents[doc_id]


class FakeRepo:
    """
    Minimal repo stand-in used in service tests.
    """

    def __init__(
        self,
        posts=None,
        pagination=None,
        adjacent=None,
        slugs=None,
        errors=None,
    ):
        self.posts = {post.uid: post for post in (posts or [])}
        self.pagination = pagination or PostPagination()
        self.adjacent = adjacent or AdjacentPosts()
        self.slugs = slugs if slugs is not None else list(self.posts)
        self.errors = errors or {}
        self.calls = []

    def list_posts(self, page=1, ref=None):
        self.calls.append(("list_posts", page, ref))
        if "list_posts" in self.errors:
            raise self.errors["list_posts"]
        return self.pagination

    def list_slugs(self, ref=None):
        self.calls.append(("list_slugs", ref))
        if "list_slugs" in self.errors:
            raise self.errors["list_slugs"]
        return self.slugs

    def get_post(self, slug, ref=None):
        self.calls.append(("get_post", slug, ref))
        if slug in self.errors:
            raise self.errors[slug]
        if slug not in self.posts:
            raise PostNotFound(slug)
        return self.posts[slug]

    def get_adjacent(self, post_id, ref=None):
        self.calls.append(("get_adjacent", post_id, ref))
        return self.adjacent

    def get_slug_for_id(self, doc_id, ref=None):
        self.calls.append(("get_slug_for_id", doc_id, ref))
        for post in self.posts.values():
            if post.id == doc_id:
                return post.uid
        raise PostNotFound(doc_id)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_page_return=None, post_page_return=None, error=None):
        self._list_page_return = list_page_return
        self._post_page_return = post_page_return
        self.error = error
        self.contexts = []

    def list_page(self, context, page=1):
        self.contexts.append(context)
        if self.error:
            raise self.error
        return self._list_page_return

    def get_post_page(self, slug, context):
        self.contexts.append(context)
        if self.error:
            raise self.error
        return self._post_page_return


class StaticRenderer:
    """Rich-text renderer stand-in that echoes span text."""

    def as_html(self, spans):
        return "".join(f"<p>{span.get('text', '')}</p>" for span in spans)
