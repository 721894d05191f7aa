import logging
from typing import List, Optional

from app.db import predicates
from app.schemas.blog import AdjacentPosts, PostDetail, PostPagination, PostRef
from app.services.post_mapper import map_post_detail, map_post_ref, map_post_summary
from app.settings import settings

logger = logging.getLogger(__name__)

SLUG_PAGE_SIZE = 100


class PrismicPostsRepo:
    def __init__(
        self,
        client,
        doc_type: str = settings.POSTS_DOCUMENT_TYPE,
        page_size: int = settings.POSTS_PAGE_SIZE,
        previous_orderings: str = settings.PREVIOUS_POST_ORDERINGS,
        next_orderings: str = settings.NEXT_POST_ORDERINGS,
    ):
        self.client = client
        self.doc_type = doc_type
        self.page_size = page_size
        self.previous_orderings = previous_orderings
        self.next_orderings = next_orderings

    def _type_predicate(self) -> str:
        return predicates.at("document.type", self.doc_type)

    def list_posts(self, page: int = 1, ref: Optional[str] = None) -> PostPagination:
        response = self.client.query(
            [self._type_predicate()],
            fetch=[
                f"{self.doc_type}.title",
                f"{self.doc_type}.subtitle",
                f"{self.doc_type}.author",
            ],
            page_size=self.page_size,
            page=page,
            ref=ref,
        )
        return PostPagination(
            results=[map_post_summary(raw) for raw in response.results],
            next_page=response.next_page,
        )

    def list_slugs(self, ref: Optional[str] = None) -> List[str]:
        slugs: List[str] = []
        page = 1
        while True:
            response = self.client.query(
                [self._type_predicate()],
                fetch=[f"{self.doc_type}.title"],
                page_size=SLUG_PAGE_SIZE,
                page=page,
                ref=ref,
            )
            slugs.extend(map_post_ref(raw).slug for raw in response.results)
            if not response.next_page or not response.results:
                return slugs
            page += 1

    def get_post(self, slug: str, ref: Optional[str] = None) -> PostDetail:
        raw = self.client.get_by_uid(self.doc_type, slug, ref=ref)
        return map_post_detail(raw)

    def get_slug_for_id(self, doc_id: str, ref: Optional[str] = None) -> str:
        return map_post_ref(self.client.get_by_id(doc_id, ref=ref)).slug

    def get_adjacent(self, post_id: str, ref: Optional[str] = None) -> AdjacentPosts:
        return AdjacentPosts(
            previous=self._neighbour(post_id, self.previous_orderings, ref),
            next=self._neighbour(post_id, self.next_orderings, ref),
        )

    def _neighbour(
        self, post_id: str, orderings: str, ref: Optional[str]
    ) -> Optional[PostRef]:
        response = self.client.query(
            [self._type_predicate()],
            fetch=[f"{self.doc_type}.title"],
            page_size=1,
            after=post_id,
            orderings=orderings,
            ref=ref,
        )
        for raw in response.results:
            if raw.get("id") == post_id:
                logger.debug(f"Skipping {post_id} returned as its own neighbour")
                continue
            return map_post_ref(raw)
        return None
