import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import httpx

from app.db import predicates
from app.exceptions import GatewayUnavailable, PostNotFound
from app.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResponse:
    results: List[dict] = field(default_factory=list)
    next_page: Optional[str] = None
    page: int = 1
    total_results_size: int = 0


class PrismicClient:
    """
    Minimal Prismic REST API v2 client.
    Only the calls the blog needs: ref lookup, search, get by uid and by id.
    """

    def __init__(
        self,
        http: httpx.Client,
        endpoint: str,
        access_token: str = "",
    ):
        self.http = http
        self.endpoint = endpoint.rstrip("/")
        self.access_token = access_token
        self._master_ref: Optional[str] = None

    def master_ref(self) -> str:
        if self._master_ref is None:
            api = self._get_json(self.endpoint, {})
            refs = api.get("refs") or []
            master = next((r for r in refs if r.get("isMasterRef")), None)
            if not master or not master.get("ref"):
                raise GatewayUnavailable("Prismic API did not return a master ref")
            self._master_ref = master["ref"]
        return self._master_ref

    def query(
        self,
        query_predicates: Iterable[str],
        *,
        fetch: Optional[Iterable[str]] = None,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
        after: Optional[str] = None,
        orderings: Optional[str] = None,
        ref: Optional[str] = None,
    ) -> QueryResponse:
        params = {
            "ref": ref or self.master_ref(),
            "q": predicates.build_query(query_predicates),
        }
        if fetch:
            params["fetch"] = ",".join(fetch)
        if page_size is not None:
            params["pageSize"] = page_size
        if page is not None:
            params["page"] = page
        if after:
            params["after"] = after
        if orderings:
            params["orderings"] = orderings

        data = self._get_json(f"{self.endpoint}/documents/search", params)
        return QueryResponse(
            results=list(data.get("results") or []),
            next_page=data.get("next_page"),
            page=data.get("page") or 1,
            total_results_size=data.get("total_results_size") or 0,
        )

    def get_by_uid(self, doc_type: str, uid: str, *, ref: Optional[str] = None) -> dict:
        response = self.query(
            [predicates.at(f"my.{doc_type}.uid", uid)], page_size=1, ref=ref
        )
        if not response.results:
            raise PostNotFound(uid)
        return response.results[0]

    def get_by_id(self, doc_id: str, *, ref: Optional[str] = None) -> dict:
        response = self.query(
            [predicates.at("document.id", doc_id)], page_size=1, ref=ref
        )
        if not response.results:
            raise PostNotFound(doc_id)
        return response.results[0]

    def _get_json(self, url: str, params: dict) -> dict:
        if self.access_token:
            params = {**params, "access_token": self.access_token}
        try:
            response = self.http.get(url, params=params)
        except httpx.RequestError as e:
            logger.error(f"Prismic request failed: {e}")
            raise GatewayUnavailable(str(e)) from e

        if response.status_code >= 400:
            logger.error(
                f"Prismic answered {response.status_code} for {url}: {response.text[:200]}"
            )
            raise GatewayUnavailable(f"Prismic answered {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise GatewayUnavailable("Prismic returned invalid JSON") from e


def get_prismic():
    """
    Create a Prismic client for the duration of a request.
    Called at runtime to avoid import-time connections.
    """
    http = httpx.Client(timeout=settings.PRISMIC_TIMEOUT)
    try:
        yield PrismicClient(
            http,
            settings.PRISMIC_API_ENDPOINT,
            access_token=settings.PRISMIC_ACCESS_TOKEN,
        )
    finally:
        http.close()
