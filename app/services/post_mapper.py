import logging
from typing import Optional

from app.exceptions import InvalidTimestamp, MalformedDocument
from app.schemas.blog import ContentBlock, PostDetail, PostRef, PostSummary
from app.schemas.prismic import (
    validate_document,
    validate_list_item,
    validate_post_ref,
)
from app.services.date_formatter import parse_timestamp

logger = logging.getLogger(__name__)


def map_post_summary(raw: dict) -> PostSummary:
    """Select the listing fields from a Prismic search result."""
    doc = validate_list_item(raw)
    return PostSummary(
        id=doc.id,
        uid=doc.uid,
        publishedAt=_to_datetime(doc.first_publication_date, doc.uid, "first_publication_date"),
        title=doc.data.title,
        subtitle=doc.data.subtitle or "",
        author=doc.data.author,
    )


def map_post_detail(raw: dict) -> PostDetail:
    """Select the detail fields from a full Prismic post document."""
    doc = validate_document(raw)
    return PostDetail(
        id=doc.id,
        uid=doc.uid,
        publishedAt=_to_datetime(doc.first_publication_date, doc.uid, "first_publication_date"),
        updatedAt=_to_datetime(doc.last_publication_date, doc.uid, "last_publication_date"),
        title=doc.data.title,
        subtitle=doc.data.subtitle or "",
        author=doc.data.author,
        bannerUrl=doc.data.banner.url or "",
        content=[
            ContentBlock(heading=block.heading, body=list(block.body))
            for block in doc.data.content
        ],
    )


def map_post_ref(raw: dict) -> PostRef:
    doc = validate_post_ref(raw)
    return PostRef(slug=doc.uid, title=doc.data.title)


def _to_datetime(value: Optional[str], uid: str, field: str):
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except InvalidTimestamp as e:
        logger.warning(f"Unparseable {field} on {uid}: {value!r}")
        raise MalformedDocument(uid, [field]) from e
