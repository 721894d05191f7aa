from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from app.exceptions import MalformedDocument


class RawModel(BaseModel):
    # Prismic documents carry plenty of metadata we never read
    model_config = ConfigDict(extra="ignore", frozen=True)


class RawBanner(RawModel):
    url: Optional[StrictStr] = None


class RawContentBlock(RawModel):
    heading: StrictStr
    body: List[Dict[str, Any]]


class RawPostListData(RawModel):
    title: StrictStr
    subtitle: Optional[StrictStr] = None
    author: StrictStr


class RawPostData(RawPostListData):
    banner: RawBanner = Field(default_factory=RawBanner)
    content: List[RawContentBlock]


class RawTitleData(RawModel):
    title: StrictStr


class RawPostRef(RawModel):
    id: StrictStr
    uid: StrictStr
    data: RawTitleData


class RawPostListItem(RawModel):
    id: StrictStr
    uid: StrictStr
    first_publication_date: Optional[StrictStr] = None
    data: RawPostListData


class RawPostDocument(RawPostListItem):
    last_publication_date: Optional[StrictStr] = None
    data: RawPostData


def _error_fields(error: ValidationError) -> List[str]:
    return [".".join(str(part) for part in err["loc"]) for err in error.errors()]


def _validate(model, raw):
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedDocument(_document_id(raw), _error_fields(e)) from e


def validate_post_ref(raw: dict) -> RawPostRef:
    return _validate(RawPostRef, raw)


def validate_list_item(raw: dict) -> RawPostListItem:
    return _validate(RawPostListItem, raw)


def validate_document(raw: dict) -> RawPostDocument:
    return _validate(RawPostDocument, raw)


def _document_id(raw) -> Optional[str]:
    if isinstance(raw, dict):
        return raw.get("uid") or raw.get("id")
    return None
