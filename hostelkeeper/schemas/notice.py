from pydantic import Field

from hostelkeeper.models.enums import NoticeAudience
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema


class NoticeCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1)
    audience: NoticeAudience = NoticeAudience.ALL


class NoticeResponse(BaseResponseSchema):
    title: str
    body: str
    audience: NoticeAudience
