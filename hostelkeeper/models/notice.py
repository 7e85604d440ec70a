"""
Notices published by administrators.
"""

from sqlalchemy import Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import NoticeAudience

__all__ = ["Notice"]


class Notice(TimestampModel):
    __tablename__ = "notices"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    audience: Mapped[NoticeAudience] = mapped_column(
        Enum(NoticeAudience, name="notice_audience_enum"),
        nullable=False,
        default=NoticeAudience.ALL,
        index=True,
    )
