"""
Base schema classes with common fields and configurations.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "BaseResponseSchema",
    "GeoLocation",
    "MessageResponse",
]


class BaseSchema(BaseModel):
    """Base schema with common Pydantic configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
    )


class BaseResponseSchema(BaseSchema):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GeoLocation(BaseSchema):
    """GPS fix reported by a device"""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    accuracy: Optional[float] = Field(None, ge=0, description="Accuracy radius in metres")
    timestamp: Optional[datetime] = None


class MessageResponse(BaseSchema):
    message: str
