"""Pydantic schemas for share endpoints."""

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from blankpage.services.sharing import MAX_EXPIRY_HOURS


class ShareRequest(BaseModel):
    title: str = ""
    content: str = ""
    expiry_hours: int = Field(
        default=0, alias="expiryHours", le=MAX_EXPIRY_HOURS, description="<= 0 never expires"
    )

    model_config = ConfigDict(populate_by_name=True)


class ShareResponse(BaseModel):
    share_id: uuid.UUID = Field(alias="shareId")
    share_url: str = Field(alias="shareUrl")
    expires_at: datetime | None = Field(default=None, alias="expiresAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_serializer("expires_at")
    def _expires_at_as_utc(self, value: datetime | None) -> datetime | None:
        # Stored timestamps are naive UTC; send them with an explicit offset.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
