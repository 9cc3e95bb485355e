"""Inbox models for stored like / match notifications."""

import json
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class InboxEntry(BaseModel):
    """A notification kept in the recipient's inbox."""

    id: int
    recipient_uid: str
    sender_uid: Optional[str] = None
    title: str
    message: str
    type: str = Field(default="general", description="like, match or general")
    data: dict = Field(default_factory=dict, description="Notification metadata")
    is_read: bool = False
    created_at: datetime

    # Sender display fields, joined from users
    sender_name: str = ""
    sender_image_url: Optional[str] = None

    @field_validator("data", mode="before")
    @classmethod
    def parse_data(cls, v):
        """Parse data from JSON string if needed."""
        if isinstance(v, str):
            return json.loads(v)
        return v or {}

    @field_validator("sender_name", mode="before")
    @classmethod
    def default_sender_name(cls, v):
        return v or ""


class InboxListResponse(BaseModel):
    """Response model for a user's inbox."""

    success: bool = True
    count: int
    notifications: list[InboxEntry]
