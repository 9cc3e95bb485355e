"""
User Models.

Pydantic models for the profile data the matching core reads.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """Display fields of a user."""

    uid: str
    first_name: str = ""
    last_name: str = ""
    image_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Full name, empty when unknown."""
        return f"{self.first_name} {self.last_name}".strip()


class NotificationTarget(BaseModel):
    """Where and whether to notify a user."""

    uid: str
    telegram_chat_id: Optional[str] = None
    notifications_enabled: bool = True


class NotificationBindingRequest(BaseModel):
    """Request model for binding a Telegram chat."""

    chat_id: str = Field(..., min_length=1, max_length=64, description="Telegram chat ID")


class NotificationPreferenceRequest(BaseModel):
    """Request model for switching notifications on or off."""

    notifications_enabled: bool
