"""Inbox module - stored like / match notifications."""

from src.modules.inbox.models import InboxEntry, InboxListResponse
from src.modules.inbox.repository import InboxRepository

__all__ = [
    "InboxEntry",
    "InboxListResponse",
    "InboxRepository",
]
