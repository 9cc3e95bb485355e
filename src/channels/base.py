"""
Base Channel Module.

Defines the notifier interface every push channel implements.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, Field


class DeliveryResult(BaseModel):
    """Outcome of a single notification attempt."""

    delivered: bool
    reason: Optional[str] = None  # Set when not delivered

    @classmethod
    def ok(cls) -> "DeliveryResult":
        return cls(delivered=True)

    @classmethod
    def skipped(cls, reason: str) -> "DeliveryResult":
        return cls(delivered=False, reason=reason)


class Notification(BaseModel):
    """A message addressed to one user."""

    target_uid: str
    title: str
    body: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class BaseNotifier(ABC):
    """
    Base class for notification channels.

    Each platform (Telegram, FCM, etc.) implements this interface.
    Implementations return a skipped DeliveryResult for permanent
    conditions (no binding, opted out) and raise for transient failures,
    so the dispatcher knows what is worth retrying.
    """

    # Channel identifier
    service_name: str = ""

    @abstractmethod
    async def notify(
        self,
        target_uid: str,
        title: str,
        body: str,
        metadata: dict[str, Any] | None = None,
    ) -> DeliveryResult:
        """
        Send a notification to a user.

        Args:
            target_uid: Recipient user ID
            title: Short headline
            body: Message text
            metadata: Extra key/value data for the client

        Returns:
            DeliveryResult
        """
        pass

    async def close(self) -> None:
        """Release channel resources."""
        return None
