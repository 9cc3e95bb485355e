"""
Telegram Formatter Module.

Formats match notifications for Telegram using HTML markup.
"""

from typing import Any


class TelegramFormatter:
    """Formats messages for Telegram platform."""

    # Leading emoji per notification type
    ICONS = {
        "like": "💙",
        "match": "🎉",
    }

    def format_notification(
        self, title: str, body: str, metadata: dict[str, Any] | None = None
    ) -> str:
        """
        Format a notification for Telegram.

        Args:
            title: Notification headline
            body: Notification text
            metadata: Notification metadata (``type`` selects the icon)

        Returns:
            HTML formatted message for Telegram
        """
        kind = (metadata or {}).get("type")
        icon = self.ICONS.get(kind, "🔔")

        lines = [f"{icon} <b>{self._escape_html(title)}</b>"]
        if body:
            lines.extend(["", self._escape_html(body)])

        return "\n".join(lines)

    def _escape_html(self, text: str) -> str:
        """Escape HTML special characters."""
        if not text:
            return ""
        return (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
        )
