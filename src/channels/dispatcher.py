"""
Notification Dispatcher.

Fire-and-forget delivery of notifications on background tasks, with a
per-attempt timeout and a small retry budget. Failures end in a log line
and never reach the caller that dispatched.
"""

import asyncio
from typing import Any, Awaitable, Callable

from loguru import logger

from src.channels.base import BaseNotifier, DeliveryResult, Notification

dispatch_log = logger.bind(module="Dispatcher")

# Builds (title, body, metadata) on the background task
Composer = Callable[[], Awaitable[tuple[str, str, dict[str, Any]]]]


class NotificationDispatcher:
    """Schedules notifier calls outside the request path."""

    def __init__(
        self,
        notifier: BaseNotifier,
        timeout: float = 5.0,
        max_retries: int = 3,
        retry_delay: float = 0.5,
    ):
        """
        Initialize dispatcher.

        Args:
            notifier: Channel used for delivery
            timeout: Seconds allowed per attempt
            max_retries: Maximum attempts per notification
            retry_delay: Initial delay between retries (exponential backoff)
        """
        self._notifier = notifier
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._retry_delay = retry_delay
        self._pending: set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        """Number of deliveries still running."""
        return len(self._pending)

    def dispatch(self, target_uid: str, compose: Composer) -> asyncio.Task:
        """
        Schedule a notification and return immediately.

        ``compose`` runs on the background task, so lookups it makes never
        hold up the caller. Must be called from a running event loop.

        Args:
            target_uid: Recipient user ID
            compose: Coroutine function returning (title, body, metadata)

        Returns:
            The background task (callers normally ignore it)
        """
        task = asyncio.create_task(self._compose_and_deliver(target_uid, compose))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _compose_and_deliver(self, target_uid: str, compose: Composer) -> DeliveryResult:
        """Build the message under the attempt timeout, then deliver it."""
        try:
            title, body, metadata = await asyncio.wait_for(compose(), timeout=self._timeout)
        except Exception as e:
            reason = "timeout" if isinstance(e, asyncio.TimeoutError) else str(e)
            dispatch_log.error(f"Composing notification for {target_uid} failed: {reason}")
            return DeliveryResult.skipped("compose_failed")

        notification = Notification(
            target_uid=target_uid,
            title=title,
            body=body,
            metadata=metadata or {},
        )
        return await self._deliver(notification)

    async def _deliver(self, notification: Notification) -> DeliveryResult:
        """Deliver one notification with retries."""
        target = notification.target_uid

        for attempt in range(self._max_retries):
            try:
                result = await asyncio.wait_for(
                    self._notifier.notify(
                        notification.target_uid,
                        notification.title,
                        notification.body,
                        notification.metadata,
                    ),
                    timeout=self._timeout,
                )
            except Exception as e:
                reason = "timeout" if isinstance(e, asyncio.TimeoutError) else str(e)
                if attempt < self._max_retries - 1:
                    wait_time = self._retry_delay * (2**attempt)
                    dispatch_log.warning(
                        f"Notify {target} failed (attempt {attempt + 1}/{self._max_retries}): "
                        f"{reason}. Retrying in {wait_time}s..."
                    )
                    await asyncio.sleep(wait_time)
                    continue

                dispatch_log.error(
                    f"Notify {target} failed after {self._max_retries} attempts: {reason}"
                )
                return DeliveryResult.skipped("failed")

            if result.delivered:
                dispatch_log.info(
                    f"Notified {target} ({notification.metadata.get('type', 'message')})"
                )
            else:
                dispatch_log.debug(f"Notify {target} skipped: {result.reason}")
            return result

        return DeliveryResult.skipped("failed")

    async def drain(self, timeout: float = 5.0) -> None:
        """
        Wait for pending deliveries, cancelling what is left after timeout.

        Args:
            timeout: Seconds to wait
        """
        if not self._pending:
            return

        pending = list(self._pending)
        done, not_done = await asyncio.wait(pending, timeout=timeout)
        for task in not_done:
            task.cancel()
        if not_done:
            await asyncio.gather(*not_done, return_exceptions=True)
            dispatch_log.warning(f"Cancelled {len(not_done)} pending notifications")

    async def close(self, timeout: float = 5.0) -> None:
        """Drain pending deliveries and close the notifier."""
        await self.drain(timeout)
        await self._notifier.close()
