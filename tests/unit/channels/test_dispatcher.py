"""
Unit tests for src/channels/dispatcher.py
"""

import asyncio

from src.channels.base import DeliveryResult
from src.channels.dispatcher import NotificationDispatcher
from tests.fixtures.store import RecordingNotifier


def make_dispatcher(notifier, timeout=1.0, max_retries=3) -> NotificationDispatcher:
    return NotificationDispatcher(
        notifier, timeout=timeout, max_retries=max_retries, retry_delay=0
    )


def message(title="Title", body="Body", metadata=None):
    """Compose function returning a fixed message."""

    async def compose():
        return title, body, metadata

    return compose


# ============================================================
# Delivery
# ============================================================


class TestDeliver:
    """Tests for dispatch and retry behaviour."""

    def test_delivers_once(self):
        """Successful delivery makes one call with the given payload."""
        notifier = RecordingNotifier()
        dispatcher = make_dispatcher(notifier)

        async def scenario():
            return await dispatcher.dispatch("bora", message(metadata={"type": "like"}))

        result = asyncio.run(scenario())
        assert result.delivered is True
        assert notifier.calls == [
            {"target_uid": "bora", "title": "Title", "body": "Body", "metadata": {"type": "like"}}
        ]

    def test_retries_until_success(self):
        """Transient failures are retried within the budget."""
        notifier = RecordingNotifier(failures=2)
        dispatcher = make_dispatcher(notifier, max_retries=3)

        result = asyncio.run(_dispatch(dispatcher))
        assert result.delivered is True
        assert len(notifier.calls) == 3

    def test_gives_up_after_budget(self):
        """Exhausted retries end in a failed result, not an exception."""
        notifier = RecordingNotifier(failures=5)
        dispatcher = make_dispatcher(notifier, max_retries=3)

        result = asyncio.run(_dispatch(dispatcher))
        assert result.delivered is False
        assert result.reason == "failed"
        assert len(notifier.calls) == 3

    def test_slow_notifier_times_out(self):
        """Attempts exceeding the timeout count as failures."""
        notifier = RecordingNotifier(delay=1.0)
        dispatcher = make_dispatcher(notifier, timeout=0.01, max_retries=2)

        result = asyncio.run(_dispatch(dispatcher))
        assert result.reason == "failed"
        assert len(notifier.calls) == 2

    def test_skipped_result_not_retried(self):
        """Permanent skips are returned as-is."""
        notifier = RecordingNotifier(result=DeliveryResult.skipped("no_binding"))
        dispatcher = make_dispatcher(notifier)

        result = asyncio.run(_dispatch(dispatcher))
        assert result.reason == "no_binding"
        assert len(notifier.calls) == 1

    def test_zero_retries_still_attempts_once(self):
        """max_retries below one is treated as one attempt."""
        notifier = RecordingNotifier(failures=1)
        dispatcher = make_dispatcher(notifier, max_retries=0)

        result = asyncio.run(_dispatch(dispatcher))
        assert result.delivered is False
        assert len(notifier.calls) == 1


async def _dispatch(dispatcher) -> DeliveryResult:
    return await dispatcher.dispatch("bora", message())


# ============================================================
# Composition
# ============================================================


class TestCompose:
    """Tests for building the message on the background task."""

    def test_compose_runs_after_dispatch_returns(self):
        """The caller gets control back before compose starts."""
        notifier = RecordingNotifier()
        dispatcher = make_dispatcher(notifier)
        started = []

        async def compose():
            started.append(True)
            return "Title", "Body", {}

        async def scenario():
            dispatcher.dispatch("bora", compose)
            before = list(started)
            await dispatcher.drain()
            return before

        assert asyncio.run(scenario()) == []
        assert started == [True]
        assert len(notifier.calls) == 1

    def test_compose_error_skips_delivery(self):
        """A failing compose is logged and nothing is sent."""
        notifier = RecordingNotifier()
        dispatcher = make_dispatcher(notifier)

        async def compose():
            raise RuntimeError("profile store down")

        result = asyncio.run(_run_dispatch(dispatcher, compose))
        assert result.delivered is False
        assert result.reason == "compose_failed"
        assert notifier.calls == []

    def test_slow_compose_times_out(self):
        """Compose is bounded by the attempt timeout."""
        notifier = RecordingNotifier()
        dispatcher = make_dispatcher(notifier, timeout=0.01)

        async def compose():
            await asyncio.sleep(1.0)
            return "Title", "Body", {}

        result = asyncio.run(_run_dispatch(dispatcher, compose))
        assert result.reason == "compose_failed"
        assert notifier.calls == []

    def test_missing_metadata_defaults_to_empty(self):
        notifier = RecordingNotifier()
        dispatcher = make_dispatcher(notifier)

        asyncio.run(_dispatch(dispatcher))
        assert notifier.calls[0]["metadata"] == {}


async def _run_dispatch(dispatcher, compose) -> DeliveryResult:
    return await dispatcher.dispatch("bora", compose)


# ============================================================
# Shutdown
# ============================================================


class TestShutdown:
    """Tests for drain and close."""

    def test_dispatch_returns_immediately(self):
        """dispatch does not wait for delivery."""
        notifier = RecordingNotifier(delay=0.2)
        dispatcher = make_dispatcher(notifier)

        async def scenario():
            dispatcher.dispatch("bora", message())
            pending = dispatcher.pending_count
            await dispatcher.drain()
            return pending

        assert asyncio.run(scenario()) == 1
        assert len(notifier.calls) == 1

    def test_drain_cancels_leftovers(self):
        """Deliveries still running after the grace period are cancelled."""
        notifier = RecordingNotifier(delay=10.0)
        dispatcher = make_dispatcher(notifier, timeout=30.0)

        async def scenario():
            task = dispatcher.dispatch("bora", message())
            await dispatcher.drain(timeout=0.05)
            return task

        task = asyncio.run(scenario())
        assert task.cancelled()

    def test_drain_without_pending(self):
        """Drain with nothing pending returns at once."""
        dispatcher = make_dispatcher(RecordingNotifier())
        asyncio.run(dispatcher.drain())

    def test_close_drains_and_closes_notifier(self):
        """close flushes deliveries then closes the channel."""
        notifier = RecordingNotifier()
        dispatcher = make_dispatcher(notifier)

        async def scenario():
            dispatcher.dispatch("bora", message())
            await dispatcher.close()

        asyncio.run(scenario())
        assert len(notifier.calls) == 1
        assert notifier.closed is True
