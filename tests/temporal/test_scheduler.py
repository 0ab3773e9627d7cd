"""
Scheduler Tests
===============

INVARIANTS TESTED:
1. ManualScheduler fires in due order, scheduling order breaking ties
2. Cancelled handles never fire
3. Callbacks scheduled while firing are honoured within the same advance
4. AsyncioScheduler delegates to the running loop
"""

import asyncio

import pytest

from timeline_calendar.temporal.scheduler import AsyncioScheduler, ManualScheduler


class TestManualScheduler:

    def test_fires_in_due_order(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.call_later(0.2, lambda: fired.append("late"))
        scheduler.call_later(0.1, lambda: fired.append("early"))
        scheduler.call_later(0.1, lambda: fired.append("early-2"))

        assert scheduler.advance(0.05) == 0
        assert scheduler.advance(0.2) == 3
        assert fired == ["early", "early-2", "late"]
        assert scheduler.now == pytest.approx(0.25)

    def test_cancelled_handle_never_fires(self):
        scheduler = ManualScheduler()
        fired = []
        handle = scheduler.call_later(0.1, lambda: fired.append(1))
        handle.cancel()
        handle.cancel()

        assert handle.cancelled
        assert scheduler.pending_count == 0
        assert scheduler.advance(1.0) == 0
        assert fired == []

    def test_nested_scheduling(self):
        scheduler = ManualScheduler()
        fired = []

        def first():
            fired.append("first")
            scheduler.call_later(0.1, lambda: fired.append("second"))

        scheduler.call_later(0.1, first)
        scheduler.advance(0.5)
        assert fired == ["first", "second"]

    def test_nested_outside_window_waits(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.call_later(0.1, lambda: scheduler.call_later(1.0, lambda: fired.append(1)))
        scheduler.advance(0.5)
        assert fired == []
        assert scheduler.pending_count == 1
        scheduler.advance(1.0)
        assert fired == [1]

    def test_negative_delay_is_immediate(self):
        scheduler = ManualScheduler(now=5.0)
        fired = []
        scheduler.call_later(-1, lambda: fired.append(1))
        assert scheduler.advance(0) == 1


class TestAsyncioScheduler:

    def test_fires_on_running_loop(self):
        async def scenario():
            scheduler = AsyncioScheduler()
            done = asyncio.Event()
            scheduler.call_later(0.01, done.set)
            await asyncio.wait_for(done.wait(), timeout=1.0)
            return done.is_set()

        assert asyncio.run(scenario())

    def test_cancel(self):
        async def scenario():
            scheduler = AsyncioScheduler()
            fired = []
            handle = scheduler.call_later(0.01, lambda: fired.append(1))
            handle.cancel()
            await asyncio.sleep(0.03)
            return fired, handle.cancelled

        fired, cancelled = asyncio.run(scenario())
        assert fired == []
        assert cancelled
