"""
Latest-Wins Source Tests
========================

INVARIANTS TESTED:
1. A superseded response never touches state, whichever resolves first
2. A failed range fetch keeps the previous dataset
3. A superseded month fetch never replaces the newer article list
4. The year list falls back to a single year on failure
"""

import asyncio

import pytest

from timeline_calendar.access.sources import (
    LatestWinsGate, LoadOutcome, MonthArticlesSource, RangeCountsSource, YearListSource,
)
from timeline_calendar.contracts.base import YearRange
from tests.fixtures import ScriptedClient, article, dataset, run, settle


FIRST = dataset({1: {1: 3}, 7: {6: 1}})
SECOND = dataset({8: {2: 9}, 14: {12: 4}})


class TestLatestWinsGate:

    def test_only_newest_ticket_is_current(self):
        gate = LatestWinsGate()
        a = gate.issue()
        b = gate.issue()
        assert not gate.is_current(a)
        assert gate.is_current(b)


class TestRangeCountsStaleSuppression:

    @pytest.mark.parametrize("resolve_order", [(0, 1), (1, 0)])
    def test_newer_range_wins(self, resolve_order):
        """[1,7] then [8,14]; final state is [8,14] in either completion order."""
        async def scenario():
            client = ScriptedClient()
            source = RangeCountsSource(client)
            first = asyncio.ensure_future(source.load(YearRange(1, 7)))
            await settle()
            second = asyncio.ensure_future(source.load(YearRange(8, 14)))
            await settle()

            calls = client.pending('range')
            assert [c.args for c in calls] == [(1, 7), (8, 14)]
            payloads = (FIRST, SECOND)
            for index in resolve_order:
                calls[index].resolve(payloads[index])
                await settle()

            return source, await first, await second

        source, first, second = run(scenario())
        assert first is LoadOutcome.SUPERSEDED
        assert second is LoadOutcome.APPLIED
        assert source.dataset == SECOND
        assert source.global_max == 9

    def test_failure_keeps_previous_dataset(self):
        async def scenario():
            client = ScriptedClient()
            source = RangeCountsSource(client)
            task = asyncio.ensure_future(source.load(YearRange(1, 7)))
            await settle()
            client.pending('range')[0].resolve(FIRST)
            assert await task is LoadOutcome.APPLIED

            task = asyncio.ensure_future(source.load(YearRange(8, 14)))
            await settle()
            client.pending('range')[0].resolve(None)
            return source, await task

        source, outcome = run(scenario())
        assert outcome is LoadOutcome.FAILED
        assert source.dataset == FIRST
        assert source.global_max == 3


class TestMonthArticles:

    @pytest.mark.parametrize("resolve_order", [(0, 1), (1, 0)])
    def test_newer_month_wins(self, resolve_order):
        async def scenario():
            client = ScriptedClient()
            source = MonthArticlesSource(client)
            first = asyncio.ensure_future(source.load(3, 7))
            await settle()
            second = asyncio.ensure_future(source.load(3, 8))
            await settle()
            calls = client.pending('month')
            payloads = ([article(1, "July", 4)], [article(2, "August", 9)])
            for index in resolve_order:
                calls[index].resolve(payloads[index])
                await settle()
            return source, await first, await second

        source, first, second = run(scenario())
        assert (first, second) == (LoadOutcome.SUPERSEDED, LoadOutcome.APPLIED)
        assert [a.title for a in source.articles] == ["August"]


class TestYearList:

    def test_loaded(self):
        async def scenario():
            client = ScriptedClient()
            source = YearListSource(client)
            task = asyncio.ensure_future(source.load(fallback_year=1))
            await settle()
            client.pending('years')[0].resolve([-1, 3, 10])
            return source, await task

        source, outcome = run(scenario())
        assert outcome is LoadOutcome.APPLIED
        assert source.years == [-1, 3, 10]

    def test_fallback_on_failure(self):
        async def scenario():
            client = ScriptedClient()
            source = YearListSource(client)
            task = asyncio.ensure_future(source.load(fallback_year=0))
            await settle()
            client.pending('years')[0].resolve(None)
            return source, await task

        source, outcome = run(scenario())
        assert outcome is LoadOutcome.FAILED
        assert source.years == [0]
