"""
Article Store Client Tests
==========================

INVARIANTS TESTED:
1. Payloads decode to the content contracts
2. Transport, status and payload failures degrade, never raise
3. Every degradation is recorded as an Error and logged
4. Invalid requests raise before any I/O
"""

import logging

import httpx
import pytest

from timeline_calendar.access.client import (
    ARTICLES_PATH, RANGE_COUNTS_PATH, YEARS_PATH, ArticleStoreClient,
)
from timeline_calendar.contracts.base import ErrorCode, TimeOfDay
from tests.fixtures import mock_client, run


def json_handler(routes):
    """Map path -> JSON body; records requests on the handler."""
    def handler(request: httpx.Request) -> httpx.Response:
        handler.requests.append(request)
        if request.url.path not in routes:
            return httpx.Response(404)
        return httpx.Response(200, json=routes[request.url.path])
    handler.requests = []
    return handler


def fetch(client, method, *args):
    async def scenario():
        async with client:
            return await getattr(client, method)(*args)
    return run(scenario())


class TestMonthArticles:

    def test_decodes_records(self):
        handler = json_handler({ARTICLES_PATH: [
            {"id": 1, "title": "Harbor Fire", "permalink": "/timeline/3/8/1/harbor-fire/",
             "timeline_day": 1, "timeline_time_of_day": "Evening"},
            {"id": 2, "title": "Council Vote", "permalink": "/timeline/3/8/1/council-vote/",
             "timeline_day": "1", "timeline_time_of_day": ""},
        ]})
        client = mock_client(handler)
        articles = fetch(client, 'fetch_month_articles', 3, 8)

        assert [a.title for a in articles] == ["Harbor Fire", "Council Vote"]
        assert articles[0].time_of_day is TimeOfDay.EVENING
        assert articles[1].time_of_day is None
        assert articles[1].day == 1
        assert handler.requests[0].url.params["year"] == "3"
        assert handler.requests[0].url.params["month"] == "8"

    def test_transport_failure_degrades_to_empty(self, caplog):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = mock_client(handler)
        with caplog.at_level(logging.WARNING, logger="timeline_calendar.access.client"):
            assert fetch(client, 'fetch_month_articles', 3, 8) == []

        assert client.errors[0].code is ErrorCode.TRANSPORT_FAILED
        assert ("year", "3") in client.errors[0].context
        assert "degraded" in caplog.text

    def test_http_error_degrades_to_empty(self):
        client = mock_client(lambda request: httpx.Response(500))
        assert fetch(client, 'fetch_month_articles', 3, 8) == []
        assert client.errors[0].code is ErrorCode.HTTP_STATUS

    def test_malformed_json(self):
        client = mock_client(lambda request: httpx.Response(200, content=b"<html>"))
        assert fetch(client, 'fetch_month_articles', 3, 8) == []
        assert client.errors[0].code is ErrorCode.MALFORMED_PAYLOAD

    def test_wrong_shape(self):
        client = mock_client(json_handler({ARTICLES_PATH: {"not": "a list"}}))
        assert fetch(client, 'fetch_month_articles', 3, 8) == []
        assert client.errors[0].code is ErrorCode.MALFORMED_PAYLOAD

    def test_invalid_month_raises(self):
        client = mock_client(json_handler({}))
        with pytest.raises(ValueError):
            fetch(client, 'fetch_month_articles', 3, 13)


class TestRangeCounts:

    def test_decodes_string_keys(self):
        client = mock_client(json_handler({RANGE_COUNTS_PATH: {
            "success": True,
            "data": {"-1": {"3": 2}, "0": {}, "4": {"1": 0, "12": 7}},
        }}))
        dataset = fetch(client, 'fetch_range_counts', -2, 4)

        assert dataset.years() == (-1, 0, 4)
        assert dataset.get(-1)[3] == 2
        assert dataset.get(4)[12] == 7
        assert dataset.global_max == 7

    def test_unsuccessful_returns_none(self):
        client = mock_client(json_handler({RANGE_COUNTS_PATH: {"success": False, "data": "nope"}}))
        assert fetch(client, 'fetch_range_counts', 1, 7) is None
        assert client.errors[0].code is ErrorCode.UNSUCCESSFUL_RESPONSE

    def test_missing_envelope_returns_none(self):
        client = mock_client(json_handler({RANGE_COUNTS_PATH: [1, 2, 3]}))
        assert fetch(client, 'fetch_range_counts', 1, 7) is None
        assert client.errors[0].code is ErrorCode.MALFORMED_PAYLOAD

    def test_negative_count_is_malformed(self):
        client = mock_client(json_handler({RANGE_COUNTS_PATH: {"success": True, "data": {"1": {"1": -3}}}}))
        assert fetch(client, 'fetch_range_counts', 1, 7) is None

    def test_timeout_returns_none(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        client = mock_client(handler)
        assert fetch(client, 'fetch_range_counts', 1, 7) is None
        assert client.errors[0].code is ErrorCode.TRANSPORT_FAILED

    def test_inverted_range_raises(self):
        client = mock_client(json_handler({}))
        with pytest.raises(ValueError):
            fetch(client, 'fetch_range_counts', 8, 1)


class TestYears:

    def test_sorted_numerically(self):
        client = mock_client(json_handler({YEARS_PATH: ["10", "-1", "3", "3", "0"]}))
        assert fetch(client, 'fetch_years') == [-1, 0, 3, 10]

    def test_failure_returns_none(self):
        client = mock_client(lambda request: httpx.Response(503))
        assert fetch(client, 'fetch_years') is None


class TestOwnership:

    def test_injected_http_client_left_open(self):
        async def scenario():
            http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))
            async with ArticleStoreClient(http=http):
                pass
            closed = http.is_closed
            await http.aclose()
            return closed

        assert run(scenario()) is False
