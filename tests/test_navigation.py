"""
Navigation Tests

URL scheme, day adjacency links and the address bar.
"""

from timeline_calendar.contracts.base import FictionalDate, YearPolicy
from timeline_calendar.navigation import (
    AddressBar, Navigator, YEAR_PARAM, adjacent_day_links, article_url,
    day_url, fallback_permalink, month_url, overview_url, year_url,
)


class TestUrls:

    def test_scheme(self):
        assert overview_url() == "/timeline/"
        assert year_url(-2) == "/timeline/-2/"
        assert month_url(3, 8) == "/timeline/3/8/"
        assert day_url(3, 8, 15) == "/timeline/3/8/15/"
        assert article_url(3, 8, 15, "eclipse") == "/timeline/3/8/15/eclipse/"
        assert fallback_permalink(42) == "/?p=42"


class TestAdjacentDayLinks:

    def test_both_enabled(self):
        prev, nxt = adjacent_day_links(FictionalDate(3, 8, 15), YearPolicy())
        assert prev.url == "/timeline/3/8/14/"
        assert nxt.url == "/timeline/3/8/16/"
        assert prev.enabled and nxt.enabled
        assert prev.label == "August 14, Year 3"

    def test_previous_blocked_at_year_floor(self):
        prev, nxt = adjacent_day_links(FictionalDate(1, 1, 1), YearPolicy())
        assert prev.date == FictionalDate(0, 12, 31)
        assert not prev.enabled
        assert prev.tooltip == "Year 0 is not allowed with current settings"
        assert nxt.enabled and nxt.tooltip is None

    def test_previous_allowed_with_year_zero(self):
        prev, _ = adjacent_day_links(FictionalDate(1, 1, 1), YearPolicy(allow_year_zero=True))
        assert prev.enabled


class TestPageCollaborators:

    def test_navigator_records(self):
        navigator = Navigator()
        assert navigator.current is None
        navigator.go("/timeline/3/")
        navigator.go("/timeline/4/")
        assert navigator.visited == ["/timeline/3/", "/timeline/4/"]
        assert navigator.current == "/timeline/4/"

    def test_address_bar_push(self):
        bar = AddressBar(path="/timeline/")
        assert bar.url == "/timeline/"
        bar.push(**{YEAR_PARAM: 5})
        bar.push(**{YEAR_PARAM: -1})
        assert bar.get(YEAR_PARAM) == "-1"
        assert bar.history == ["/timeline/?timeline_year=5", "/timeline/?timeline_year=-1"]
