"""
Preview Popup Controller
========================

Hover-intent state machine for the floating article preview shared by
the month grid (day popups) and the sparkline strip (month popups).

STATES:
=======
Hidden -> (intent delay) -> Visible -> (grace delay) -> Hidden

GUARANTEES:
===========
- Entering the source or the popup cancels pending hide timers
- Leaving the source towards the popup starts no timer
- A hide timer only hides if the popup-hovered latch is clear when it fires
- At most one timer per slot (show / source-hide / popup-hide); setting a
  slot cancels what it held
- Content for a request other than the current one is ignored
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
import logging

from ..config import TimelineConfig
from ..contracts.base import MONTH_NAMES, validate_month
from ..contracts.content import ArticleSummary
from ..navigation import day_url, month_url
from ..temporal.calendar import day_title, month_title
from ..temporal.scheduler import Scheduler, TimerHandle
from .events import EventResult, IGNORED, PointerEvent, PointerKind, PopupSurface, Target
from .geometry import Rect, Size, Viewport, position_popup

logger = logging.getLogger(__name__)


LOADING_TEXT = "Loading…"
EMPTY_TEXT = "No articles found"

DAY_POPUP_ID = 'calendar-hover-modal'
MONTH_POPUP_ID = 'sparkline-month-modal'


# =============================================================================
# ORDERING
# =============================================================================

def _time_rank(article: ArticleSummary) -> int:
    # Articles without a time of day sort before Morning.
    return -1 if article.time_of_day is None else article.time_of_day.rank


def sort_day_articles(articles: Iterable[ArticleSummary]) -> List[ArticleSummary]:
    return sorted(articles, key=lambda a: (_time_rank(a), a.title.casefold()))


def sort_month_articles(articles: Iterable[ArticleSummary]) -> List[ArticleSummary]:
    return sorted(articles, key=lambda a: (a.day, _time_rank(a), a.title.casefold()))


# =============================================================================
# VIEW CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class PopupRequest:
    """A day (day set) or a whole month (day None) to preview."""
    year: int
    month: int
    day: Optional[int] = None

    def __post_init__(self):
        validate_month(self.month)

    @property
    def is_month(self) -> bool:
        return self.day is None

    @property
    def title(self) -> str:
        if self.day is None:
            return month_title(self.month, self.year)
        return day_title(self.day, self.month, self.year)

    @property
    def url(self) -> str:
        if self.day is None:
            return month_url(self.year, self.month)
        return day_url(self.year, self.month, self.day)


@dataclass(frozen=True)
class PopupItem:
    title: str
    url: str
    day: int
    badge: Optional[str] = None
    group_label: Optional[str] = None   # set on the first article of each day


@dataclass(frozen=True)
class PopupView:
    """Fully computed popup state; hosts only paint it."""
    popup_id: str
    visible: bool = False
    request: Optional[PopupRequest] = None
    loading: bool = False
    items: Tuple[PopupItem, ...] = ()
    left: float = 0.0
    top: float = 0.0

    @property
    def title(self) -> Optional[str]:
        return self.request.title if self.request else None

    @property
    def title_url(self) -> Optional[str]:
        return self.request.url if self.request else None

    @property
    def status_text(self) -> Optional[str]:
        if self.loading:
            return LOADING_TEXT
        if not self.items:
            return EMPTY_TEXT
        return None


def build_items(request: PopupRequest, articles: Sequence[ArticleSummary]) -> Tuple[PopupItem, ...]:
    if not request.is_month:
        return tuple(
            PopupItem(
                title=a.title,
                url=a.permalink,
                day=a.day,
                badge=a.time_of_day.value if a.time_of_day else None,
            )
            for a in sort_day_articles(articles)
        )

    items = []
    previous_day = None
    for a in sort_month_articles(articles):
        label = None
        if a.day != previous_day:
            label = f"{MONTH_NAMES[request.month - 1]} {a.day}"
            previous_day = a.day
        items.append(PopupItem(
            title=a.title,
            url=a.permalink,
            day=a.day,
            badge=a.time_of_day.value if a.time_of_day else None,
            group_label=label,
        ))
    return tuple(items)


def estimate_popup_size(view: PopupView) -> Size:
    """Box of the rendered popup (300px wide, height capped at 400px)."""
    rows = len(view.items) or 1
    groups = sum(1 for item in view.items if item.group_label)
    height = 32 + 36 + rows * 28 + groups * 22
    return Size(width=300.0, height=float(min(400, height)))


# =============================================================================
# HOVER STATE
# =============================================================================

@dataclass(frozen=True)
class PopupTimings:
    intent_delay: float = 0.0
    source_grace: float = 0.05
    popup_grace: float = 0.1

    @classmethod
    def from_config(cls, config: TimelineConfig) -> 'PopupTimings':
        return cls(
            intent_delay=config.intent_delay,
            source_grace=config.source_grace,
            popup_grace=config.popup_grace,
        )


@dataclass
class HoverState:
    """
    Per-popup hover coordination, shared by the source handlers and the
    popup handlers of one popup instance.
    """
    popup_hovered: bool = False
    show_timer: Optional[TimerHandle] = None
    source_hide_timer: Optional[TimerHandle] = None
    popup_hide_timer: Optional[TimerHandle] = None

    def cancel_hide_timers(self) -> None:
        for name in ('source_hide_timer', 'popup_hide_timer'):
            handle = getattr(self, name)
            if handle is not None:
                handle.cancel()
                setattr(self, name, None)

    def cancel_all(self) -> None:
        self.cancel_hide_timers()
        if self.show_timer is not None:
            self.show_timer.cancel()
            self.show_timer = None

    @property
    def pending_timers(self) -> int:
        return sum(
            1 for h in (self.show_timer, self.source_hide_timer, self.popup_hide_timer)
            if h is not None
        )


# =============================================================================
# CONTROLLER
# =============================================================================

class PreviewPopup:
    """
    One floating preview element and its hover state machine.

    Content is either supplied up front (day popups: the grid has already
    loaded the month) or delivered later (month popups: fetched on hover),
    in which case the popup shows a loading placeholder meanwhile.
    """

    def __init__(
        self,
        popup_id: str,
        scheduler: Scheduler,
        timings: Optional[PopupTimings] = None,
        viewport: Optional[Viewport] = None,
        measure: Optional[Callable[[PopupView], Size]] = None,
    ):
        self._popup_id = popup_id
        self._scheduler = scheduler
        self._timings = timings or PopupTimings()
        self._viewport = viewport or Viewport()
        self._measure = measure or estimate_popup_size
        self._state = HoverState()
        self._view = PopupView(popup_id=popup_id)

        # Current target (may not be shown yet while the intent delay runs)
        self._request: Optional[PopupRequest] = None
        self._anchor: Optional[Rect] = None
        self._articles: Optional[Tuple[ArticleSummary, ...]] = None

    @property
    def popup_id(self) -> str:
        return self._popup_id

    @property
    def state(self) -> HoverState:
        return self._state

    @property
    def view(self) -> PopupView:
        return self._view

    @property
    def visible(self) -> bool:
        return self._view.visible

    @property
    def request(self) -> Optional[PopupRequest]:
        return self._request

    def set_viewport(self, viewport: Viewport) -> None:
        self._viewport = viewport
        if self._view.visible:
            self._render()

    # -------------------------------------------------------------------------
    # Source element
    # -------------------------------------------------------------------------

    def enter_source(
        self,
        request: PopupRequest,
        anchor: Rect,
        articles: Optional[Sequence[ArticleSummary]] = None
    ) -> None:
        self._state.cancel_all()
        self._request = request
        self._anchor = anchor
        self._articles = tuple(articles) if articles is not None else None

        if self._timings.intent_delay <= 0:
            self._show()
        else:
            self._state.show_timer = self._scheduler.call_later(
                self._timings.intent_delay, self._on_show_timer
            )

    def leave_source(self, related: Optional[Target] = None) -> None:
        if self._state.show_timer is not None:
            self._state.show_timer.cancel()
            self._state.show_timer = None

        if isinstance(related, PopupSurface) and related.popup_id == self._popup_id:
            return

        if self._state.source_hide_timer is not None:
            self._state.source_hide_timer.cancel()
        self._state.source_hide_timer = self._scheduler.call_later(
            self._timings.source_grace, self._on_source_hide_timer
        )

    # -------------------------------------------------------------------------
    # Popup element
    # -------------------------------------------------------------------------

    def enter_popup(self) -> None:
        self._state.popup_hovered = True
        self._state.cancel_hide_timers()

    def leave_popup(self) -> None:
        self._state.popup_hovered = False
        if self._state.popup_hide_timer is not None:
            self._state.popup_hide_timer.cancel()
        self._state.popup_hide_timer = self._scheduler.call_later(
            self._timings.popup_grace, self._on_popup_hide_timer
        )

    def handle(self, event: PointerEvent) -> EventResult:
        """Dispatch pointer events whose target is this popup."""
        if not isinstance(event.target, PopupSurface) or event.target.popup_id != self._popup_id:
            return IGNORED
        if event.kind is PointerKind.ENTER:
            self.enter_popup()
            return EventResult(handled=True)
        if event.kind is PointerKind.LEAVE:
            self.leave_popup()
            return EventResult(handled=True)
        return IGNORED

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def deliver(self, request: PopupRequest, articles: Sequence[ArticleSummary]) -> bool:
        """Attach fetched content. Ignored unless it is for the current request."""
        if request != self._request:
            logger.debug("Ignoring popup content for %s; current is %s", request, self._request)
            return False
        self._articles = tuple(articles)
        if self._view.visible:
            self._render()
        return True

    def hide(self) -> None:
        self._state.cancel_all()
        self._state.popup_hovered = False
        self._view = replace(self._view, visible=False)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _show(self) -> None:
        self._view = replace(self._view, visible=True)
        self._render()

    def _render(self) -> None:
        request = self._request
        loading = self._articles is None
        items = () if loading else build_items(request, self._articles)
        view = replace(self._view, request=request, loading=loading, items=items)

        # Measure the shown box, then place it.
        left, top = position_popup(self._anchor, self._measure(view), self._viewport)
        self._view = replace(view, left=left, top=top)

    def _on_show_timer(self) -> None:
        self._state.show_timer = None
        self._show()

    def _on_source_hide_timer(self) -> None:
        self._state.source_hide_timer = None
        self._maybe_hide()

    def _on_popup_hide_timer(self) -> None:
        self._state.popup_hide_timer = None
        self._maybe_hide()

    def _maybe_hide(self) -> None:
        if not self._state.popup_hovered:
            self.hide()
