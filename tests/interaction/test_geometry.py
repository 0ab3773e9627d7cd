"""
Popup Geometry Tests

Placement below the anchor, flipping above, and viewport clamping.
"""

from timeline_calendar.interaction.geometry import Rect, Size, Viewport, position_popup


VIEWPORT = Viewport(width=1000, height=600)
POPUP = Size(width=300, height=200)


class TestPositionPopup:

    def test_centred_below(self):
        left, top = position_popup(Rect(400, 100, 100, 20), POPUP, VIEWPORT)
        assert left == 300
        assert top == 130

    def test_flips_above_without_room_below(self):
        left, top = position_popup(Rect(400, 450, 100, 20), POPUP, VIEWPORT)
        assert top == 450 - 200 - 10

    def test_clamped_left(self):
        left, _ = position_popup(Rect(0, 100, 20, 20), POPUP, VIEWPORT)
        assert left == 10

    def test_clamped_right(self):
        left, _ = position_popup(Rect(980, 100, 20, 20), POPUP, VIEWPORT)
        assert left == 1000 - 300 - 10

    def test_clamped_top_after_flip(self):
        small = Viewport(width=1000, height=300)
        _, top = position_popup(Rect(400, 120, 100, 20), POPUP, small)
        assert top == 10

    def test_oversized_popup_pins_to_margin(self):
        left, top = position_popup(Rect(400, 100, 20, 20), Size(2000, 900), VIEWPORT)
        assert (left, top) == (10, 10)
