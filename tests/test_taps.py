"""Tests for single / double tap disambiguation."""

from py_mosaic.core.taps import TapDispatcher, TapKind


class TestTapDispatcher:

    def test_single_tap_held_until_window_elapses(self):
        taps = TapDispatcher(300)

        assert taps.tap((10, 10), 1000) is None
        assert taps.flush(1200) is None

        event = taps.flush(1300)
        assert event.kind is TapKind.SINGLE
        assert event.point == (10, 10)
        assert taps.flush(1400) is None

    def test_double_tap(self):
        taps = TapDispatcher(300)
        taps.tap((10, 10), 1000)

        event = taps.tap((12, 11), 1250)

        assert event.kind is TapKind.DOUBLE
        assert event.point == (12, 11)
        assert taps.pending is None

    def test_window_is_exclusive(self):
        """Taps exactly one window apart are two singles."""
        taps = TapDispatcher(300)
        taps.tap((10, 10), 1000)
        assert taps.tap((10, 10), 1300) is None

    def test_third_tap_starts_new_sequence(self):
        taps = TapDispatcher(300)
        taps.tap((0, 0), 0)
        assert taps.tap((0, 0), 100).kind is TapKind.DOUBLE
        assert taps.tap((0, 0), 200) is None

    def test_long_press_cancels_pending(self):
        taps = TapDispatcher(300)
        taps.tap((10, 10), 1000)

        event = taps.long_press((20, 20), 1100)

        assert event.kind is TapKind.LONG_PRESS
        assert taps.pending is None
        assert taps.tap((20, 20), 1150) is None
