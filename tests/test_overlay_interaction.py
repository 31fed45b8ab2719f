from __future__ import annotations

from overlay_interaction import HIDE_DELAY_MS, IGNORE_SETTLE_MS, OverlayInteractionModel, Rect
from tests.conftest import FakeClock, FakeScheduler


class FakeWindow:
    def __init__(self) -> None:
        self.ignore: list[bool] = []
        self.hidden = 0
        self.fail = False

    def hide_window(self) -> None:
        self.hidden += 1

    def set_ignore_cursor_events(self, ignore: bool) -> None:
        if self.fail:
            raise RuntimeError("window gone")
        self.ignore.append(ignore)


def _model(window: FakeWindow, scheduler: FakeScheduler, clock: FakeClock) -> OverlayInteractionModel:
    return OverlayInteractionModel(
        window=window,
        palette_rect=Rect(0, 0, 270, 328),
        popover_rect=Rect(280, 0, 270, 328),
        scheduler=scheduler,
        clock=clock,
    )


def test_rect_contains_is_inclusive() -> None:
    rect = Rect(10, 10, 20, 20)

    assert rect.contains(10, 10) is True
    assert rect.contains(30, 30) is True
    assert rect.contains(31, 30) is False


def test_pointer_over_palette_catches_input(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)

    model.on_pointer_move(100, 100)

    assert model.ignore_cursor_events is False
    assert window.ignore == [False]


def test_pointer_outside_passes_input_through(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)

    model.on_pointer_move(100, 100)
    model.on_pointer_move(400, 100)
    model.on_pointer_move(420, 120)

    assert window.ignore == [False, True]


def test_popover_region_only_counts_while_open(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)

    model.on_pointer_move(400, 100)
    assert model.ignore_cursor_events is True

    model.set_popover_open(True)
    assert model.ignore_cursor_events is False

    model.set_popover_open(False)
    assert model.ignore_cursor_events is True


def test_gap_between_regions_passes_through(scheduler: FakeScheduler, clock: FakeClock) -> None:
    model = _model(FakeWindow(), scheduler, clock)
    model.set_popover_open(True)

    model.on_pointer_move(275, 50)

    assert model.ignore_cursor_events is True


def test_blur_right_after_click_through_is_ignored(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)
    model.on_pointer_move(400, 100)

    clock.ms += IGNORE_SETTLE_MS - 1
    assert model.on_blur() is False
    assert scheduler.pending() == []


def test_blur_after_settle_schedules_hide(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)
    model.on_pointer_move(400, 100)

    clock.ms += IGNORE_SETTLE_MS
    assert model.on_blur() is True
    assert model.hide_pending is True

    scheduler.advance(HIDE_DELAY_MS / 1000.0 - 0.01)
    assert window.hidden == 0
    scheduler.advance(0.01)
    assert window.hidden == 1
    assert model.hide_pending is False


def test_blur_while_catching_input_is_never_ignored(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)
    model.on_pointer_move(100, 100)

    assert model.on_blur() is True


def test_focus_cancels_pending_hide(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)

    model.on_blur()
    model.on_focus()
    scheduler.advance(1.0)

    assert window.hidden == 0
    assert model.hide_pending is False


def test_focus_moving_within_app_does_not_hide(scheduler: FakeScheduler, clock: FakeClock) -> None:
    model = _model(FakeWindow(), scheduler, clock)

    assert model.on_blur(focus_within_app=True) is False
    assert scheduler.pending() == []


def test_repeated_blur_keeps_single_timer(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)

    model.on_blur()
    model.on_blur()
    scheduler.advance(1.0)

    assert len(scheduler.pending()) == 0
    assert window.hidden == 1


def test_window_errors_are_contained(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    window.fail = True
    model = _model(window, scheduler, clock)

    model.on_pointer_move(400, 100)

    assert model.ignore_cursor_events is True


def test_close_restores_input_and_cancels_hide(scheduler: FakeScheduler, clock: FakeClock) -> None:
    window = FakeWindow()
    model = _model(window, scheduler, clock)
    model.on_pointer_move(400, 100)
    model.on_blur()

    model.close()
    scheduler.advance(1.0)

    assert window.ignore[-1] is False
    assert window.hidden == 0
