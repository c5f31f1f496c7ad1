from fullsend.timing import FrameClock, InputDebouncer


def test_first_frame_is_admitted_with_zero_delta():
    clock = FrameClock()
    assert clock.admit(5000) == 0.0


def test_regular_frames_pass_through():
    clock = FrameClock()
    clock.admit(0)
    assert clock.admit(16) == 16
    assert clock.admit(49) == 33
    assert clock.admit(99) == 50


def test_long_pause_is_skipped_then_recovers():
    clock = FrameClock()
    clock.admit(0)
    assert clock.admit(51) is None
    assert clock.admit(10051) is None
    assert clock.admit(10067) == 16


def test_delta_is_clamped_before_skip_check():
    clock = FrameClock(max_delta_ms=100, skip_delta_ms=150)
    clock.admit(0)
    assert clock.admit(400) == 100


def test_clock_going_backwards_is_a_zero_step():
    clock = FrameClock()
    clock.admit(100)
    assert clock.admit(90) == 0.0


def test_debouncer_window():
    debouncer = InputDebouncer()
    assert debouncer.accept(1000)
    assert not debouncer.accept(1100)
    assert not debouncer.accept(1149)
    assert debouncer.accept(1150)
    assert not debouncer.accept(1200)
