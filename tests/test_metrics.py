from __future__ import annotations

import pytest

from clock import SessionClock
from metrics import compute_accuracy, compute_wpm, mark_errors


def test_mark_errors_collects_mismatches():
    assert mark_errors("cat dog", "cxt dgg", set()) == {1, 5}


def test_mark_errors_keeps_existing_positions():
    errors = {4}
    mark_errors("cat", "cat", errors)
    assert errors == {4}


def test_mark_errors_ignores_typed_past_ghost_text():
    assert mark_errors("ab", "abc", set()) == set()


def test_accuracy_with_nothing_typed_is_perfect():
    assert compute_accuracy(0, 0) == 100.0


@pytest.mark.parametrize(
    "typed_len, errors, expected",
    [(7, 0, 100.0), (7, 1, 100.0 * 6 / 7), (4, 4, 0.0), (2, 5, 0.0)],
)
def test_accuracy_bounds(typed_len, errors, expected):
    assert compute_accuracy(typed_len, errors) == pytest.approx(expected)


def test_wpm_is_none_below_threshold():
    assert compute_wpm(50, 0.05) is None


def test_wpm_floors_result():
    # 11 chars in 2s: 2.2 words * 30 = 66
    assert compute_wpm(11, 2.0) == 66
    # 12 chars in 7s: 2.4 words * 60/7 = 20.57...
    assert compute_wpm(12, 7.0) == 20


def test_wpm_with_nothing_typed():
    assert compute_wpm(0, 5.0) == 0


def test_clock_counts_down_only_when_started():
    clock = SessionClock(3)
    assert clock.advance(1.0) is False
    assert clock.remaining_s == 3

    clock.start()
    assert clock.advance(1.0) is False
    assert clock.elapsed_s == 1
    assert clock.view() == "2s"


def test_clock_times_out_exactly_once():
    clock = SessionClock(1)
    clock.start()

    assert clock.advance(0.5) is False
    assert clock.advance(0.5) is True
    assert clock.timed_out
    assert clock.advance(0.5) is False
    assert clock.remaining_s == 0


def test_clock_fractional_ticks_reach_zero():
    clock = SessionClock(1)
    clock.start()
    expired = [clock.advance(0.1) for _ in range(10)]

    assert expired[-1] is True
    assert expired.count(True) == 1


def test_clock_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        SessionClock(0)


def test_clock_view_with_minutes():
    clock = SessionClock(90)
    assert clock.view() == "1m30s"
