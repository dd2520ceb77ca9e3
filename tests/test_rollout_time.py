#!/usr/bin/env python3
"""
Tests for splitting a rollout horizon into per-mode sub-intervals.
"""
import numpy as np
import pytest

from hybrid_rollout import InvalidHorizon, TimeInterval, build_time_intervals, weak_epsilon


def nominal_boundaries(intervals):
    """Flatten intervals into [b_0, b_1, ..., b_k+1]."""
    return [intervals[0].nominal_start] + [interval.end for interval in intervals]


def test_weak_epsilon_scales_with_machine_precision():
    eps = weak_epsilon()
    assert eps > np.finfo(np.float64).eps
    assert eps < 1e-9


def test_duplicate_events_produce_degenerate_interval():
    """initTime=0, finalTime=10, events {3, 4, 4}."""
    eps = weak_epsilon()
    intervals = build_time_intervals(0.0, 10.0, [3.0, 4.0, 4.0])

    assert [interval.nominal_bounds() for interval in intervals] == [
        (0.0, 3.0),
        (3.0, 4.0),
        (4.0, 4.0),
        (4.0, 10.0),
    ]
    assert [interval.mode for interval in intervals] == [0, 1, 2, 3]

    assert intervals[0].start == 0.0 + eps
    assert intervals[1].start == 3.0 + eps
    assert intervals[3].start == 4.0 + eps

    degenerate = intervals[2]
    assert degenerate.is_degenerate
    assert degenerate.start == degenerate.end == 4.0
    assert degenerate.duration() == 0.0
    assert not any(intervals[i].is_degenerate for i in (0, 1, 3))


def test_no_events_gives_single_interval():
    intervals = build_time_intervals(1.0, 2.0, [])
    assert len(intervals) == 1
    assert intervals[0].nominal_bounds() == (1.0, 2.0)
    assert intervals[0].start == 1.0 + weak_epsilon()


def test_event_at_init_time_is_excluded():
    intervals = build_time_intervals(0.0, 10.0, [0.0, 0.0, 5.0])
    assert nominal_boundaries(intervals) == [0.0, 5.0, 10.0]


def test_event_at_final_time_is_included():
    intervals = build_time_intervals(0.0, 10.0, [10.0])
    assert nominal_boundaries(intervals) == [0.0, 10.0, 10.0]
    assert intervals[-1].is_degenerate
    assert intervals[-1].start == 10.0


def test_events_outside_horizon_are_dropped():
    intervals = build_time_intervals(2.0, 10.0, [1.0, 3.0, 12.0])
    assert nominal_boundaries(intervals) == [2.0, 3.0, 10.0]


def test_zero_length_horizon():
    intervals = build_time_intervals(3.0, 3.0, [3.0])
    assert len(intervals) == 1
    assert intervals[0].is_degenerate
    assert intervals[0].start == 3.0


def test_gap_below_tolerance_collapses():
    """Two events closer than the weak epsilon collapse the interval between them."""
    second = 3.0 + 1e-14
    intervals = build_time_intervals(0.0, 10.0, [3.0, second])

    assert intervals[1].nominal_bounds() == (3.0, second)
    assert intervals[1].start == second
    assert intervals[1].is_degenerate


def test_invalid_horizon_raises():
    with pytest.raises(InvalidHorizon) as excinfo:
        build_time_intervals(5.0, 1.0, [2.0, 3.0])

    assert excinfo.value.init_time == 5.0
    assert excinfo.value.final_time == 1.0
    assert isinstance(excinfo.value, ValueError)


def test_identical_inputs_give_identical_outputs():
    events = [0.5, 1.5, 1.5, 7.25]
    first = build_time_intervals(0.0, 8.0, events)
    second = build_time_intervals(0.0, 8.0, events)
    assert first == second
    assert events == [0.5, 1.5, 1.5, 7.25]


def test_coverage_and_nudge_on_random_events():
    """Nominal boundaries reproduce the filtered events, starts follow the nudge rule."""
    rng = np.random.default_rng(0)
    eps = weak_epsilon()

    for _ in range(50):
        init_time, final_time = sorted(rng.uniform(0.0, 10.0, size=2))
        events = np.sort(np.round(rng.uniform(-2.0, 12.0, size=rng.integers(0, 8)), 1))
        if len(events) > 2:
            events = np.sort(np.append(events, events[1]))

        intervals = build_time_intervals(init_time, final_time, events)

        kept = [float(e) for e in events if init_time < e <= final_time]
        assert nominal_boundaries(intervals) == [float(init_time)] + kept + [float(final_time)]
        assert len(intervals) == len(kept) + 1

        for previous, current in zip(intervals[:-1], intervals[1:]):
            assert previous.end == current.nominal_start

        for interval in intervals:
            if interval.end - interval.nominal_start > eps:
                assert interval.start == interval.nominal_start + eps
                assert interval.start > interval.nominal_start
            else:
                assert interval.start == interval.end


def test_time_interval_validation():
    with pytest.raises(ValueError):
        TimeInterval(start=2.0, end=1.0, nominal_start=1.0)
    with pytest.raises(ValueError):
        TimeInterval(start=1.0, end=2.0, nominal_start=1.0, mode=-1)


def test_time_interval_notation():
    intervals = build_time_intervals(0.0, 2.0, [1.0])
    assert str(intervals[0]) == "[0, 1] × {0}"
    assert TimeInterval.union_notation(intervals) == "[0, 1] × {0} ∪ [1, 2] × {1}"
    assert TimeInterval.union_notation([]) == "∅"
    assert intervals[1].contains(1.0)
    assert not intervals[1].contains(0.5)
