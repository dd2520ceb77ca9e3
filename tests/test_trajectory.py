#!/usr/bin/env python3
"""
Tests for the RolloutTrajectory container.
"""
import numpy as np
import pytest

from hybrid_rollout import ModelData, RolloutTrajectory


def make_trajectory():
    return RolloutTrajectory.from_samples(
        time=[0.0, 1.0, 1.0, 2.0, 3.0],
        states=[np.array([0.0, 1.0])] * 5,
        inputs=[np.array([1.0])] * 5,
        post_event_indices=[2, 3],
    )


def test_from_samples_shapes():
    trajectory = make_trajectory()
    assert len(trajectory) == 5
    assert trajectory.states.shape == (5, 2)
    assert trajectory.inputs.shape == (5, 1)
    assert trajectory.num_events == 2
    assert trajectory.final_time == 3.0
    assert np.array_equal(trajectory.final_state, [0.0, 1.0])


def test_scalar_states_become_columns():
    trajectory = RolloutTrajectory(time=[0.0, 1.0], states=[2.0, 3.0])
    assert trajectory.states.shape == (2, 1)
    assert trajectory.inputs is None


def test_length_mismatch_is_rejected():
    with pytest.raises(ValueError):
        RolloutTrajectory(time=[0.0, 1.0, 2.0], states=np.zeros((2, 2)))
    with pytest.raises(ValueError):
        RolloutTrajectory(time=[0.0, 1.0], states=np.zeros((2, 2)), inputs=np.zeros((3, 1)))
    with pytest.raises(ValueError):
        RolloutTrajectory(
            time=[0.0],
            states=np.zeros((1, 1)),
            model_data=[],
        )


def test_decreasing_event_indices_are_rejected():
    with pytest.raises(ValueError):
        RolloutTrajectory(time=[0.0, 1.0, 2.0], states=np.zeros((3, 1)), post_event_indices=[2, 1])


def test_mode_slices_and_segments():
    trajectory = make_trajectory()
    assert trajectory.mode_slices() == [slice(0, 2), slice(2, 3), slice(3, 5)]

    segments = list(trajectory.segments())
    assert [segment.mode for segment in segments] == [0, 1, 2]
    assert [len(segment) for segment in segments] == [2, 1, 2]
    assert segments[1].duration() == 0.0
    assert segments[2].t_start == 2.0
    assert segments[2].t_end == 3.0
    assert segments[0].input_values.shape == (2, 1)


def test_event_times():
    trajectory = make_trajectory()
    assert np.array_equal(trajectory.event_times, [1.0, 2.0])


def test_truncated_keeps_event_indices():
    trajectory = make_trajectory()
    truncated = trajectory.truncated(1)

    assert len(truncated) == 2
    assert truncated.post_event_indices == [2, 3]
    assert truncated.event_times.size == 0
    assert truncated.mode_slices() == [slice(0, 2), slice(2, 2), slice(2, 2)]
    assert len(list(truncated.segments())) == 1

    truncated.states[0, 0] = 42.0
    assert trajectory.states[0, 0] == 0.0


def test_truncated_index_out_of_range():
    with pytest.raises(IndexError):
        make_trajectory().truncated(5)


def test_truncated_model_data():
    model_data = [ModelData(time=t, state_dim=1, input_dim=1, dynamics=np.zeros(1)) for t in (0.0, 1.0)]
    trajectory = RolloutTrajectory(time=[0.0, 1.0], states=np.zeros((2, 1)), model_data=model_data)
    assert len(trajectory.truncated(0).model_data) == 1


def test_string_representation():
    assert str(RolloutTrajectory()) == "Empty RolloutTrajectory"
    assert "5 samples, 2 events" in str(make_trajectory())
