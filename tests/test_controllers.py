#!/usr/bin/env python3
"""
Tests for the reference feedback controllers.
"""
import io

import numpy as np
import pytest

from hybrid_rollout import FunctionController, LinearController


def test_feedforward_is_interpolated_and_clamped():
    controller = LinearController(
        time_stamps=[0.0, 10.0],
        feedforward=[[0.0], [10.0]],
        gains=np.zeros((2, 1, 2)),
    )
    x = np.array([3.0, -1.0])

    assert np.allclose(controller.compute_input(5.0, x), [5.0])
    assert np.allclose(controller.compute_input(-1.0, x), [0.0])
    assert np.allclose(controller.compute_input(20.0, x), [10.0])
    assert controller.state_dim == 2
    assert controller.input_dim == 1


def test_feedback_gain():
    gains = np.array([[[1.0, 2.0]], [[1.0, 2.0]]])
    controller = LinearController([0.0, 1.0], [[0.5], [0.5]], gains)

    u = controller(0.3, np.array([1.0, 1.0]))
    assert np.allclose(u, [3.5])


def test_single_time_stamp():
    controller = LinearController([0.0], [[2.0]], [[[0.0]]])
    assert np.allclose(controller.compute_input(100.0, np.array([1.0])), [2.0])


def test_invalid_stock_is_rejected():
    with pytest.raises(ValueError):
        LinearController([], [], np.zeros((0, 1, 1)))
    with pytest.raises(ValueError):
        LinearController([1.0, 0.0], [[0.0], [0.0]], np.zeros((2, 1, 1)))
    with pytest.raises(ValueError):
        LinearController([0.0, 1.0], [[0.0], [0.0]], np.zeros((2, 1)))
    with pytest.raises(ValueError):
        LinearController([0.0, 1.0], [[0.0], [0.0]], np.zeros((2, 2, 1)))


def test_linear_controller_display():
    controller = LinearController([0.0, 1.0], [[0.5], [1.5]], np.zeros((2, 1, 2)))
    stream = io.StringIO()
    controller.display(stream)
    output = stream.getvalue()

    assert output.startswith("LinearController (state_dim=2, input_dim=1, 2 time stamps)")
    assert "uff: 1.5" in output


def test_function_controller():
    controller = FunctionController(lambda t, x: t * x[0], name="scaled")
    u = controller.compute_input(2.0, np.array([3.0]))

    assert u.shape == (1,)
    assert u[0] == 6.0
    assert str(controller) == "FunctionController (scaled)"


def test_base_display_writes_to_stderr(capsys):
    FunctionController(lambda t, x: 0.0).display()
    assert "FunctionController (function)" in capsys.readouterr().err
