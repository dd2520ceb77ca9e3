"""
Numerical stability supervision of rollout trajectories.

A rollout that produced a NaN or an infinity is meaningless from that sample
on. The supervisor finds the first such sample, dumps the trajectory up to
and including it, asks the controller for its self-report and raises
NumericalInstability. The failure is never recovered here.
"""

from typing import TYPE_CHECKING, Optional, TextIO, Tuple

import numpy as np

from .config import RolloutSettings, config
from .display import display_trajectory
from .errors import NumericalInstability
from .rollout_trajectory import RolloutTrajectory

if TYPE_CHECKING:
    from .controllers import ControllerBase

logger = config.get_logger(__name__)


def find_first_non_finite(
    trajectory: RolloutTrajectory,
    check_inputs: bool = True,
) -> Optional[Tuple[int, str]]:
    """Locate the first sample with a non-finite state or input.

    At a given sample the state is checked before the input.

    Args:
        trajectory: Trajectory to scan
        check_inputs: Whether input vectors are checked as well

    Returns:
        (index, "state" | "input") of the first offending sample, or None
    """
    n = len(trajectory)
    if n == 0:
        return None

    bad_state = ~np.isfinite(trajectory.states.reshape(n, -1)).all(axis=1)
    bad_input = np.zeros(n, dtype=bool)
    if check_inputs and trajectory.inputs is not None:
        bad_input = ~np.isfinite(trajectory.inputs.reshape(n, -1)).all(axis=1)

    offending = np.flatnonzero(bad_state | bad_input)
    if offending.size == 0:
        return None

    index = int(offending[0])
    return index, "state" if bad_state[index] else "input"


def check_numerical_stability(
    trajectory: RolloutTrajectory,
    controller: "ControllerBase",
    settings: RolloutSettings,
    stream: Optional[TextIO] = None,
) -> None:
    """Validate that every state (and input) of a trajectory is finite.

    Does nothing when settings.check_numerical_stability is off. Inputs are
    only checked when settings.reconstruct_input_trajectory is on.

    Args:
        trajectory: Completed or partial trajectory
        controller: Controller whose display() is called on failure
        settings: Rollout settings
        stream: Diagnostic stream for the trajectory dump, defaults to sys.stderr

    Raises:
        NumericalInstability: on the first non-finite sample, after diagnostics
    """
    if not settings.check_numerical_stability:
        return

    check_inputs = settings.reconstruct_input_trajectory
    found = find_first_non_finite(trajectory, check_inputs=check_inputs)
    if found is None:
        return

    index, quantity = found
    failure_time = float(trajectory.time[index])
    logger.error(f"Rollout: {quantity} is not finite at time {failure_time} [sec].")

    truncated = trajectory.truncated(index)
    if not check_inputs:
        truncated.inputs = None
    display_trajectory(
        truncated.time,
        truncated.post_event_indices,
        truncated.states,
        truncated.inputs,
        stream=stream,
    )
    controller.display(stream)

    raise NumericalInstability(
        time=failure_time, index=index, quantity=quantity, trajectory=truncated,
    )
