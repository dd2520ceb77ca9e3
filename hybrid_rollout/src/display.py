"""
Human-readable diagnostic dump of a rollout trajectory.

The output is line oriented and meant for a person reading a failure log;
it is not a stable, machine-parsable format.
"""

import sys
from typing import Optional, Sequence, TextIO

import numpy as np

EVENT_MARKER = "+++ event took place +++"


def format_vector(vector: np.ndarray, precision: int = 3) -> str:
    """Format a vector as space separated values with the given significant digits."""
    return " ".join(f"{value:.{precision}g}" for value in np.ravel(vector))


def display_trajectory(
    time: Sequence[float],
    post_event_indices: Sequence[int],
    states: Sequence[np.ndarray],
    inputs: Optional[Sequence[np.ndarray]] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Write a trace of a (possibly truncated) trajectory to a text stream.

    Post-event indices that point past the end of the trajectory are counted
    as events but otherwise ignored.

    Args:
        time: Time stamps
        post_event_indices: Index of the first sample after each event
        states: State vectors, one per time stamp
        inputs: Input vectors, one per time stamp; input lines are omitted if None
        stream: Output stream, defaults to sys.stderr
    """
    if stream is None:
        stream = sys.stderr

    n = len(time)
    lines = [
        f"Trajectory length:      {n}",
        f"Total number of events: {len(post_event_indices)}",
    ]
    if len(post_event_indices) > 0:
        event_times = "".join(f"{time[i]:g}, " for i in post_event_indices if i < n)
        lines.append(f"Event times: {event_times}")
    lines.append("")

    num_modes = len(post_event_indices) + 1
    k = 0
    for mode in range(num_modes):
        while k < n:
            lines.append(f"Index: {k}")
            lines.append(f"Time:  {time[k]:.12g}")
            lines.append(f"State: {format_vector(states[k])}")
            if inputs is not None:
                lines.append(f"Input: {format_vector(inputs[k])}")
            k += 1

            if mode < len(post_event_indices) and k == post_event_indices[mode]:
                lines.append(EVENT_MARKER)
                break

    stream.write("\n".join(lines) + "\n")
    stream.flush()
