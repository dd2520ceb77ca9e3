"""
Time segmentation of a rollout horizon into per-mode sub-intervals.

A switched system changes its dynamics at the event times, so the horizon
[init_time, final_time] is split at every event before any integration takes
place. Each sub-interval stores a resume start time that lies a weak epsilon
past the event that opened it, so the integrator never sees that event as
active again.
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .errors import InvalidHorizon


def weak_epsilon() -> float:
    """Tolerance used to step past an event boundary.

    Scaled from the float64 machine epsilon, not a fixed constant.
    """
    return 1e3 * float(np.finfo(np.float64).eps)


@dataclass(frozen=True)
class TimeInterval:
    """One continuous-dynamics segment of a rollout.

    Attributes:
        start: Time the integrator resumes from (nudged past nominal_start)
        end: Nominal end of the segment
        nominal_start: Un-nudged segment boundary
        mode: Index of the segment within the rollout
    """

    start: float
    end: float
    nominal_start: float
    mode: int = 0

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError("Start time must be <= end time")
        if self.nominal_start > self.end:
            raise ValueError("Nominal start time must be <= end time")
        if self.mode < 0:
            raise ValueError("Mode index must be non-negative")

    @property
    def is_degenerate(self) -> bool:
        """True when the interval was collapsed to zero length."""
        return self.start == self.end

    def duration(self) -> float:
        """Get the integrated duration of this interval."""
        return self.end - self.start

    def nominal_bounds(self) -> tuple:
        """Get (nominal_start, end)."""
        return (self.nominal_start, self.end)

    def contains(self, t: float) -> bool:
        """Check if t is within the nominal interval."""
        return self.nominal_start <= t <= self.end

    def to_notation(self) -> str:
        """Returns interval in mathematical notation."""
        return f"[{self.nominal_start:.6g}, {self.end:.6g}] × {{{self.mode}}}"

    def __str__(self) -> str:
        return self.to_notation()

    @staticmethod
    def union_notation(intervals: List["TimeInterval"]) -> str:
        """Create union notation for a list of intervals."""
        if not intervals:
            return "∅"
        return " ∪ ".join(interval.to_notation() for interval in intervals)


def build_time_intervals(
    init_time: float,
    final_time: float,
    event_times: Sequence[float],
) -> List[TimeInterval]:
    """Partition [init_time, final_time] at the given event times.

    Only events e with init_time < e <= final_time split the horizon. An
    event at init_time does not open a new segment, while an event at
    final_time produces a trailing degenerate segment.

    Args:
        init_time: Start of the horizon
        final_time: End of the horizon
        event_times: Ascending event times, duplicates allowed

    Returns:
        k + 1 intervals for k in-range events, in time order

    Raises:
        InvalidHorizon: if init_time > final_time
    """
    if init_time > final_time:
        raise InvalidHorizon(init_time, final_time)

    events = np.asarray(event_times, dtype=np.float64).reshape(-1)
    first = int(np.searchsorted(events, init_time, side="right"))
    last = int(np.searchsorted(events, final_time, side="right"))

    boundaries = [float(init_time)]
    boundaries.extend(float(e) for e in events[first:last])
    boundaries.append(float(final_time))

    eps = weak_epsilon()
    intervals = []
    for mode, (begin, end) in enumerate(zip(boundaries[:-1], boundaries[1:])):
        # resume just past the event, or collapse to a no-op segment
        start = begin + eps if end - begin > eps else end
        intervals.append(
            TimeInterval(start=start, end=end, nominal_start=begin, mode=mode),
        )

    return intervals
