"""
Rollout trajectory representation.

A rollout trajectory is a flat, time-ordered record of samples across all
modes. The post-event indices mark the first sample of each mode after the
first one and let the flat arrays be cut back into per-mode segments.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

import numpy as np


@dataclass
class ModelData:
    """Auxiliary per-sample model data recorded alongside a rollout.

    Attributes:
        time: Time stamp of the sample
        state_dim: Dimension of the state at the sample
        input_dim: Dimension of the input at the sample
        dynamics: Flow map value dx/dt at the sample
    """

    time: float
    state_dim: int
    input_dim: int
    dynamics: np.ndarray


@dataclass
class TrajectorySegment:
    """A read-only view of the samples belonging to one mode.

    Attributes:
        mode: Index of the mode the samples belong to
        time_values: Time stamps, shape (n_points,)
        state_values: States, shape (n_points, state_dim)
        input_values: Inputs, shape (n_points, input_dim), or None
    """

    mode: int
    time_values: np.ndarray
    state_values: np.ndarray
    input_values: Optional[np.ndarray] = None

    @property
    def t_start(self) -> float:
        return float(self.time_values[0])

    @property
    def t_end(self) -> float:
        return float(self.time_values[-1])

    def duration(self) -> float:
        """Get the duration of this segment."""
        return self.t_end - self.t_start

    def __len__(self) -> int:
        return len(self.time_values)


@dataclass
class RolloutTrajectory:
    """Time, state and input samples of one rollout.

    Attributes:
        time: Time stamps, shape (N,)
        states: State vectors, shape (N, state_dim)
        inputs: Input vectors, shape (N, input_dim), or None when inputs are
            not reconstructed
        post_event_indices: Index of the first sample after each event
        model_data: Optional per-sample ModelData records
    """

    time: np.ndarray = field(default_factory=lambda: np.zeros(0))
    states: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
    inputs: Optional[np.ndarray] = None
    post_event_indices: List[int] = field(default_factory=list)
    model_data: Optional[List[ModelData]] = None

    def __post_init__(self):
        """Normalize array shapes and validate trajectory consistency."""
        self.time = np.asarray(self.time, dtype=np.float64).reshape(-1)
        self.states = _as_samples(self.states, len(self.time))
        if self.inputs is not None:
            self.inputs = _as_samples(self.inputs, len(self.time))
        self.post_event_indices = [int(i) for i in self.post_event_indices]
        self._validate_consistency()

    def _validate_consistency(self):
        n = len(self.time)
        if len(self.states) != n:
            raise ValueError(f"Expected {n} states, got {len(self.states)}")
        if self.inputs is not None and len(self.inputs) != n:
            raise ValueError(f"Expected {n} inputs, got {len(self.inputs)}")
        if self.model_data is not None and len(self.model_data) != n:
            raise ValueError(
                f"Expected {n} model data entries, got {len(self.model_data)}",
            )
        if any(b < a for a, b in zip(self.post_event_indices, self.post_event_indices[1:])):
            raise ValueError("Post-event indices must be non-decreasing")

    @classmethod
    def from_samples(
        cls,
        time: List[float],
        states: List[np.ndarray],
        inputs: Optional[List[np.ndarray]] = None,
        post_event_indices: Optional[List[int]] = None,
        model_data: Optional[List[ModelData]] = None,
    ) -> "RolloutTrajectory":
        """Assemble a trajectory from per-sample lists."""
        state_array = np.array(states, dtype=np.float64) if states else np.zeros((0, 0))
        input_array = None
        if inputs is not None:
            input_array = np.array(inputs, dtype=np.float64) if inputs else np.zeros((0, 0))
        return cls(
            time=np.array(time, dtype=np.float64),
            states=state_array,
            inputs=input_array,
            post_event_indices=list(post_event_indices or []),
            model_data=model_data,
        )

    def __len__(self) -> int:
        """Number of samples in trajectory."""
        return len(self.time)

    @property
    def num_events(self) -> int:
        """Number of events recorded during the rollout."""
        return len(self.post_event_indices)

    @property
    def event_times(self) -> np.ndarray:
        """Time stamps of the post-event samples that exist in this trajectory."""
        valid = [i for i in self.post_event_indices if i < len(self.time)]
        return self.time[valid]

    @property
    def final_state(self) -> Optional[np.ndarray]:
        """Final state of trajectory."""
        return self.states[-1].copy() if len(self) else None

    @property
    def final_time(self) -> Optional[float]:
        return float(self.time[-1]) if len(self) else None

    def truncated(self, index: int) -> "RolloutTrajectory":
        """Copy of samples 0..index inclusive.

        The post-event indices are kept whole; indices past the new length
        simply refer to samples that no longer exist.
        """
        if not 0 <= index < len(self):
            raise IndexError(f"Index {index} outside trajectory of length {len(self)}")
        stop = index + 1
        return RolloutTrajectory(
            time=self.time[:stop].copy(),
            states=self.states[:stop].copy(),
            inputs=None if self.inputs is None else self.inputs[:stop].copy(),
            post_event_indices=list(self.post_event_indices),
            model_data=None if self.model_data is None else list(self.model_data[:stop]),
        )

    def mode_slices(self) -> List[slice]:
        """Slices of the flat arrays covering each mode, in time order."""
        n = len(self)
        bounds = [0] + [min(i, n) for i in self.post_event_indices] + [n]
        return [slice(a, b) for a, b in zip(bounds[:-1], bounds[1:])]

    def segments(self) -> Iterator[TrajectorySegment]:
        """Iterate over the non-empty per-mode segments."""
        for mode, sl in enumerate(self.mode_slices()):
            if sl.stop <= sl.start:
                continue
            yield TrajectorySegment(
                mode=mode,
                time_values=self.time[sl],
                state_values=self.states[sl],
                input_values=None if self.inputs is None else self.inputs[sl],
            )

    def __str__(self) -> str:
        if not len(self):
            return "Empty RolloutTrajectory"
        return (
            f"RolloutTrajectory with {len(self)} samples, {self.num_events} events, "
            f"time [{self.time[0]:.6g}, {self.time[-1]:.6g}]"
        )


def _as_samples(values, n: int) -> np.ndarray:
    """Coerce per-sample vectors to a 2D (n, dim) array."""
    array = np.asarray(values, dtype=np.float64)
    if array.size == 0 and n == 0:
        return array.reshape(0, array.shape[-1] if array.ndim == 2 else 0)
    if array.ndim == 1:
        array = array.reshape(n, -1) if n else array.reshape(0, 0)
    return array
