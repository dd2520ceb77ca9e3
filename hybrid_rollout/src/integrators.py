"""
Time-triggered integration of a switched system over precomputed intervals.

The integrator never crosses an event: every TimeInterval is integrated with
its own scipy OdeSolver, stepped one accepted step at a time, the jump map is
applied between intervals, and the samples of all intervals are appended to
one flat trajectory.
"""

from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import numpy as np
from scipy import integrate

from .config import RolloutSettings, config
from .errors import IntegrationError
from .rollout_time import TimeInterval
from .rollout_trajectory import ModelData, RolloutTrajectory

if TYPE_CHECKING:
    from .controllers import ControllerBase
    from .switched_system import SwitchedSystem

logger = config.get_logger(__name__)


class _NonFiniteDerivative(Exception):
    """Stops the solver, whose step control cannot recover from NaN/Inf."""

    def __init__(self, t: float):
        self.t = float(t)
        super().__init__(f"non-finite derivative at time {t}")


def _solver_class(integrator_type: str):
    """Look up a scipy.integrate OdeSolver subclass by name, e.g. "RK45"."""
    solver_class = getattr(integrate, integrator_type, None)
    if not (isinstance(solver_class, type) and issubclass(solver_class, integrate.OdeSolver)):
        raise ValueError(f"Unknown integrator type: {integrator_type!r}")
    return solver_class


class ScipyIntegrator:
    """Integration routine backed by the scipy.integrate OdeSolver classes.

    Instances are callables with the signature expected by Rollout:
    ``integrate(intervals, initial_state, controller, settings, model_data)``.
    """

    def __init__(self, system: "SwitchedSystem"):
        self.system = system

    def __call__(
        self,
        intervals: Sequence[TimeInterval],
        initial_state: np.ndarray,
        controller: "ControllerBase",
        settings: RolloutSettings,
        model_data: bool = False,
    ) -> RolloutTrajectory:
        """Integrate all intervals in order and assemble the trajectory.

        Args:
            intervals: Sub-intervals produced by build_time_intervals
            initial_state: State at the start of the first interval
            controller: Feedback controller closing the loop
            settings: Tolerances, step budget and integrator type
            model_data: Whether to record ModelData for each sample

        Returns:
            RolloutTrajectory covering all intervals

        Raises:
            IntegrationError: if a solve fails or exceeds its step budget
        """
        x = np.array(initial_state, dtype=np.float64).reshape(-1)
        if len(intervals):
            u0 = np.atleast_1d(controller.compute_input(intervals[0].start, x))
            self.system.check_dimensions(x, u0)
        else:
            self.system.check_dimensions(x)

        times: List[float] = []
        states: List[np.ndarray] = []
        post_event_indices: List[int] = []

        for i, interval in enumerate(intervals):
            if interval.is_degenerate:
                # zero-length mode: one sample, no integration
                seg_t, seg_x, failure = np.array([interval.start]), x.reshape(1, -1), None
            else:
                seg_t, seg_x, failure = self._integrate_interval(
                    interval, x, controller, settings,
                )

            times.extend(float(t) for t in seg_t)
            states.extend(seg_x)

            if failure is not None:
                partial = self._assemble(
                    times, states, post_event_indices, controller, settings, model_data,
                )
                raise IntegrationError(
                    f"Integration of mode {interval.mode} on "
                    f"[{interval.start:.12g}, {interval.end:.12g}] failed: {failure}",
                    trajectory=partial,
                )

            x = seg_x[-1]
            if i < len(intervals) - 1:
                x = self.system.apply_jump_map(interval.end, x)
                post_event_indices.append(len(times))

        trajectory = self._assemble(
            times, states, post_event_indices, controller, settings, model_data,
        )
        logger.debug(
            f"Integrated {len(intervals)} intervals into {len(trajectory)} samples",
        )
        return trajectory

    def _integrate_interval(
        self,
        interval: TimeInterval,
        x0: np.ndarray,
        controller: "ControllerBase",
        settings: RolloutSettings,
    ) -> Tuple[np.ndarray, np.ndarray, Optional[str]]:
        """Integrate one interval; returns (times, states, failure message).

        Only accepted solver steps are recorded, so on failure the returned
        samples end at the last accepted step.
        """

        def closed_loop(t: float, state: np.ndarray) -> np.ndarray:
            dxdt = self.system.evaluate_ode(t, state, controller.compute_input(t, state))
            if not np.all(np.isfinite(dxdt)):
                raise _NonFiniteDerivative(t)
            return dxdt

        solver_options = {
            "rtol": settings.rel_tol_ode,
            "atol": settings.abs_tol_ode,
        }
        if settings.max_step is not None:
            solver_options["max_step"] = settings.max_step

        max_steps = max(1, int(np.ceil(settings.max_num_steps_per_second * interval.duration())))
        solver_class = _solver_class(settings.integrator_type)

        seg_t = [interval.start]
        seg_x = [np.array(x0, dtype=np.float64)]
        failure = None
        try:
            solver = solver_class(closed_loop, interval.start, x0, interval.end, **solver_options)
            while solver.status == "running":
                if len(seg_t) - 1 >= max_steps:
                    failure = f"exceeded the maximum of {max_steps} steps"
                    break
                message = solver.step()
                if solver.status == "failed":
                    failure = message
                    break
                seg_t.append(float(solver.t))
                seg_x.append(np.array(solver.y, dtype=np.float64))
        except _NonFiniteDerivative as stop:
            failure = f"non-finite derivative at time {stop.t:.12g}"

        return np.array(seg_t), np.array(seg_x), failure

    def _assemble(
        self,
        times: List[float],
        states: List[np.ndarray],
        post_event_indices: List[int],
        controller: "ControllerBase",
        settings: RolloutSettings,
        model_data: bool,
    ) -> RolloutTrajectory:
        """Reconstruct inputs and model data for the collected samples."""
        need_inputs = settings.reconstruct_input_trajectory or model_data
        inputs = (
            [controller.compute_input(t, x) for t, x in zip(times, states)]
            if need_inputs
            else None
        )

        model_data_list = None
        if model_data:
            model_data_list = [
                ModelData(
                    time=t,
                    state_dim=len(x),
                    input_dim=len(u),
                    dynamics=self.system.evaluate_ode(t, x, u),
                )
                for t, x, u in zip(times, states, inputs)
            ]

        return RolloutTrajectory.from_samples(
            time=times,
            states=states,
            inputs=inputs if settings.reconstruct_input_trajectory else None,
            post_event_indices=post_event_indices,
            model_data=model_data_list,
        )
