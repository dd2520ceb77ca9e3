"""
Plotting interface for rollout trajectories.

Modes are drawn as separate line pieces so that jumps do not appear as
continuous flow, and event times are marked with dashed vertical lines.
"""

import warnings
from typing import Any, Dict, List, Optional, Tuple

import matplotlib.pyplot as plt

from .config import config
from .rollout_trajectory import RolloutTrajectory


class RolloutPlotter:
    """Plotting interface for rollout trajectories."""

    def __init__(self, style_config: Optional[Dict[str, Any]] = None):
        """Initialize with custom style configuration.

        Args:
            style_config: Custom style overrides
        """
        self.config = self._default_config()
        if style_config:
            self.config.update(style_config)

    def _default_config(self) -> Dict[str, Any]:
        """Default style configuration taken from the global config."""
        viz = config.visualization
        return {
            "figure_size": viz.default_figsize,
            "dpi": viz.default_dpi,
            "trajectory_alpha": viz.trajectory_alpha,
            "trajectory_width": viz.trajectory_linewidth,
            "trajectory_colors": list(viz.trajectory_colors),
            "grid_alpha": viz.grid_alpha,
            "font_size": 10,
            "label_size": 10,
        }

    def _new_axes(self) -> plt.Axes:
        _, ax = plt.subplots(figsize=self.config["figure_size"], dpi=self.config["dpi"])
        return ax

    def _mark_events(self, trajectory: RolloutTrajectory, ax: plt.Axes):
        for event_time in trajectory.event_times:
            ax.axvline(x=event_time, **config.get_event_style())

    def plot_time_series(
        self,
        trajectory: RolloutTrajectory,
        state_indices: Optional[List[int]] = None,
        ax: Optional[plt.Axes] = None,
        show_events: bool = True,
    ) -> plt.Axes:
        """Plot state components vs time.

        Args:
            trajectory: RolloutTrajectory to plot
            state_indices: Which state components to plot (default: up to 4)
            ax: Matplotlib axes to plot on
            show_events: Whether to mark event times

        Returns:
            Matplotlib axes
        """
        if ax is None:
            ax = self._new_axes()

        if not len(trajectory):
            warnings.warn("Empty trajectory - nothing to plot")
            return ax

        if state_indices is None:
            state_indices = list(range(min(trajectory.states.shape[1], 4)))

        colors = self.config["trajectory_colors"]
        for i, state_idx in enumerate(state_indices):
            color = colors[i % len(colors)]
            for n, segment in enumerate(trajectory.segments()):
                ax.plot(
                    segment.time_values,
                    segment.state_values[:, state_idx],
                    color=color,
                    alpha=self.config["trajectory_alpha"],
                    linewidth=self.config["trajectory_width"],
                    label=f"x_{state_idx + 1}" if n == 0 else None,
                )

        if show_events:
            self._mark_events(trajectory, ax)

        ax.set_xlabel("Time", fontsize=self.config["label_size"])
        ax.set_ylabel("State", fontsize=self.config["label_size"])
        ax.grid(True, alpha=self.config["grid_alpha"])
        ax.legend(fontsize=self.config["font_size"])
        return ax

    def plot_inputs(
        self,
        trajectory: RolloutTrajectory,
        ax: Optional[plt.Axes] = None,
        show_events: bool = True,
    ) -> plt.Axes:
        """Plot reconstructed input components vs time."""
        if ax is None:
            ax = self._new_axes()

        if trajectory.inputs is None or not len(trajectory):
            warnings.warn("Trajectory has no input samples - nothing to plot")
            return ax

        colors = self.config["trajectory_colors"]
        for j in range(trajectory.inputs.shape[1]):
            color = colors[j % len(colors)]
            for n, segment in enumerate(trajectory.segments()):
                ax.step(
                    segment.time_values,
                    segment.input_values[:, j],
                    where="post",
                    color=color,
                    alpha=self.config["trajectory_alpha"],
                    linewidth=self.config["trajectory_width"],
                    label=f"u_{j + 1}" if n == 0 else None,
                )

        if show_events:
            self._mark_events(trajectory, ax)

        ax.set_xlabel("Time", fontsize=self.config["label_size"])
        ax.set_ylabel("Input", fontsize=self.config["label_size"])
        ax.grid(True, alpha=self.config["grid_alpha"])
        ax.legend(fontsize=self.config["font_size"])
        return ax

    def plot_phase_portrait(
        self,
        trajectories: List[RolloutTrajectory],
        ax: Optional[plt.Axes] = None,
        plot_dims: Tuple[int, int] = (0, 1),
    ) -> plt.Axes:
        """Plot trajectories in a two dimensional projection of state space."""
        if ax is None:
            ax = self._new_axes()

        x_dim, y_dim = plot_dims
        colors = self.config["trajectory_colors"]
        for i, trajectory in enumerate(trajectories):
            if not len(trajectory):
                continue
            if trajectory.states.shape[1] <= max(x_dim, y_dim):
                warnings.warn(f"Trajectory {i} has dimension < {max(plot_dims) + 1}, cannot plot")
                continue
            color = colors[i % len(colors)]
            for n, segment in enumerate(trajectory.segments()):
                ax.plot(
                    segment.state_values[:, x_dim],
                    segment.state_values[:, y_dim],
                    color=color,
                    alpha=self.config["trajectory_alpha"],
                    linewidth=self.config["trajectory_width"],
                    label=f"Trajectory {i + 1}" if n == 0 else None,
                )

        ax.set_xlabel(f"x_{x_dim + 1}", fontsize=self.config["label_size"])
        ax.set_ylabel(f"x_{y_dim + 1}", fontsize=self.config["label_size"])
        ax.grid(True, alpha=self.config["grid_alpha"])
        if len(trajectories) > 1:
            ax.legend(fontsize=self.config["font_size"])
        return ax

    def save_figure(self, fig: plt.Figure, filename: str, **kwargs):
        """Save figure with default settings.

        Args:
            fig: Figure to save
            filename: Output filename
            **kwargs: Additional arguments for savefig
        """
        save_kwargs = {
            "dpi": self.config["dpi"],
            "bbox_inches": "tight",
            "facecolor": "white",
        }
        save_kwargs.update(kwargs)

        fig.savefig(filename, **save_kwargs)

    def update_config(self, **kwargs):
        """Update configuration parameters."""
        self.config.update(kwargs)
