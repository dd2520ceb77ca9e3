#!/usr/bin/env python3
"""
Scheduled Thermostat Rollout Demo

Rolls out the scheduled thermostat over a horizon with a switching schedule,
including two simultaneous events, and plots the result. A second rollout
with a diverging controller shows the stability supervisor truncating the
trajectory and dumping diagnostics to stderr.

This demo showcases:
- Splitting the horizon at event times, with a degenerate interval
- Time-triggered integration with scipy
- Detection of non-finite inputs with a diagnostic dump
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from hybrid_rollout import (
    FunctionController,
    NumericalInstability,
    Rollout,
    RolloutPlotter,
    build_time_intervals,
)
from hybrid_rollout.examples.thermostat import ScheduledThermostat

# ========== CONFIGURATION PARAMETERS ==========
INIT_TIME = 0.0
FINAL_TIME = 10.0
EVENT_TIMES = [2.0, 4.0, 4.0, 7.5]     # Heater toggles; the duplicate cancels out
INITIAL_STATE = np.array([65.0, 1.0])  # [temperature, heater on]
# ===============================================


def run_thermostat_demo():
    thermostat = ScheduledThermostat()
    rollout = Rollout.time_triggered(thermostat.system)
    controller = thermostat.create_controller(INIT_TIME, FINAL_TIME)

    intervals = build_time_intervals(INIT_TIME, FINAL_TIME, EVENT_TIMES)
    print(f"Sub-intervals: {len(intervals)}")
    for interval in intervals:
        flag = " (degenerate)" if interval.is_degenerate else ""
        print(f"  {interval}  resume at {interval.start:.15g}{flag}")

    trajectory = rollout.run(INIT_TIME, INITIAL_STATE, FINAL_TIME, controller, EVENT_TIMES)
    print(f"\n{trajectory}")
    print(f"Final temperature: {trajectory.final_state[0]:.3f}")

    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    plotter = RolloutPlotter()
    fig, (ax_state, ax_input) = plt.subplots(2, 1, figsize=(8, 7), sharex=True)
    plotter.plot_time_series(trajectory, state_indices=[0], ax=ax_state)
    plotter.plot_inputs(trajectory, ax=ax_input)
    ax_state.set_title("Scheduled Thermostat Rollout")
    output_path = output_dir / "scheduled_thermostat.png"
    plotter.save_figure(fig, str(output_path))
    plt.close(fig)
    print(f"Figure saved to {output_path}")

    # A controller that blows up after t = 5 trips the stability supervisor
    def diverging(t, state):
        return np.array([np.inf if t > 5.0 else 1.0])

    print("\nRolling out with a diverging controller (diagnostics follow on stderr)...")
    try:
        rollout.run(
            INIT_TIME,
            INITIAL_STATE,
            FINAL_TIME,
            FunctionController(diverging, name="diverging"),
            [5.0],
        )
    except NumericalInstability as error:
        print(f"Caught: {error}")
        print(f"Truncated trajectory: {error.trajectory}")


if __name__ == "__main__":
    run_thermostat_demo()
