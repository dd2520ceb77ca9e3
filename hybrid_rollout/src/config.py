"""
Configuration management for the hybrid rollout library.

This module provides centralized configuration for rollout settings,
logging, and plotting defaults used throughout the library.
"""

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Tuple


@dataclass
class RolloutSettings:
    """Settings consumed by the stability supervisor and the integrator.

    The ODE tolerances and step budget are forwarded to the integration
    routine and are not interpreted by the rollout itself.
    """

    check_numerical_stability: bool = True
    reconstruct_input_trajectory: bool = True
    abs_tol_ode: float = 1e-9
    rel_tol_ode: float = 1e-6
    max_num_steps_per_second: int = 10000
    integrator_type: str = "RK45"
    max_step: Optional[float] = None

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "RolloutSettings":
        """Build settings from a flat dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown rollout option(s): {sorted(unknown)}")
        return cls(**values)


@dataclass
class VisualizationConfig:
    """Configuration for plotting and visualization."""

    default_figsize: Tuple[float, float] = (8, 5)
    default_dpi: int = 150

    trajectory_alpha: float = 0.9
    trajectory_linewidth: float = 1.5
    trajectory_colors: Tuple[str, ...] = (
        "blue",
        "red",
        "green",
        "orange",
        "purple",
        "brown",
    )

    event_color: str = "red"
    event_linewidth: float = 1.2
    event_alpha: float = 0.7

    grid_alpha: float = 0.3


@dataclass
class LoggingConfig:
    """Configuration for logging throughout the library."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    enable_file_logging: bool = False
    log_file: Optional[str] = None


class HybridRolloutConfig:
    """
    Centralized configuration manager for the hybrid rollout library.

    Holds the default rollout settings that new ``Rollout`` instances copy,
    plus logging and visualization defaults.
    """

    def __init__(self):
        self.rollout = RolloutSettings()
        self.visualization = VisualizationConfig()
        self.logging = LoggingConfig()

    def get_figure_config(self) -> Dict[str, Any]:
        """Get standard figure configuration for matplotlib."""
        return {
            "figsize": self.visualization.default_figsize,
            "dpi": self.visualization.default_dpi,
        }

    def get_event_style(self) -> Dict[str, Any]:
        """Get standard event marker line style."""
        return {
            "color": self.visualization.event_color,
            "linewidth": self.visualization.event_linewidth,
            "alpha": self.visualization.event_alpha,
            "linestyle": "--",
        }

    def update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration from a dictionary."""
        for section, values in config_dict.items():
            if hasattr(self, section):
                section_obj = getattr(self, section)
                for key, value in values.items():
                    if hasattr(section_obj, key):
                        setattr(section_obj, key, value)
                    else:
                        raise ValueError(f"Unknown config option: {section}.{key}")
            else:
                raise ValueError(f"Unknown config section: {section}")

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration to a dictionary."""
        return {
            "rollout": asdict(self.rollout),
            "visualization": asdict(self.visualization),
            "logging": asdict(self.logging),
        }

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance with configured settings."""
        logger = logging.getLogger(name)

        # Only configure if not already configured
        if not logger.handlers:
            logger.setLevel(getattr(logging, self.logging.level))

            console_handler = logging.StreamHandler()
            console_handler.setLevel(getattr(logging, self.logging.level))
            formatter = logging.Formatter(self.logging.format, self.logging.date_format)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

            if self.logging.enable_file_logging and self.logging.log_file:
                file_handler = logging.FileHandler(self.logging.log_file)
                file_handler.setLevel(getattr(logging, self.logging.level))
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)

        return logger


# Global configuration instance
# Users can import and modify this directly:
# from hybrid_rollout import config
# config.rollout.check_numerical_stability = False
config = HybridRolloutConfig()


def get_default_rollout_settings() -> RolloutSettings:
    """Get a copy of the default rollout settings."""
    return RolloutSettings(**asdict(config.rollout))
