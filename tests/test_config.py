#!/usr/bin/env python3
"""
Tests for the configuration layer.
"""
import pytest

from hybrid_rollout import Rollout, RolloutSettings, config
from hybrid_rollout.src.config import HybridRolloutConfig, get_default_rollout_settings


def test_default_rollout_settings():
    settings = RolloutSettings()
    assert settings.check_numerical_stability is True
    assert settings.reconstruct_input_trajectory is True
    assert settings.integrator_type == "RK45"
    assert settings.max_step is None


def test_update_from_dict_and_to_dict():
    cfg = HybridRolloutConfig()
    cfg.update_from_dict({"rollout": {"check_numerical_stability": False, "abs_tol_ode": 1e-5}})

    exported = cfg.to_dict()
    assert exported["rollout"]["check_numerical_stability"] is False
    assert exported["rollout"]["abs_tol_ode"] == 1e-5
    assert set(exported) == {"rollout", "visualization", "logging"}


def test_unknown_options_are_rejected():
    cfg = HybridRolloutConfig()
    with pytest.raises(ValueError):
        cfg.update_from_dict({"rollout": {"no_such_option": 1}})
    with pytest.raises(ValueError):
        cfg.update_from_dict({"no_such_section": {}})
    with pytest.raises(ValueError):
        RolloutSettings.from_dict({"checkNumericalStability": True})


def test_settings_from_dict():
    settings = RolloutSettings.from_dict({"rel_tol_ode": 1e-3, "integrator_type": "DOP853"})
    assert settings.rel_tol_ode == 1e-3
    assert settings.integrator_type == "DOP853"
    assert settings.abs_tol_ode == RolloutSettings().abs_tol_ode


def test_rollout_copies_global_settings():
    rollout = Rollout(lambda *args, **kwargs: None)
    assert rollout.settings == config.rollout
    assert rollout.settings is not config.rollout

    rollout.settings.check_numerical_stability = not config.rollout.check_numerical_stability
    assert get_default_rollout_settings() == config.rollout


def test_event_style():
    style = config.get_event_style()
    assert style["linestyle"] == "--"
    assert style["color"] == config.visualization.event_color


def test_get_logger_configures_once():
    logger = config.get_logger("hybrid_rollout.test_config")
    handlers = list(logger.handlers)
    assert config.get_logger("hybrid_rollout.test_config").handlers == handlers
