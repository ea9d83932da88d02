import math

import pytest
from netforce import SimulationConfig, Viewport, ConfigurationError


def test_defaults():
    cfg = SimulationConfig()
    assert cfg.k_repulsion == 5000
    assert cfg.k_spring == 0.05
    assert cfg.rest_length == 120
    assert cfg.damping == 0.92
    assert cfg.max_velocity == 15
    assert cfg.dt == 0.016
    assert cfg.shockwave_decay == 0.95
    assert cfg.stress_threshold == 0.7
    assert cfg.boundary_margin == 50
    assert cfg.boundary_k == 0.1
    assert cfg.shockwave_threshold == 0.1
    assert cfg.shockwave_max_age == 300


@pytest.mark.parametrize(
    "changes",
    [
        {"damping": 0.0},
        {"damping": 1.0},
        {"dt": 0.0},
        {"rest_length": -5.0},
        {"max_velocity": 0.0},
        {"k_repulsion": -1.0},
        {"shockwave_decay": 1.5},
        {"shockwave_max_age": 0},
        {"shockwave_max_age": 2.5},
        {"k_spring": math.nan},
        {"boundary_k": math.inf},
    ],
)
def test_invalid_values_rejected(changes):
    with pytest.raises(ConfigurationError):
        SimulationConfig(**changes)


def test_replace_validates():
    cfg = SimulationConfig().replace(k_spring=0.2)
    assert cfg.k_spring == 0.2
    with pytest.raises(ConfigurationError):
        cfg.replace(damping=2.0)


def test_config_is_frozen():
    cfg = SimulationConfig()
    with pytest.raises(AttributeError):
        cfg.dt = 1.0


def test_viewport_validation():
    assert Viewport(800, 600).width == 800
    for w, h in ((0, 600), (800, -1), (math.nan, 600), (800, math.inf)):
        with pytest.raises(ConfigurationError):
            Viewport(w, h)
