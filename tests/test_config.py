import numpy as np
import pytest

from tinydual.config import LayoutConfig
from tinydual.layout import DEFAULT_CONNECTIONS, PointLayout


def test_defaults_match_demo():
    cfg = LayoutConfig()
    assert cfg.points == 10
    assert cfg.iterations == 1000
    assert cfg.learning_rate == 0.01
    assert cfg.connections == DEFAULT_CONNECTIONS


def test_connections_normalised():
    cfg = LayoutConfig(points=3, connections=[[0, 1], [1, 2]])
    assert cfg.connections == ((0, 1), (1, 2))
    assert cfg.to_dict()["connections"] == [[0, 1], [1, 2]]


def test_build_layout_and_start():
    cfg = LayoutConfig(points=4, connections=[(0, 3)], connection_weight=2.0, radius=2.0)
    layout = cfg.build_layout()
    assert isinstance(layout, PointLayout)
    assert layout.n == 8
    assert layout.connection_weight == 2.0
    x = cfg.start()
    assert np.allclose(np.hypot(x[0::2], x[1::2]), 2.0)


def test_invalid_config():
    with pytest.raises(ValueError):
        LayoutConfig(points=0)
    with pytest.raises(ValueError):
        LayoutConfig(iterations=-1)
