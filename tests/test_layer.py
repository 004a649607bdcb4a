import pandas as pd
import pytest

from ggspring.aes import aes, evaluate_mapping
from ggspring.geom import GeomPath, GeomSpring
from ggspring.layer import layer
from ggspring.layers import geom_point, geom_spring, stat_spring
from ggspring.position import PositionNudge
from ggspring.scale import scale_color_discrete, scale_x_continuous
from ggspring.stat import StatIdentity, StatSpring


def test_aes_drops_missing_and_normalises_names():
    assert aes("a", colour="c", size=None) == {"x": "a", "color": "c"}


def test_evaluate_mapping():
    data = pd.DataFrame({"a": [1, 2, 3]}, index=[10, 11, 12])
    evaluated = evaluate_mapping(aes(x="a", y=[4, 5, 6], tension=0.5), data)
    assert list(evaluated.x) == [1, 2, 3]
    assert list(evaluated.y) == [4, 5, 6]
    assert list(evaluated.tension) == [0.5, 0.5, 0.5]


def test_evaluate_mapping_errors():
    data = pd.DataFrame({"a": [1, 2, 3]})
    with pytest.raises(ValueError, match="column 'b'"):
        evaluate_mapping(aes(x="b"), data)
    with pytest.raises(ValueError, match="has 2 values"):
        evaluate_mapping(aes(x=[1, 2]), data)


def test_geom_spring_routes_parameters():
    spring_layer = geom_spring(diameter=0.5, n=20, color="red")
    assert isinstance(spring_layer.geom, GeomSpring)
    assert isinstance(spring_layer.stat, StatIdentity)
    assert spring_layer.aes_params == {"diameter": 0.5, "color": "red"}
    assert spring_layer.geom_params == {"n": 20, "na_rm": False}
    assert spring_layer.stat_params == {"na_rm": False}


def test_stat_spring_routes_parameters():
    spring_layer = stat_spring(diameter=2, colour="blue")
    assert isinstance(spring_layer.geom, GeomPath)
    assert isinstance(spring_layer.stat, StatSpring)
    assert spring_layer.stat_params == {"diameter": 2, "tension": 0.75, "n": 50, "na_rm": False}
    assert spring_layer.geom_params == {"na_rm": False}
    assert spring_layer.aes_params == {"color": "blue"}


def test_unknown_parameters_are_ignored(caplog):
    point_layer = geom_point(wobble=3)
    assert "wobble" not in {**point_layer.aes_params, **point_layer.geom_params, **point_layer.stat_params}
    assert "Ignoring unknown parameters: wobble" in caplog.text


def test_unknown_aesthetics_are_dropped(caplog):
    point_layer = geom_point(aes(x="a", fill="b"))
    assert point_layer.mapping == {"x": "a"}
    assert "Ignoring unknown aesthetics: fill" in caplog.text


def test_layer_accepts_instances():
    nudge = PositionNudge(x=1)
    custom = layer(geom=GeomSpring(), stat=StatSpring, position=nudge, params={"n": 5})
    assert custom.position is nudge
    assert custom.stat_params == {"n": 5}
    assert custom.geom_params == {"n": 5}


def test_combined_mapping():
    spring_layer = geom_spring(aes(xend="b"), color="red")
    assert spring_layer.combined_mapping(aes(x="a", xend="c", color="d")) == {"x": "a", "xend": "b"}
    not_inherited = geom_spring(aes(xend="b"), inherit_aes=False)
    assert not_inherited.combined_mapping(aes(x="a")) == {"xend": "b"}


def test_add_group_from_discrete_aesthetics():
    data = pd.DataFrame({"x": [1.0, 2.0, 3.0], "color": ["b", "a", "b"]})
    grouped = geom_point().add_group(data, {"x": scale_x_continuous(), "color": scale_color_discrete()})
    assert list(grouped.group) == [2, 1, 2]


def test_add_group_without_discrete_aesthetics():
    data = pd.DataFrame({"x": [1.0, 2.0], "y": [3.0, 4.0]})
    grouped = geom_point().add_group(data, {"x": scale_x_continuous()})
    assert list(grouped.group) == [1, 1]


def test_add_group_uses_mapped_group():
    data = pd.DataFrame({"x": [1.0, 2.0], "color": ["a", "b"], "group": ["z", "z"]})
    grouped = geom_point().add_group(data, {"color": scale_color_discrete()})
    assert list(grouped.group) == [1, 1]
