import pandas as pd
import pytest
from plotly.subplots import make_subplots

from ggspring.geom import GeomPath, GeomPoint, GeomSegment, GeomSpring, get_geom, linetype_gg_to_plotly


def draw(geom, data, **params):
    fig = make_subplots(rows=1, cols=1)
    legend_cache = set()
    geom.draw_panel(geom.use_defaults(data, {}), fig, 1, 1, legend_cache, **params)
    return fig, legend_cache


def test_registry():
    assert isinstance(get_geom("spring"), GeomSpring)
    assert isinstance(get_geom("path"), GeomPath)
    with pytest.raises(ValueError, match="Unknown geom 'coil'"):
        get_geom("coil")


def test_linetypes():
    assert linetype_gg_to_plotly("dashed") == "dash"
    assert linetype_gg_to_plotly("dotdash") == "dashdot"
    with pytest.raises(ValueError, match="wavy"):
        linetype_gg_to_plotly("wavy")


def test_use_defaults():
    data = pd.DataFrame({"x": [1], "y": [2], "color": ["red"]})
    filled = GeomSpring().use_defaults(data, {"diameter": 0.5})
    assert filled.color.iloc[0] == "red"
    assert filled.linetype.iloc[0] == "solid"
    assert filled.diameter.iloc[0] == 0.5
    assert filled.tension.iloc[0] == 0.75


def test_constant_aesthetics_override_mapped_ones():
    data = pd.DataFrame({"x": [1], "y": [2], "color": ["red"]})
    assert GeomPath().use_defaults(data, {"color": "blue"}).color.iloc[0] == "blue"


def test_handle_na(caplog):
    data = pd.DataFrame({"x": [0, 1, None], "y": [0, 1, 2], "xend": [1, 2, 3], "yend": [0, 0, 0]})
    cleaned = GeomSpring().handle_na(data, {"na_rm": False})
    assert len(cleaned) == 2
    assert "Removed 1 rows containing missing values (geom_spring)." in caplog.text


def test_handle_na_quietly(caplog):
    data = pd.DataFrame({"x": [0, None], "y": [0, 1]})
    assert len(GeomPath().handle_na(data, {"na_rm": True})) == 1
    assert caplog.text == ""


def test_spring_draws_one_coil_per_row():
    data = pd.DataFrame({"x": [0, 0], "y": [0, 1], "xend": [1, 3], "yend": [0, 1], "group": [1, 1]})
    fig, _ = draw(GeomSpring(), data, n=10)
    assert len(fig.data) == 2
    # 10 points per revolution, one revolution every 0.75
    assert len(fig.data[0].x) == 14
    assert len(fig.data[1].x) == 40
    assert fig.data[0].mode == "lines"
    assert fig.data[0].line.color == "black"
    assert fig.data[0].line.dash == "solid"


def test_spring_uses_row_aesthetics():
    data = pd.DataFrame({
        "x": [0, 0], "y": [0, 1], "xend": [1, 1], "yend": [0, 1],
        "tension": [1.0, 0.5], "diameter": [1.0, 1.0], "color": ["red", "blue"],
        "linetype": ["dashed", "solid"], "group": [1, 2],
    })
    fig, _ = draw(GeomSpring(), data, n=10)
    assert [len(trace.x) for trace in fig.data] == [10, 20]
    assert [trace.line.color for trace in fig.data] == ["red", "blue"]
    assert fig.data[0].line.dash == "dash"


def test_spring_skips_degenerate_springs():
    data = pd.DataFrame({"x": [1], "y": [1], "xend": [1], "yend": [1], "group": [1]})
    fig, _ = draw(GeomSpring(), data)
    assert len(fig.data) == 0


def test_spring_rejects_bad_tension():
    data = pd.DataFrame({"x": [0], "y": [0], "xend": [1], "yend": [1], "tension": [0.0], "group": [1]})
    with pytest.raises(ValueError, match="tension"):
        draw(GeomSpring(), data)


def test_path_draws_one_line_per_group():
    data = pd.DataFrame({"x": [0, 1, 2, 3, 4], "y": [0, 1, 0, 1, 0], "group": [1, 1, 2, 2, 3]})
    fig, _ = draw(GeomPath(), data)
    # group 3 has a single point and is not drawn
    assert [list(trace.x) for trace in fig.data] == [[0, 1], [2, 3]]


def test_segment():
    data = pd.DataFrame({"x": [0], "y": [0], "xend": [2], "yend": [1], "group": [1]})
    fig, _ = draw(GeomSegment(), data)
    assert list(fig.data[0].x) == [0, 2]
    assert list(fig.data[0].y) == [0, 1]


def test_points_and_legend():
    data = pd.DataFrame({
        "x": [0, 1, 2], "y": [0, 1, 2],
        "color": ["#ff0000", "#ff0000", "#0000ff"], "color_legend": ["a", "a", "b"],
        "group": [1, 1, 2],
    })
    fig, legend_cache = draw(GeomPoint(), data)
    assert [trace.mode for trace in fig.data] == ["markers", "markers"]
    assert [trace.name for trace in fig.data] == ["a", "b"]
    assert all(trace.showlegend for trace in fig.data)
    assert legend_cache == {"a", "b"}


def test_legend_entries_are_shown_once():
    data = pd.DataFrame({
        "x": [0, 0], "y": [0, 1], "xend": [1, 1], "yend": [0, 1],
        "color_legend": ["a", "a"], "group": [1, 2],
    })
    fig, _ = draw(GeomSpring(), data)
    assert [trace.showlegend for trace in fig.data] == [True, False]
    assert [trace.legendgroup for trace in fig.data] == ["a", "a"]
