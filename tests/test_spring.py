import math

import numpy as np
import pytest

from ggspring.spring import create_spring


def test_point_count_is_density_times_revolutions():
    # length 1, one revolution every 0.5 units
    spring = create_spring(0, 0, 1, 0, diameter=1, tension=0.5, n=10)
    assert list(spring.columns) == ["x", "y"]
    assert len(spring) == 20


def test_default_parameters():
    # 3 / (1 * 0.75) = 4 revolutions at 50 points each
    assert len(create_spring(0, 0, 3, 0)) == 200


def test_fractional_point_count_rounds_up():
    # 50 * 1 / 0.75 = 66.67
    assert len(create_spring(0, 0, 1, 0)) == 67


def test_start_and_end_points():
    spring = create_spring(0, 0, 1, 0, diameter=1, tension=0.5, n=10)
    assert spring.x.iloc[0] == pytest.approx(0.5)
    assert spring.y.iloc[0] == pytest.approx(0)
    # Two whole revolutions end back at angle zero, offset from the end point.
    assert spring.x.iloc[-1] == pytest.approx(1.5)
    assert spring.y.iloc[-1] == pytest.approx(0, abs=1e-12)


def test_points_lie_on_circle_around_the_segment():
    spring = create_spring(1, 2, 4, 6, diameter=0.8, tension=0.5, n=20)
    centers_x = np.linspace(1, 4, len(spring))
    centers_y = np.linspace(2, 6, len(spring))
    radii = np.hypot(spring.x - centers_x, spring.y - centers_y)
    np.testing.assert_allclose(radii, 0.4)


def test_revolutions_follow_tension():
    loose = create_spring(0, 0, 10, 0, tension=2)
    tight = create_spring(0, 0, 10, 0, tension=0.5)
    assert len(tight) == 4 * len(loose)


def test_diagonal_spring_uses_euclidean_length():
    spring = create_spring(0, 0, 3, 4, diameter=1, tension=1, n=10)
    assert len(spring) == 50
    assert spring.x.iloc[-1] == pytest.approx(3.5)
    assert spring.y.iloc[-1] == pytest.approx(4, abs=1e-9)


def test_coincident_points_give_no_points():
    spring = create_spring(1, 1, 1, 1)
    assert len(spring) == 0
    assert list(spring.columns) == ["x", "y"]


def test_single_point_spring():
    spring = create_spring(0, 0, 0.01, 0, diameter=1, tension=1, n=50)
    assert len(spring) == 1
    assert spring.x.iloc[0] == pytest.approx(0.5)
    assert spring.y.iloc[0] == pytest.approx(0)


def test_accepts_numpy_scalars():
    spring = create_spring(np.float64(0), np.int64(0), np.float32(1), 0, n=np.int64(10))
    assert len(spring) == math.ceil(10 / 0.75)


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"tension": 0}, "tension"),
        ({"tension": -1}, "tension"),
        ({"diameter": 0}, "diameter"),
        ({"diameter": -0.5}, "diameter"),
        ({"n": 0}, "`n`"),
        ({"diameter": float("nan")}, "diameter"),
    ],
)
def test_invalid_parameters(kwargs, match):
    with pytest.raises(ValueError, match=match):
        create_spring(0, 0, 1, 1, **kwargs)


def test_non_finite_endpoints():
    with pytest.raises(ValueError, match="finite"):
        create_spring(0, float("nan"), 1, 1)


def test_non_numeric_arguments():
    with pytest.raises(TypeError, match="Argument 'x'"):
        create_spring("0", 0, 1, 1)
    with pytest.raises(TypeError, match="Argument 'tension'"):
        create_spring(0, 0, 1, 1, tension=True)
