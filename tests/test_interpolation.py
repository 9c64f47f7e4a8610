import math

import pytest

from cusp.config import JACOBI_EPSILON
from cusp.core import SplineInterpolator, ControlPointPair, Vector2D


def pairs_for(points):
    return [ControlPointPair(p, p) for p in points]


def distance_to_line(direction: Vector2D, p: Vector2D) -> float:
    """Distance from `p` to the line through the origin along `direction`."""
    return abs(direction.x * p.y - direction.y * p.x) / direction.length()


def continuity_residual(points, control_points, i):
    """Difference between the outgoing and incoming tangent at node i."""
    outgoing = control_points[i].outgoing - points[i]
    incoming = points[i] - control_points[i].incoming
    return (outgoing - incoming).length()


SCENARIO = [Vector2D(0, 0), Vector2D(10, 0), Vector2D(20, 10), Vector2D(30, 10)]


@pytest.mark.parametrize("count", [3, 4, 7, 20, 100])
def test_colinear_points_stay_on_their_line(count):
    direction = Vector2D(3.0, 1.5)
    points = [direction * i for i in range(count)]
    control_points = pairs_for(points)
    interpolator = SplineInterpolator()

    assert interpolator.interpolate(points, control_points)

    # each axis stops on its own, so the line only holds to the solver tolerance
    bound = math.sqrt(JACOBI_EPSILON)
    for b in interpolator.b_points:
        assert distance_to_line(direction, b) < bound
    for cp in control_points:
        assert distance_to_line(direction, cp.outgoing) < bound
        assert distance_to_line(direction, cp.incoming) < bound
    for b, s in zip(interpolator.b_points, points):
        assert (b - s).length() < 0.15


def test_end_b_points_equal_end_nodes():
    interpolator = SplineInterpolator()
    interpolator.build_system(SCENARIO)
    b_points = interpolator.solve(SCENARIO)
    assert len(b_points) == 4
    assert b_points[0] == Vector2D(0, 0)
    assert b_points[3] == Vector2D(30, 10)


def test_constants_fold_in_the_end_points():
    interpolator = SplineInterpolator()
    interpolator.build_system(SCENARIO)
    assert interpolator.matrix == [[4.0, 1.0], [1.0, 4.0]]
    assert interpolator.constants == [Vector2D(60, 0), Vector2D(90, 50)]


def test_single_unknown_folds_in_both_end_points():
    points = [Vector2D(0, 0), Vector2D(10, 10), Vector2D(20, 0)]
    interpolator = SplineInterpolator()
    interpolator.build_system(points)
    assert interpolator.constants == [Vector2D(40, 60)]
    b_points = interpolator.solve(points)
    assert b_points[1].x == pytest.approx(10.0)
    assert b_points[1].y == pytest.approx(15.0)


def test_derived_control_points_are_tangent_continuous():
    # exact solution of the scenario's system
    b_points = [Vector2D(0, 0), Vector2D(10, -10 / 3), Vector2D(20, 40 / 3), Vector2D(30, 10)]
    control_points = pairs_for(SCENARIO)
    SplineInterpolator.derive_control_points(b_points, control_points)

    for i in (1, 2):
        assert continuity_residual(SCENARIO, control_points, i) < 1e-3
    assert control_points[0].outgoing.x == pytest.approx(10 / 3)
    assert control_points[3].incoming.x == pytest.approx(80 / 3)
    assert control_points[3].incoming.y == pytest.approx(100 / 9)


def test_solved_control_points_are_close_to_continuous():
    control_points = pairs_for(SCENARIO)
    SplineInterpolator().interpolate(SCENARIO, control_points)
    for i in (1, 2):
        assert continuity_residual(SCENARIO, control_points, i) < 0.1


def test_outer_handles_are_not_touched():
    control_points = pairs_for(SCENARIO)
    SplineInterpolator().interpolate(SCENARIO, control_points)
    assert control_points[0].incoming == SCENARIO[0]
    assert control_points[3].outgoing == SCENARIO[3]


def test_incremental_update_matches_full_rebuild():
    points = [Vector2D(i * 10.0, (i % 3) * 7.0) for i in range(8)]
    interpolator = SplineInterpolator()
    interpolator.build_system(points)

    for index in (0, 1, 4, 6, 7):
        points[index] = points[index] + Vector2D(3.0, -5.0)
        interpolator.update_constant_for_point(points, index)
        reference = SplineInterpolator()
        reference.build_system(points)
        assert interpolator.constants == reference.constants


def test_incremental_update_rebuilds_on_count_change():
    interpolator = SplineInterpolator()
    interpolator.build_system(SCENARIO)
    points = SCENARIO + [Vector2D(40, 0)]
    interpolator.update_constant_for_point(points, 4)
    assert interpolator.point_count == 5
    assert len(interpolator.matrix) == 3


def test_too_few_points_are_skipped():
    points = [Vector2D(0, 0), Vector2D(10, 10)]
    control_points = [ControlPointPair(Vector2D(1, 2), Vector2D(3, 4)),
                      ControlPointPair(Vector2D(5, 6), Vector2D(7, 8))]
    before = [cp.copy() for cp in control_points]
    interpolator = SplineInterpolator()

    assert not interpolator.interpolate(points, control_points)
    assert control_points == before
    assert interpolator.solve(points) == []
