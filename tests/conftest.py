import pytest

from cusp.core import CurveModel, CurveMode, Vector2D


def build_curve(mode: CurveMode, coords) -> CurveModel:
    curve = CurveModel(mode)
    for x, y in coords:
        curve.add_point(Vector2D(x, y))
    return curve


@pytest.fixture
def freeform_curve() -> CurveModel:
    return build_curve(CurveMode.FREEFORM, [(0, 0), (100, 0), (100, 100), (200, 150)])


@pytest.fixture
def interpolated_curve() -> CurveModel:
    return build_curve(CurveMode.INTERPOLATED, [(0, 0), (10, 0), (20, 10), (30, 10)])
