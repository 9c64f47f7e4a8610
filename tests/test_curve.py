import pytest

from cusp.config import DEFAULT_CONTROL_POINT_DISTANCE, MAX_POINTS
from cusp.core import (CurveModel, CurveMode, NodeSelection, ControlPointSelection, Vector2D,
                       ControlPointPair, FreeformEditor, InterpolatedEditor, scale_factor_from_drag,
                       create_point_editor, register_point_editor)
from .conftest import build_curve


def assert_same_curve(a, b, abs=1e-6):
    """Same nodes and same drawn segments; the two outer handles are not compared."""
    assert len(a.points) == len(b.points)
    for p, q in zip(a.points, b.points):
        assert p.x == pytest.approx(q.x, abs=abs)
        assert p.y == pytest.approx(q.y, abs=abs)
    for seg_a, seg_b in zip(a.segments(), b.segments()):
        for u, v in zip(seg_a, seg_b):
            assert u.x == pytest.approx(v.x, abs=abs)
            assert u.y == pytest.approx(v.y, abs=abs)


def snapshot(curve):
    return curve.points, curve.control_points


# ---- lifecycle ---------------------------------------------------------------

def test_new_curve_is_empty_and_clean():
    curve = CurveModel()
    assert len(curve) == 0
    assert curve.mode is CurveMode.INTERPOLATED
    assert isinstance(curve.editor, InterpolatedEditor)
    assert curve.selection is None
    assert not curve.dirty
    assert curve.segments() == []
    assert curve.bounding_box() is None


def test_reset_clears_everything(freeform_curve):
    freeform_curve.snapshot_for_scale()
    freeform_curve.reset()
    assert len(freeform_curve) == 0
    assert freeform_curve.selection is None
    assert not freeform_curve.scaling
    assert not freeform_curve.dirty


def test_replace_installs_clean_curve(freeform_curve):
    points = [Vector2D(1, 1), Vector2D(2, 2)]
    pairs = [ControlPointPair(Vector2D(0, 1), Vector2D(2, 1)), ControlPointPair(Vector2D(3, 2), Vector2D(1, 2))]
    freeform_curve.replace(points, pairs)
    assert freeform_curve.points == tuple(points)
    assert freeform_curve.control_points == tuple(pairs)
    assert not freeform_curve.dirty
    with pytest.raises(ValueError):
        freeform_curve.replace(points, pairs[:1])


def test_segments_pair_facing_handles(freeform_curve):
    segments = freeform_curve.segments()
    assert len(segments) == 3
    cps = freeform_curve.control_points
    assert segments[1].start == Vector2D(100, 0)
    assert segments[1].start_control == cps[1].outgoing
    assert segments[1].end_control == cps[2].incoming
    assert segments[1].end == Vector2D(100, 100)


# ---- adding and deleting -----------------------------------------------------

def test_freeform_first_point_handles_along_x():
    curve = CurveModel(CurveMode.FREEFORM)
    assert isinstance(curve.editor, FreeformEditor)
    curve.add_point(Vector2D(10, 20))
    cp = curve.control_points[0]
    assert cp.outgoing == Vector2D(10 + DEFAULT_CONTROL_POINT_DISTANCE, 20)
    assert cp.incoming == Vector2D(10 - DEFAULT_CONTROL_POINT_DISTANCE, 20)


def test_freeform_next_point_handles_follow_direction():
    curve = build_curve(CurveMode.FREEFORM, [(0, 0), (0, 100)])
    cp = curve.control_points[1]
    assert cp.outgoing == Vector2D(0, 150)
    assert cp.incoming == Vector2D(0, 50)


def test_add_selects_new_point_and_marks_dirty():
    curve = CurveModel(CurveMode.FREEFORM)
    assert curve.add_point(Vector2D(5, 5)) == 0
    assert curve.add_point(Vector2D(50, 5)) == 1
    assert curve.selection == NodeSelection(1)
    assert curve.dirty


def test_interpolated_placeholders_until_three_points():
    curve = build_curve(CurveMode.INTERPOLATED, [(0, 0), (10, 10)])
    assert curve.control_points == (ControlPointPair(Vector2D(0, 0), Vector2D(0, 0)),
                                    ControlPointPair(Vector2D(10, 10), Vector2D(10, 10)))
    curve.add_point(Vector2D(20, 0))
    assert curve.control_points[0].outgoing != Vector2D(0, 0)


def test_point_cap_is_enforced():
    curve = CurveModel(CurveMode.FREEFORM, max_points=3)
    for i in range(3):
        assert curve.add_point(Vector2D(i * 10, 0)) == i
    assert curve.add_point(Vector2D(100, 100)) is None
    assert len(curve) == 3
    assert not curve.select_or_insert(Vector2D(500, 500))
    assert CurveModel().max_points == MAX_POINTS


def test_delete_middle_of_three_skips_interpolation():
    curve = build_curve(CurveMode.INTERPOLATED, [(0, 0), (10, 10), (20, 0)])
    before_points, before_cps = snapshot(curve)

    curve.delete_point(1)

    assert curve.points == (before_points[0], before_points[2])
    assert curve.control_points == (before_cps[0], before_cps[2])


def test_delete_compacts_and_remaps_selection(freeform_curve):
    freeform_curve.select(ControlPointSelection(3, 1))
    freeform_curve.delete_point(1)
    assert freeform_curve.points == (Vector2D(0, 0), Vector2D(100, 100), Vector2D(200, 150))
    assert len(freeform_curve.control_points) == 3
    assert freeform_curve.selection == ControlPointSelection(2, 1)

    freeform_curve.select(NodeSelection(1))
    freeform_curve.delete_point(1)
    assert freeform_curve.selection is None


def test_delete_out_of_range_is_a_no_op(freeform_curve):
    freeform_curve.mark_clean()
    freeform_curve.delete_point(10)
    assert len(freeform_curve) == 4
    assert not freeform_curve.dirty


def test_delete_selected_only_deletes_nodes(freeform_curve):
    freeform_curve.select(ControlPointSelection(0, 0))
    assert not freeform_curve.delete_selected()
    freeform_curve.select(NodeSelection(0))
    assert freeform_curve.delete_selected()
    assert len(freeform_curve) == 3


# ---- selection ---------------------------------------------------------------

def test_hit_test_prefers_node_then_its_handles(freeform_curve):
    assert freeform_curve.hit_test(Vector2D(1, 1)) == NodeSelection(0)
    assert freeform_curve.hit_test(Vector2D(51, 0)) == ControlPointSelection(0, 0)
    assert freeform_curve.hit_test(Vector2D(-49, 1)) == ControlPointSelection(0, 1)
    assert freeform_curve.hit_test(Vector2D(300, 300)) is None
    assert freeform_curve.hit_test(Vector2D(108, 0), radius=10.0) == NodeSelection(1)


def test_hit_test_ignores_handles_when_interpolated(interpolated_curve):
    cp = interpolated_curve.control_points[1].outgoing
    hit = interpolated_curve.hit_test(cp, radius=0.5)
    assert not isinstance(hit, ControlPointSelection)


def test_select_or_insert(freeform_curve):
    assert not freeform_curve.select_or_insert(Vector2D(100, 1))
    assert freeform_curve.selection == NodeSelection(1)
    assert freeform_curve.select_or_insert(Vector2D(300, 300))
    assert freeform_curve.selection == NodeSelection(4)
    assert len(freeform_curve) == 5


def test_select_rejects_invalid_selections(interpolated_curve):
    interpolated_curve.select(NodeSelection(9))
    assert interpolated_curve.selection is None
    interpolated_curve.select(ControlPointSelection(1, 0))
    assert interpolated_curve.selection is None
    interpolated_curve.select(NodeSelection(2))
    assert interpolated_curve.selected_position() == Vector2D(20, 10)


def test_switching_to_interpolated_drops_control_point_selection(freeform_curve):
    freeform_curve.select(ControlPointSelection(2, 1))
    freeform_curve.set_mode(CurveMode.INTERPOLATED)
    assert freeform_curve.selection == NodeSelection(2)
    assert isinstance(freeform_curve.editor, InterpolatedEditor)


def test_switching_to_interpolated_rebuilds_handles():
    coords = [(0, 0), (100, 0), (100, 100), (200, 150)]
    curve = build_curve(CurveMode.FREEFORM, coords)
    curve.set_mode(CurveMode.INTERPOLATED)
    assert_same_curve(curve, build_curve(CurveMode.INTERPOLATED, coords))


# ---- moving ------------------------------------------------------------------

def test_freeform_node_move_drags_handles(freeform_curve):
    before = freeform_curve.control_points[1]
    freeform_curve.select(NodeSelection(1))
    assert freeform_curve.move_selected_to(Vector2D(110, 5))
    assert freeform_curve.points[1] == Vector2D(110, 5)
    assert freeform_curve.control_points[1] == before.translated(Vector2D(10, 5))


def test_freeform_control_point_move(freeform_curve):
    freeform_curve.select(ControlPointSelection(1, 0))
    assert freeform_curve.move_selected_to(Vector2D(7, 8))
    assert freeform_curve.control_points[1].outgoing == Vector2D(7, 8)
    assert freeform_curve.points[1] == Vector2D(100, 0)


def test_move_without_selection_is_a_no_op(freeform_curve):
    freeform_curve.clear_selection()
    freeform_curve.mark_clean()
    assert not freeform_curve.move_selected_to(Vector2D(1, 1))
    assert not freeform_curve.dirty


def test_interpolated_move_matches_full_rebuild(interpolated_curve):
    interpolated_curve.select(NodeSelection(1))
    interpolated_curve.move_selected_to(Vector2D(12, -4))
    interpolated_curve.select(NodeSelection(3))
    interpolated_curve.move_selected_to(Vector2D(35, 0))

    expected = build_curve(CurveMode.INTERPOLATED, [(0, 0), (12, -4), (20, 10), (35, 0)])
    assert_same_curve(interpolated_curve, expected)


def test_set_selected_point_coords_only_for_nodes(freeform_curve):
    freeform_curve.select(ControlPointSelection(0, 0))
    assert not freeform_curve.set_selected_point_coords(1, 1)
    freeform_curve.select(NodeSelection(0))
    assert freeform_curve.set_selected_point_coords(-10, 20)
    assert freeform_curve.points[0] == Vector2D(-10, 20)
    assert freeform_curve.control_points[0].outgoing == Vector2D(40, 20)


# ---- whole-curve transforms --------------------------------------------------

def test_translate_all_moves_every_point(freeform_curve):
    before_points, before_cps = snapshot(freeform_curve)
    freeform_curve.translate_all(5, -3)
    delta = Vector2D(5, -3)
    assert freeform_curve.points == tuple(p + delta for p in before_points)
    assert freeform_curve.control_points == tuple(cp.translated(delta) for cp in before_cps)


def test_translate_then_move_keeps_interpolation_consistent(interpolated_curve):
    interpolated_curve.translate_all(100, 50)
    interpolated_curve.select(NodeSelection(2))
    interpolated_curve.move_selected_to(Vector2D(125, 70))

    expected = build_curve(CurveMode.INTERPOLATED, [(100, 50), (110, 50), (125, 70), (130, 60)])
    assert_same_curve(interpolated_curve, expected)


@pytest.mark.parametrize("mode", [CurveMode.FREEFORM, CurveMode.INTERPOLATED])
def test_flip_twice_is_identity(mode):
    curve = build_curve(mode, [(0, 0), (13.5, 7), (40, -12), (55, 30)])
    before = build_curve(mode, [(0, 0), (13.5, 7), (40, -12), (55, 30)])
    curve.flip_horizontal(240)
    curve.flip_horizontal(240)
    curve.flip_vertical(-17.25)
    curve.flip_vertical(-17.25)
    assert_same_curve(curve, before)


def test_flip_horizontal_mirrors_nodes_and_handles(freeform_curve):
    freeform_curve.flip_horizontal(50)
    assert freeform_curve.points[0] == Vector2D(100, 0)
    assert freeform_curve.points[3] == Vector2D(-100, 150)
    assert freeform_curve.control_points[0].outgoing == Vector2D(50, 0)


def test_flip_vertical_in_interpolated_mode_resolves(interpolated_curve):
    interpolated_curve.flip_vertical(0)
    expected = build_curve(CurveMode.INTERPOLATED, [(0, 0), (10, 0), (20, -10), (30, -10)])
    assert_same_curve(interpolated_curve, expected)
    assert interpolated_curve.dirty


# ---- scale gesture -----------------------------------------------------------

@pytest.mark.parametrize("mode", [CurveMode.FREEFORM, CurveMode.INTERPOLATED])
def test_scale_by_one_is_identity(mode):
    coords = [(10, 20), (60, 25), (90, 80)]
    curve = build_curve(mode, coords)
    curve.snapshot_for_scale()
    assert curve.scale_relative_to_bounding_box(1.0)
    assert_same_curve(curve, build_curve(mode, coords))


def test_freeform_scale_about_box_minimum():
    curve = build_curve(CurveMode.FREEFORM, [(10, 10), (20, 10), (20, 30)])
    before_cps = curve.control_points
    curve.snapshot_for_scale()
    curve.scale_relative_to_bounding_box(2.0)

    assert curve.points == (Vector2D(10, 10), Vector2D(30, 10), Vector2D(30, 50))
    assert curve.control_points[1] == before_cps[1].translated(Vector2D(10, 0))
    assert curve.control_points[2] == before_cps[2].translated(Vector2D(10, 20))


def test_scale_is_relative_to_snapshot():
    curve = build_curve(CurveMode.FREEFORM, [(0, 0), (10, 0), (10, 10)])
    curve.snapshot_for_scale()
    curve.scale_relative_to_bounding_box(2.0)
    curve.scale_relative_to_bounding_box(3.0)
    assert curve.points == (Vector2D(0, 0), Vector2D(30, 0), Vector2D(30, 30))


def test_scale_below_minimum_is_refused():
    curve = build_curve(CurveMode.FREEFORM, [(0, 0), (10, 0), (10, 10)])
    curve.mark_clean()
    curve.snapshot_for_scale()
    assert not curve.scale_relative_to_bounding_box(0.05)
    assert curve.points == (Vector2D(0, 0), Vector2D(10, 0), Vector2D(10, 10))
    assert not curve.dirty


def test_scale_needs_a_snapshot():
    curve = build_curve(CurveMode.FREEFORM, [(0, 0), (10, 0)])
    assert not curve.scale_relative_to_bounding_box(2.0)
    curve.snapshot_for_scale()
    assert curve.scaling
    curve.end_scale()
    assert not curve.scaling
    assert not curve.scale_relative_to_bounding_box(2.0)


def test_scale_factor_from_drag_uses_raw_comparison():
    box_min, box_max = Vector2D(0, 0), Vector2D(100, 50)
    assert scale_factor_from_drag(20, 10, box_min, box_max) == pytest.approx(1.2)
    assert scale_factor_from_drag(10, 20, box_min, box_max) == pytest.approx(1.4)
    # dx has the larger magnitude but dy wins the raw comparison
    assert scale_factor_from_drag(-50, -5, box_min, box_max) == pytest.approx(0.9)
    assert scale_factor_from_drag(5, 0, Vector2D(0, 0), Vector2D(0, 0)) == 1.0


# ---- point editor registry ---------------------------------------------------

def test_every_mode_has_an_editor():
    for mode in CurveMode:
        editor = create_point_editor(mode.value)
        assert editor.name == mode.value
    assert create_point_editor("freeform").selectable_control_points
    assert not create_point_editor("interpolated").selectable_control_points


def test_unknown_editor_and_duplicate_registration():
    with pytest.raises(ValueError):
        create_point_editor("bspline")
    with pytest.raises(ValueError):
        register_point_editor("freeform")(FreeformEditor)
