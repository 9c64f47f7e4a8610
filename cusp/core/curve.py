import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence

from cusp.config import MAX_POINTS, MIN_SCALE_FACTOR, HIT_RADIUS
from .bezier import BezierSegment
from .point_editors import ControlPointEditor
from .registries import create_point_editor
from .vector import Vector2D, ControlPointPair, dist2

logger = logging.getLogger(__name__)


class CurveMode(Enum):
    FREEFORM = "freeform"
    INTERPOLATED = "interpolated"


@dataclass(frozen=True)
class NodeSelection:
    index: int


@dataclass(frozen=True)
class ControlPointSelection:
    index: int
    slot: int   # 0 outgoing, 1 incoming


Selection = NodeSelection | ControlPointSelection | None


@dataclass
class CurveSnapshot:
    """Copy of nodes and handles taken when a scale gesture starts."""
    points: list[Vector2D] = field(default_factory=list)
    control_points: list[ControlPointPair] = field(default_factory=list)


def scale_factor_from_drag(dx: float, dy: float, box_min: Vector2D, box_max: Vector2D) -> float:
    """
    Scale factor for a drag of (dx, dy) from the gesture start.

    The axis is chosen with a raw `dx > dy` comparison (not magnitudes), so
    dragging up-left is driven by dy. A box without extent on the driving
    axis yields 1.0.
    """
    width = box_max.x - box_min.x
    height = box_max.y - box_min.y
    if dx > dy:
        return 1.0 + dx / width if width else 1.0
    return 1.0 + dy / height if height else 1.0


class CurveModel:
    """
    Ordered node points, one control point pair per node, the active mode and
    the selection. Mutations keep the handles consistent with the mode and set
    `dirty`. Operations whose preconditions do not hold (empty curve, no
    selection, out of range index) do nothing.
    """

    def __init__(self, mode: CurveMode = CurveMode.INTERPOLATED, max_points: int = MAX_POINTS):
        self.max_points = max_points
        self._points: list[Vector2D] = []
        self._control_points: list[ControlPointPair] = []
        self._mode = mode
        self._editor: ControlPointEditor = create_point_editor(mode.value)
        self._selection: Selection = None
        self._backup: Optional[CurveSnapshot] = None
        self.dirty = False

    # ---- read-only views -------------------------------------------------
    @property
    def points(self) -> tuple[Vector2D, ...]:
        return tuple(self._points)

    @property
    def control_points(self) -> tuple[ControlPointPair, ...]:
        return tuple(cp.copy() for cp in self._control_points)

    @property
    def mode(self) -> CurveMode:
        return self._mode

    @property
    def editor(self) -> ControlPointEditor:
        return self._editor

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def scaling(self) -> bool:
        return self._backup is not None

    def __len__(self) -> int:
        return len(self._points)

    def segments(self) -> list[BezierSegment]:
        return [
            BezierSegment(self._points[i], self._control_points[i].outgoing,
                          self._control_points[i + 1].incoming, self._points[i + 1])
            for i in range(len(self._points) - 1)
        ]

    def bounding_box(self) -> Optional[tuple[Vector2D, Vector2D]]:
        if not self._points:
            return None
        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return Vector2D(min(xs), min(ys)), Vector2D(max(xs), max(ys))

    # ---- document lifecycle ----------------------------------------------
    def reset(self) -> None:
        self._points = []
        self._control_points = []
        self._selection = None
        self._backup = None
        self.dirty = False
        logger.info("Curve reset")

    def replace(self, points: Sequence[Vector2D], control_points: Sequence[ControlPointPair]) -> None:
        """
        Install a complete curve, e.g. one read from a file.
        """
        if len(points) != len(control_points):
            raise ValueError("points and control_points must have the same length")
        if len(points) > self.max_points:
            raise ValueError(f"a curve holds at most {self.max_points} points")
        self._points = list(points)
        self._control_points = [cp.copy() for cp in control_points]
        self._selection = None
        self._backup = None
        self._editor.nodes_changed(self._points, self._control_points)
        self.dirty = False

    def mark_clean(self) -> None:
        self.dirty = False

    # ---- mode & selection ------------------------------------------------
    def set_mode(self, mode: CurveMode) -> None:
        self._mode = mode
        self._editor = create_point_editor(mode.value)
        if isinstance(self._selection, ControlPointSelection) and not self._editor.selectable_control_points:
            self._selection = NodeSelection(self._selection.index)
        self._editor.nodes_changed(self._points, self._control_points)
        logger.info(f"Curve mode set to {mode.value}")

    def select(self, selection: Selection) -> None:
        match selection:
            case NodeSelection(index=i) if 0 <= i < len(self._points):
                self._selection = selection
            case ControlPointSelection(index=i, slot=s) if (
                    0 <= i < len(self._points) and s in (0, 1) and self._editor.selectable_control_points):
                self._selection = selection
            case _:
                self._selection = None

    def clear_selection(self) -> None:
        self._selection = None

    def selected_position(self) -> Optional[Vector2D]:
        match self._selection:
            case NodeSelection(index=i):
                return self._points[i]
            case ControlPointSelection(index=i, slot=s):
                return self._control_points[i][s]
        return None

    def hit_test(self, pos: Vector2D, radius: float = HIT_RADIUS) -> Selection:
        """
        First point within `radius` of `pos`: each node is tested before its own
        handles, and handles only when the mode lets them be selected.
        """
        r2 = radius * radius
        for i, p in enumerate(self._points):
            if dist2(p, pos) <= r2:
                return NodeSelection(i)
            if self._editor.selectable_control_points:
                for slot in (0, 1):
                    if dist2(self._control_points[i][slot], pos) <= r2:
                        return ControlPointSelection(i, slot)
        return None

    def select_or_insert(self, pos: Vector2D, radius: float = HIT_RADIUS) -> bool:
        """
        Select the point under `pos`, or append a new node there and select it.
        Returns True when a node was inserted.
        """
        hit = self.hit_test(pos, radius)
        if hit is not None:
            self._selection = hit
            return False
        index = self.add_point(pos)
        return index is not None

    # ---- node mutation ---------------------------------------------------
    def add_point(self, pos: Vector2D) -> Optional[int]:
        """
        Append a node at `pos` and select it. Returns its index, or None when
        the curve is full.
        """
        if len(self._points) >= self.max_points:
            logger.debug(f"Point cap of {self.max_points} reached, ignoring {pos}")
            return None
        pair = self._editor.initial_control_points(self._points, pos)
        self._points.append(pos)
        self._control_points.append(pair)
        self._editor.nodes_changed(self._points, self._control_points)
        index = len(self._points) - 1
        self._selection = NodeSelection(index)
        self.dirty = True
        logger.debug(f"Added point {index} at ({pos.x:g}, {pos.y:g})")
        return index

    def delete_point(self, index: int) -> None:
        if not 0 <= index < len(self._points):
            return
        del self._points[index]
        del self._control_points[index]
        self._editor.nodes_changed(self._points, self._control_points)
        # keep the selection pointing at the same point
        match self._selection:
            case NodeSelection(index=i) | ControlPointSelection(index=i) if i == index:
                self._selection = None
            case NodeSelection(index=i) if i > index:
                self._selection = NodeSelection(i - 1)
            case ControlPointSelection(index=i, slot=s) if i > index:
                self._selection = ControlPointSelection(i - 1, s)
        self.dirty = True
        logger.debug(f"Deleted point {index}")

    def delete_selected(self) -> bool:
        if isinstance(self._selection, NodeSelection):
            self.delete_point(self._selection.index)
            return True
        return False

    def _move_node(self, index: int, pos: Vector2D) -> None:
        delta = pos - self._points[index]
        self._points[index] = pos
        self._editor.node_moved(self._points, self._control_points, index, delta)
        self.dirty = True

    def move_selected_to(self, pos: Vector2D) -> bool:
        match self._selection:
            case ControlPointSelection(index=i, slot=s) if self._editor.selectable_control_points:
                self._control_points[i][s] = pos
                self.dirty = True
                return True
            case NodeSelection(index=i):
                self._move_node(i, pos)
                return True
        return False

    def set_selected_point_coords(self, x: float, y: float) -> bool:
        """Coordinate entry for the selected node; handles cannot be set this way."""
        if not isinstance(self._selection, NodeSelection):
            return False
        self._move_node(self._selection.index, Vector2D(float(x), float(y)))
        return True

    # ---- whole-curve transforms ------------------------------------------
    def translate_all(self, dx: float, dy: float) -> None:
        if not self._points:
            return
        delta = Vector2D(dx, dy)
        self._points = [p + delta for p in self._points]
        self._control_points = [cp.translated(delta) for cp in self._control_points]
        self._editor.nodes_translated(self._points, self._control_points)
        self.dirty = True

    def _mirror(self, mirror) -> None:
        self._points = [mirror(p) for p in self._points]
        if self._editor.transforms_control_points:
            self._control_points = [ControlPointPair(mirror(cp.outgoing), mirror(cp.incoming))
                                    for cp in self._control_points]
        self._editor.nodes_changed(self._points, self._control_points)
        self.dirty = True

    def flip_horizontal(self, axis_x: float) -> None:
        if self._points:
            self._mirror(lambda p: Vector2D(axis_x + (axis_x - p.x), p.y))

    def flip_vertical(self, axis_y: float) -> None:
        if self._points:
            self._mirror(lambda p: Vector2D(p.x, axis_y + (axis_y - p.y)))

    # ---- scale gesture ---------------------------------------------------
    def snapshot_for_scale(self) -> None:
        """Start a scale gesture: later scales are relative to the current state."""
        self._backup = CurveSnapshot(list(self._points), [cp.copy() for cp in self._control_points])

    def end_scale(self) -> None:
        self._backup = None

    def scale_relative_to_bounding_box(self, factor: float) -> bool:
        """
        Scale the snapshot about the live bounding box minimum. Factors below
        the minimum are refused. Returns True when the curve changed.
        """
        box = self.bounding_box()
        if box is None or self._backup is None:
            return False
        if factor < MIN_SCALE_FACTOR:
            logger.debug(f"Refusing scale factor {factor:g} below {MIN_SCALE_FACTOR}")
            return False
        if len(self._backup.points) != len(self._points):
            logger.debug("Scale snapshot no longer matches the curve, ignoring")
            return False
        box_min = box[0]
        scaled = [box_min + (orig - box_min) * factor for orig in self._backup.points]
        if self._editor.transforms_control_points:
            self._control_points = [
                orig_cp.translated(new - orig)
                for new, orig, orig_cp in zip(scaled, self._backup.points, self._backup.control_points)
            ]
        self._points = scaled
        self._editor.nodes_changed(self._points, self._control_points)
        self.dirty = True
        return True

    # ---- iteration helpers -----------------------------------------------
    def iter_handles(self) -> Iterable[tuple[Vector2D, Vector2D]]:
        """(node, handle) pairs for drawing handle lines."""
        for p, cp in zip(self._points, self._control_points):
            yield p, cp.outgoing
            yield p, cp.incoming
