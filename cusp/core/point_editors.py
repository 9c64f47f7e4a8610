from abc import ABC, abstractmethod
from typing import Sequence, override

from cusp.config import DEFAULT_CONTROL_POINT_DISTANCE
from .interpolation import SplineInterpolator
from .registries import register_point_editor
from .vector import Vector2D, ControlPointPair


class ControlPointEditor(ABC):
    """
    Mode-specific policy deciding how control points follow the node points.
    The curve owns the lists; editors only update control points in place.
    """
    name: str = ""
    selectable_control_points: bool = False
    # whether flips/scales move the handles along with the nodes
    transforms_control_points: bool = False

    @abstractmethod
    def initial_control_points(self, points: Sequence[Vector2D], new_point: Vector2D) -> ControlPointPair:
        """
        Handles for a node about to be appended after `points`.
        """

    @abstractmethod
    def node_moved(self, points: Sequence[Vector2D], control_points: list[ControlPointPair],
                   index: int, delta: Vector2D) -> None:
        """
        Node `index` was just moved by `delta`.
        """

    @abstractmethod
    def nodes_changed(self, points: Sequence[Vector2D], control_points: list[ControlPointPair]) -> None:
        """
        Nodes were added, removed or transformed as a whole.
        """

    def nodes_translated(self, points: Sequence[Vector2D], control_points: list[ControlPointPair]) -> None:
        """
        Every node and handle was moved by the same offset.
        """


@register_point_editor("freeform")
class FreeformEditor(ControlPointEditor):
    """
    Handles are independent of each other:
      - add: place the pair along the direction from the previous node
      - move node: drag its pair along
    """
    selectable_control_points = True
    transforms_control_points = True

    def __init__(self, distance: float = DEFAULT_CONTROL_POINT_DISTANCE):
        self.distance = distance

    @override
    def initial_control_points(self, points: Sequence[Vector2D], new_point: Vector2D) -> ControlPointPair:
        if not points:
            offset = Vector2D(self.distance, 0.0)
        else:
            offset = (new_point - points[-1]).normalized() * self.distance
        return ControlPointPair(new_point + offset, new_point - offset)

    @override
    def node_moved(self, points, control_points, index, delta):
        control_points[index] = control_points[index].translated(delta)

    @override
    def nodes_changed(self, points, control_points):
        pass


@register_point_editor("interpolated")
class InterpolatedEditor(ControlPointEditor):
    """
    Handles are derived from all node points by cubic spline interpolation;
    they are never set directly.
    """

    def __init__(self, interpolator: SplineInterpolator | None = None):
        self.interpolator = interpolator or SplineInterpolator()

    @override
    def initial_control_points(self, points: Sequence[Vector2D], new_point: Vector2D) -> ControlPointPair:
        # placeholders, overwritten by the next solve
        return ControlPointPair(new_point, new_point)

    @override
    def node_moved(self, points, control_points, index, delta):
        self.interpolator.interpolate(points, control_points, changed_index=index)

    @override
    def nodes_changed(self, points, control_points):
        self.interpolator.interpolate(points, control_points)

    @override
    def nodes_translated(self, points, control_points):
        # handles were already translated; only the cached constants go stale
        self.interpolator.build_system(points)
