"""
Natural cubic spline interpolation through the node points.

The curve is built from control-polygon points B_0..B_{N-1} ("B-points")
with B_0 = S_0, B_{N-1} = S_{N-1} and, for every interior node,

    B_{i-1} + 4 B_i + B_{i+1} = 6 S_i

The interior unknowns form a (N-2) x (N-2) "1-4-1" system whose first and
last right-hand sides fold in the known end points. Each cubic segment then
uses the two trisection points of (B_{i-1}, B_i) as its handles, which gives
continuous first and second derivatives at every interior node.
"""
import logging
from typing import Optional, Sequence

from cusp.config import MAX_JACOBI_ITERATIONS, JACOBI_EPSILON
from .solver import Matrix, build_141_matrix, jacobi_solve
from .vector import Vector2D, ControlPointPair

logger = logging.getLogger(__name__)

MIN_INTERPOLATION_POINTS = 3


class SplineInterpolator:
    """
    Holds the linear system for one node count and keeps it in sync with the
    node points: `build_system` whenever the count changes,
    `update_constant_for_point` when a single node moved.
    """

    def __init__(self, max_iterations: int = MAX_JACOBI_ITERATIONS, epsilon: float = JACOBI_EPSILON):
        self.max_iterations = max_iterations
        self.epsilon = epsilon
        self.matrix: Matrix = []
        self.constants: list[Vector2D] = []
        self.b_points: list[Vector2D] = []

    @property
    def point_count(self) -> int:
        """Node count the current system was built for (0 when none)."""
        return len(self.constants) + 2 if self.constants else 0

    # ---- system ----------------------------------------------------------
    @staticmethod
    def _constant(points: Sequence[Vector2D], entry: int) -> Vector2D:
        n = len(points) - 2
        c = points[entry + 1] * 6.0
        if entry == 0:
            c = c - points[0]
        if entry == n - 1:
            c = c - points[-1]
        return c

    def build_system(self, points: Sequence[Vector2D]) -> None:
        n = len(points) - 2
        if n < 1:
            self.matrix = []
            self.constants = []
            return
        self.matrix = build_141_matrix(n)
        self.constants = [self._constant(points, i) for i in range(n)]
        logger.debug(f"Built {n}x{n} interpolation system")

    def update_constant_for_point(self, points: Sequence[Vector2D], changed_index: int) -> None:
        """
        Refresh the constants touched by moving node `changed_index`:
        its own row (interior nodes) plus the boundary row folding in an end node.
        Falls back to a full build when the system was built for another count.
        """
        if self.point_count != len(points):
            self.build_system(points)
            return
        n = len(self.constants)
        entries = set()
        if 1 <= changed_index <= n:
            entries.add(changed_index - 1)
        if changed_index == 0:
            entries.add(0)
        if changed_index == n + 1:
            entries.add(n - 1)
        for entry in entries:
            self.constants[entry] = self._constant(points, entry)

    # ---- solving ---------------------------------------------------------
    def solve(self, points: Sequence[Vector2D]) -> list[Vector2D]:
        """
        Solve the current system once per axis and return the full B-vector.
        The end points are copied from the nodes, not solved.
        """
        count = len(points)
        if count < MIN_INTERPOLATION_POINTS:
            return []
        if self.point_count != count:
            self.build_system(points)

        xs = jacobi_solve(self.matrix, [c.x for c in self.constants], self.max_iterations, self.epsilon)
        ys = jacobi_solve(self.matrix, [c.y for c in self.constants], self.max_iterations, self.epsilon)

        b_points = [points[0]]
        b_points.extend(Vector2D(x, y) for x, y in zip(xs.solution, ys.solution))
        b_points.append(points[-1])
        self.b_points = b_points
        return b_points

    @staticmethod
    def derive_control_points(b_points: Sequence[Vector2D], control_points: list[ControlPointPair]) -> None:
        """
        Write the trisection points of each (B_{i-1}, B_i) pair into the
        outgoing handle of node i-1 and the incoming handle of node i.
        """
        for i in range(1, len(b_points)):
            b1 = b_points[i - 1]
            b2 = b_points[i]
            control_points[i - 1].outgoing = b1 * (2.0 / 3.0) + b2 * (1.0 / 3.0)
            control_points[i].incoming = b1 * (1.0 / 3.0) + b2 * (2.0 / 3.0)

    def interpolate(self,
                    points: Sequence[Vector2D],
                    control_points: list[ControlPointPair],
                    changed_index: Optional[int] = None) -> bool:
        """
        Recompute the handles of every node. Pass `changed_index` when only
        that node moved to reuse the system. Returns False (handles untouched)
        below three nodes.
        """
        if len(points) < MIN_INTERPOLATION_POINTS:
            logger.debug(f"Skipping interpolation with {len(points)} points")
            return False
        if changed_index is None:
            self.build_system(points)
        else:
            self.update_constant_for_point(points, changed_index)
        b_points = self.solve(points)
        self.derive_control_points(b_points, control_points)
        return True
