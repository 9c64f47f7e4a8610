import math
from dataclasses import dataclass, field

from cusp.config import NORMALIZE_EPSILON


@dataclass(frozen=True)
class Vector2D:
    """
    2D point/vector value. Arithmetic returns new instances:
      - v + w, v - w, -v
      - v * s, s * v, v / s   (scalar)
    """
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float) -> "Vector2D":
        return Vector2D(self.x * s, self.y * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> "Vector2D":
        return Vector2D(self.x / s, self.y / s)

    def __neg__(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.dot(self)

    def normalized(self) -> "Vector2D":
        """Unit vector in the same direction; returned unchanged when shorter than 1e-3."""
        length = self.length()
        if length < NORMALIZE_EPSILON:
            return self
        return self / length

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def to_tuple(self) -> tuple[float, float]:
        return self.x, self.y

    @staticmethod
    def from_tuple(p: tuple[float, float]) -> "Vector2D":
        return Vector2D(float(p[0]), float(p[1]))


def dist2(a: Vector2D, b: Vector2D) -> float:
    return (a - b).length_squared()


@dataclass
class ControlPointPair:
    """
    The two Bezier handles owned by one node point:
      - slot 0, outgoing: toward the next segment
      - slot 1, incoming: from the previous segment
    """
    outgoing: Vector2D = field(default_factory=Vector2D)
    incoming: Vector2D = field(default_factory=Vector2D)

    def __getitem__(self, slot: int) -> Vector2D:
        if slot == 0:
            return self.outgoing
        if slot == 1:
            return self.incoming
        raise ValueError(f"control point slot must be 0 or 1, got {slot}")

    def __setitem__(self, slot: int, value: Vector2D) -> None:
        if slot == 0:
            self.outgoing = value
        elif slot == 1:
            self.incoming = value
        else:
            raise ValueError(f"control point slot must be 0 or 1, got {slot}")

    def translated(self, delta: Vector2D) -> "ControlPointPair":
        return ControlPointPair(self.outgoing + delta, self.incoming + delta)

    def copy(self) -> "ControlPointPair":
        return ControlPointPair(self.outgoing, self.incoming)
