from typing import Iterable, Iterator, NamedTuple, Sequence

from .vector import Vector2D


class BezierSegment(NamedTuple):
    """Cubic segment between two consecutive nodes and their facing handles."""
    start: Vector2D
    start_control: Vector2D
    end_control: Vector2D
    end: Vector2D

    def evaluate(self, t: float) -> Vector2D:
        return cubic_eval(self.start, self.start_control, self.end_control, self.end, t)


def cubic_eval(p0: Vector2D, c0: Vector2D, c1: Vector2D, p3: Vector2D, t: float) -> Vector2D:
    u = 1.0 - t
    uu = u * u
    tt = t * t
    uuu = uu * u
    ttt = tt * t
    x = uuu * p0.x + 3.0 * uu * t * c0.x + 3.0 * u * tt * c1.x + ttt * p3.x
    y = uuu * p0.y + 3.0 * uu * t * c0.y + 3.0 * u * tt * c1.y + ttt * p3.y
    return Vector2D(x, y)


class SteppedSamples:
    """
    Points of one segment at t = 0, step, 2*step, ... while t < 1.
    t = 1 itself is never produced. Iterating again restarts from t = 0.
    """

    def __init__(self, segment: BezierSegment, step_size: float):
        if step_size <= 0.0:
            raise ValueError(f"step_size must be positive, got {step_size}")
        self.segment = segment
        self.step_size = step_size

    def __iter__(self) -> Iterator[Vector2D]:
        i = 0
        t = 0.0
        while t < 1.0:
            yield self.segment.evaluate(t)
            i += 1
            t = i * self.step_size


def sample_by_steps(segment: BezierSegment, step_size: float) -> SteppedSamples:
    return SteppedSamples(segment, step_size)


def sample_by_count(segments: Sequence[BezierSegment], total: int) -> Iterator[Vector2D]:
    """
    Spread `total` samples over all segments: each segment is walked with
    step 1 / (total / len(segments)) and emission stops globally once `total`
    points were produced, so step rounding never overshoots the count.
    """
    if total < 1 or not segments:
        return
    step_size = 1.0 / (total / len(segments))
    count = 0
    for segment in segments:
        for point in sample_by_steps(segment, step_size):
            if count >= total:
                return
            yield point
            count += 1


def polyline(segments: Iterable[BezierSegment], step_size: float) -> list[Vector2D]:
    """
    Rendering polyline: stepped samples of every segment plus the final end point.
    """
    out: list[Vector2D] = []
    last = None
    for segment in segments:
        out.extend(sample_by_steps(segment, step_size))
        last = segment.end
    if last is not None:
        out.append(last)
    return out
