"""
Input/Output Manager
Handles saving and loading curves as line-oriented key=value text files and
exporting sampled polylines / control point lists for the game engine.
"""
import datetime
import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

from cusp.config import HEADER_MARKER, SPLINE_EXTENSION, MAX_POINTS
from .bezier import sample_by_count
from .curve import CurveModel
from .exceptions import CurveIOError, CurveParseError
from .vector import Vector2D, ControlPointPair

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike

_FIELDS = (".x", ".y", "_cp0.x", "_cp0.y", "_cp1.x", "_cp1.y")


def normalize_filename(path: PathLike, extension: str = SPLINE_EXTENSION) -> Path:
    """
    Make sure the file name ends with `.extension` (compared case-insensitively).
    A different extension is kept and the canonical one appended after it.
    A name ending in a bare dot is completed (`curve.` becomes `curve.csp`)
    rather than saved as an extensionless file.
    """
    path = Path(path)
    name = path.name
    index = name.rfind(".")
    if index < 0:
        return path.with_name(f"{name}.{extension}")
    ext = name[index + 1:]
    if not ext:
        return path.with_name(f"{name}{extension}")
    if ext.lower() != extension.lower():
        return path.with_name(f"{name}.{extension}")
    return path


def format_curve(points: Sequence[Vector2D], control_points: Sequence[ControlPointPair]) -> str:
    today = datetime.date.today().strftime("%b %d, %Y")
    lines = [f"{HEADER_MARKER} generated spline, {today}", f"points={len(points)}"]
    for i, (p, cp) in enumerate(zip(points, control_points)):
        lines.append(f"p{i}.x={p.x!r}")
        lines.append(f"p{i}.y={p.y!r}")
        for j in (0, 1):
            lines.append(f"p{i}_cp{j}.x={cp[j].x!r}")
            lines.append(f"p{i}_cp{j}.y={cp[j].y!r}")
    return "\n".join(lines) + "\n"


def parse_curve(text: str, path: PathLike | None = None) -> tuple[list[Vector2D], list[ControlPointPair]]:
    """
    Parse curve file content. Raises CurveParseError on the first problem;
    nothing is returned for a partially valid file.
    """
    # (line number, content), blank lines ignored
    lines = [(n, line.strip()) for n, line in enumerate(text.splitlines(), start=1) if line.strip()]
    if not lines or not lines[0][1].startswith(HEADER_MARKER):
        raise CurveParseError(f"missing '{HEADER_MARKER}' header", path, lines[0][0] if lines else None)

    def key_value(entry: tuple[int, str]) -> tuple[int, str, str]:
        number, line = entry
        key, sep, value = line.partition("=")
        if not sep:
            raise CurveParseError(f"expected key=value, got '{line}'", path, number)
        return number, key.strip(), value.strip()

    def number_of(number: int, key: str, value: str) -> float:
        try:
            return float(value)
        except ValueError:
            raise CurveParseError(f"invalid number '{value}' for '{key}'", path, number) from None

    if len(lines) < 2:
        raise CurveParseError("missing 'points' entry", path)
    number, key, value = key_value(lines[1])
    if key.lower() != "points":
        raise CurveParseError(f"expected 'points', got '{key}'", path, number)
    try:
        count = int(value)
    except ValueError:
        raise CurveParseError(f"invalid point count '{value}'", path, number) from None
    if not 0 <= count <= MAX_POINTS:
        raise CurveParseError(f"point count {count} outside 0..{MAX_POINTS}", path, number)

    body = lines[2:]
    if len(body) != count * len(_FIELDS):
        raise CurveParseError(
            f"point count mismatch: 'points={count}' needs {count * len(_FIELDS)} entries, found {len(body)}",
            path)

    values = []
    for k, entry in enumerate(body):
        number, key, value = key_value(entry)
        expected = f"p{k // len(_FIELDS)}{_FIELDS[k % len(_FIELDS)]}"
        if key != expected:
            raise CurveParseError(f"expected '{expected}', got '{key}'", path, number)
        values.append(number_of(number, key, value))

    points: list[Vector2D] = []
    control_points: list[ControlPointPair] = []
    for i in range(count):
        px, py, c0x, c0y, c1x, c1y = values[i * 6:(i + 1) * 6]
        points.append(Vector2D(px, py))
        control_points.append(ControlPointPair(Vector2D(c0x, c0y), Vector2D(c1x, c1y)))
    return points, control_points


class CurveIO:

    @staticmethod
    def save(curve: CurveModel, filepath: PathLike) -> Path | None:
        """
        Write the whole curve to `filepath` (extension normalized). Returns the
        path written, or None for an empty curve. `dirty` is cleared only on success.
        """
        if len(curve) == 0:
            logger.info("Nothing to save, curve is empty")
            return None
        target = normalize_filename(filepath)
        logger.info(f"Saving curve to: {target}")
        content = format_curve(curve.points, curve.control_points)
        try:
            with open(target, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as err:
            logger.warning(f"Unable to save curve to '{target}': {err}")
            raise CurveIOError(f"unable to save curve: {err}", target) from err
        curve.mark_clean()
        return target

    @staticmethod
    def read(filepath: PathLike) -> tuple[list[Vector2D], list[ControlPointPair]]:
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as err:
            raise CurveParseError(f"not a text file: {err}", filepath) from err
        except OSError as err:
            logger.warning(f"Unable to read curve from '{filepath}': {err}")
            raise CurveIOError(f"unable to read curve: {err}", filepath) from err
        return parse_curve(text, filepath)

    @staticmethod
    def load(curve: CurveModel, filepath: PathLike) -> CurveModel:
        """
        Replace the curve's content with the file's. On any error the curve
        is left as it was.
        """
        logger.info(f"Loading curve from: {filepath}")
        try:
            points, control_points = CurveIO.read(filepath)
        except CurveParseError as err:
            logger.warning(f"Invalid curve file: {err}")
            raise
        if len(points) > curve.max_points:
            logger.warning(f"Curve file holds {len(points)} points, the curve takes at most {curve.max_points}")
            raise CurveParseError(f"{len(points)} points exceed the limit of {curve.max_points}", filepath)
        curve.replace(points, control_points)
        logger.info(f"Loaded {len(points)} points")
        return curve

    @staticmethod
    def _write_lines(filepath: PathLike, lines: Iterable[str]) -> None:
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as err:
            logger.warning(f"Unable to export to '{filepath}': {err}")
            raise CurveIOError(f"unable to export curve: {err}", filepath) from err

    @staticmethod
    def export_samples(curve: CurveModel, filepath: PathLike, count: int) -> bool:
        """
        Write `count` points sampled along the curve, one "x, y" per line,
        after a header naming the requested count.
        """
        if len(curve) == 0:
            logger.info("Nothing to export, curve is empty")
            return False
        logger.info(f"Exporting {count} samples to: {filepath}")
        samples = sample_by_count(curve.segments(), count)
        header = f"{HEADER_MARKER} exported spline, points: {count}"
        CurveIO._write_lines(filepath, [header, *(f"{p.x!r}, {p.y!r}" for p in samples)])
        return True

    @staticmethod
    def export_control_points(curve: CurveModel, filepath: PathLike) -> bool:
        """
        Write one "x, y, cp0.x, cp0.y, cp1.x, cp1.y" line per node.
        """
        if len(curve) == 0:
            logger.info("Nothing to export, curve is empty")
            return False
        logger.info(f"Exporting {len(curve)} control point sets to: {filepath}")
        header = f"{HEADER_MARKER} exported control points: {len(curve)}"
        rows = (
            f"{p.x!r}, {p.y!r}, {cp.outgoing.x!r}, {cp.outgoing.y!r}, {cp.incoming.x!r}, {cp.incoming.y!r}"
            for p, cp in zip(curve.points, curve.control_points)
        )
        CurveIO._write_lines(filepath, [header, *rows])
        return True
