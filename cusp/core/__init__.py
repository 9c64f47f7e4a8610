from .vector import Vector2D, ControlPointPair, dist2
from .solver import build_141_matrix, jacobi_solve, JacobiResult
from .interpolation import SplineInterpolator
from .point_editors import ControlPointEditor, FreeformEditor, InterpolatedEditor
from .registries import point_editor_registry, register_point_editor, create_point_editor
from .bezier import BezierSegment, cubic_eval, sample_by_steps, sample_by_count, polyline
from .curve import (CurveModel, CurveMode, NodeSelection, ControlPointSelection, Selection,
                    scale_factor_from_drag)
from .exceptions import CuspError, CurveFileError, CurveParseError, CurveIOError
from .io import CurveIO, normalize_filename
