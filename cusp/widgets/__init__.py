from .canvas import CurveCanvasWidget
from .dialogs import PointCoordsDialog, CanvasSizeDialog, ExportDialog

__all__ = [
    "CurveCanvasWidget",
    "PointCoordsDialog",
    "CanvasSizeDialog",
    "ExportDialog",
]
