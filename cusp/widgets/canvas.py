from typing import Optional, override

from PySide6 import QtCore, QtGui, QtWidgets

from cusp.config import DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_SEGMENT_STEPSIZE, HIT_RADIUS
from cusp.core import (CurveModel, CurveMode, NodeSelection, Vector2D,
                       polyline, scale_factor_from_drag)
from cusp.widgets.utils import qpoint_to_vector, vector_to_qpoint

READY = "Canvas ready"
MOVING_SPLINE = "Moving Entire Spline"


class CurveCanvasWidget(QtWidgets.QWidget):
    """
    View/controller for a CurveModel.
    Renders nodes, handles and the sampled curve; maps mouse and keyboard
    input onto the model's editing operations.
    """

    curveChanged = QtCore.Signal()          # emitted whenever node/handle data changes
    selectionChanged = QtCore.Signal()      # emitted when the selected point changes
    statusChanged = QtCore.Signal(str)      # short text for the status bar

    NAVY = QtGui.QColor(0, 0, 128)

    def __init__(self, curve: CurveModel, parent=None):
        super().__init__(parent)
        self._curve = curve
        self._hit_radius = HIT_RADIUS
        self._last_pos: Optional[Vector2D] = None
        self._press_pos: Optional[Vector2D] = None

        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_OpaquePaintEvent, True)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.resize(DEFAULT_WIDTH, DEFAULT_HEIGHT)

        self.curveChanged.connect(self.update)
        self.selectionChanged.connect(self.update)

    # ---------- binding ----------
    @property
    def curve(self) -> CurveModel:
        return self._curve

    @override
    def sizeHint(self):
        return QtCore.QSize(DEFAULT_WIDTH, DEFAULT_HEIGHT)

    # ---------- editing API for menus ----------
    def reset_curve(self) -> None:
        self._curve.reset()
        self.curveChanged.emit()
        self.selectionChanged.emit()

    def set_mode(self, mode: CurveMode) -> None:
        if mode is self._curve.mode:
            return
        self._curve.set_mode(mode)
        self.curveChanged.emit()

    def flip_horizontal(self) -> None:
        self._curve.flip_horizontal(self.width() / 2)
        self.curveChanged.emit()

    def flip_vertical(self) -> None:
        self._curve.flip_vertical(self.height() / 2)
        self.curveChanged.emit()

    def set_selected_point_coords(self, x: float, y: float) -> None:
        if self._curve.set_selected_point_coords(x, y):
            self.curveChanged.emit()

    def has_node_selected(self) -> bool:
        return isinstance(self._curve.selection, NodeSelection)

    # ---------- Qt events ----------
    @override
    def mousePressEvent(self, e: QtGui.QMouseEvent):
        pos = qpoint_to_vector(e.position())
        mods = e.modifiers()
        ctrl = bool(mods & QtCore.Qt.KeyboardModifier.ControlModifier)
        shift = bool(mods & QtCore.Qt.KeyboardModifier.ShiftModifier)
        self._curve.clear_selection()

        if e.button() == QtCore.Qt.MouseButton.LeftButton and not ctrl and not shift:
            # select a point, or add one in an empty area
            if self._curve.select_or_insert(pos, self._hit_radius):
                self.curveChanged.emit()
        elif e.button() == QtCore.Qt.MouseButton.LeftButton and ctrl:
            self._curve.snapshot_for_scale()

        self._last_pos = pos
        self._press_pos = pos
        self.selectionChanged.emit()

    @override
    def mouseMoveEvent(self, e: QtGui.QMouseEvent):
        if self._last_pos is None:
            return
        pos = qpoint_to_vector(e.position())
        mods = e.modifiers()

        if mods & QtCore.Qt.KeyboardModifier.ShiftModifier:
            delta = pos - self._last_pos
            self._curve.translate_all(delta.x, delta.y)
            self._last_pos = pos
            self.statusChanged.emit(MOVING_SPLINE)
            self.curveChanged.emit()
        elif mods & QtCore.Qt.KeyboardModifier.ControlModifier:
            self._scale_to(pos)
        elif self._curve.move_selected_to(pos):
            self.statusChanged.emit(f"{pos.x:g},{pos.y:g}")
            self.curveChanged.emit()

    @override
    def mouseReleaseEvent(self, e: QtGui.QMouseEvent):
        self._curve.end_scale()
        self._last_pos = None
        self._press_pos = None
        self.statusChanged.emit(f"{READY}  ({self.width()},{self.height()})")

    @override
    def keyPressEvent(self, e: QtGui.QKeyEvent):
        if e.key() == QtCore.Qt.Key.Key_Delete and self._curve.delete_selected():
            self._curve.clear_selection()
            self.curveChanged.emit()
            self.selectionChanged.emit()
            return
        super().keyPressEvent(e)

    def _scale_to(self, pos: Vector2D) -> None:
        box = self._curve.bounding_box()
        if box is None or self._press_pos is None or not self._curve.scaling:
            return
        drag = pos - self._press_pos
        factor = scale_factor_from_drag(drag.x, drag.y, *box)
        if self._curve.scale_relative_to_bounding_box(factor):
            self.curveChanged.emit()

    # ---------- painting ----------
    def _draw_handles(self, painter: QtGui.QPainter):
        painter.setPen(QtGui.QPen(QtGui.QColor(QtCore.Qt.GlobalColor.lightGray), 1.0))
        for node, handle in self._curve.iter_handles():
            painter.drawLine(vector_to_qpoint(node), vector_to_qpoint(handle))
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(QtCore.Qt.GlobalColor.magenta)
        for _, handle in self._curve.iter_handles():
            painter.drawEllipse(vector_to_qpoint(handle), 3.0, 3.0)

    def _draw_nodes(self, painter: QtGui.QPainter):
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(self.NAVY)
        for p in self._curve.points:
            painter.drawEllipse(vector_to_qpoint(p), 3.0, 3.0)

    def _draw_curve(self, painter: QtGui.QPainter):
        samples = polyline(self._curve.segments(), DEFAULT_SEGMENT_STEPSIZE)
        if len(samples) < 2:
            return
        painter.setPen(QtGui.QPen(self.NAVY, 1.0))
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        painter.drawPolyline(QtGui.QPolygonF([vector_to_qpoint(p) for p in samples]))

    def _draw_selection(self, painter: QtGui.QPainter):
        p = self._curve.selected_position()
        if p is None:
            return
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(QtCore.Qt.GlobalColor.red)
        painter.drawEllipse(vector_to_qpoint(p), 4.0, 4.0)

    @override
    def paintEvent(self, event: QtGui.QPaintEvent):
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), QtCore.Qt.GlobalColor.white)

        if self._curve.mode is CurveMode.FREEFORM:
            self._draw_handles(painter)
        self._draw_nodes(painter)
        self._draw_curve(painter)
        self._draw_selection(painter)

        painter.end()
