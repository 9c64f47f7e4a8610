from PySide6 import QtCore, QtWidgets
from PySide6.QtCore import Qt, Signal

from cusp.core import CurveMode
from cusp.widgets import CurveCanvasWidget

MODE_LABELS = {
    CurveMode.INTERPOLATED: "Cubic Spline Interpolation",
    CurveMode.FREEFORM: "Freeform",
}


class ModeSelectorWidget(QtWidgets.QWidget):

    mode_changed = Signal(CurveMode)

    def __init__(self, mode: CurveMode = CurveMode.INTERPOLATED, parent=None):
        super().__init__(parent)

        self.select_box = QtWidgets.QComboBox()
        for m, label in MODE_LABELS.items():
            self.select_box.addItem(label, m.value)
        self.text = QtWidgets.QLabel("Mode: ")
        self.layout = QtWidgets.QHBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.layout.addWidget(self.text, alignment=Qt.AlignmentFlag.AlignLeft)
        self.layout.addWidget(self.select_box, alignment=Qt.AlignmentFlag.AlignLeft)

        self.set_mode(mode)
        self.select_box.currentIndexChanged.connect(self._on_mode_changed)

    @property
    def mode(self) -> CurveMode:
        return CurveMode(self.select_box.currentData())

    def set_mode(self, mode: CurveMode) -> None:
        index = self.select_box.findData(mode.value)
        if index != self.select_box.currentIndex():
            self.select_box.blockSignals(True)
            self.select_box.setCurrentIndex(index)
            self.select_box.blockSignals(False)

    def _on_mode_changed(self, index: int):
        self.mode_changed.emit(self.mode)


class Bar(QtWidgets.QToolBar):
    """Toolbar above the canvas: new curve and mode switch."""

    def __init__(self, canvas: CurveCanvasWidget):
        super().__init__()

        self.canvas = canvas
        self.new_button = QtWidgets.QPushButton("new")
        self.setObjectName("Bar")
        self.setMovable(False)
        self.setFloatable(False)
        self.setIconSize(QtCore.QSize(18, 18))
        self.mode_selector = ModeSelectorWidget(canvas.curve.mode)

        self.addWidget(self.new_button)
        self.addWidget(self.mode_selector)

        self.mode_selector.mode_changed.connect(self.canvas.set_mode)
        self.canvas.curveChanged.connect(self._sync_mode)

    @QtCore.Slot()
    def _sync_mode(self):
        self.mode_selector.set_mode(self.canvas.curve.mode)
