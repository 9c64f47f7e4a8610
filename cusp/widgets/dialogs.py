from PySide6 import QtWidgets

from cusp.config import DEFAULT_EXPORT_SUBDIVISIONS


def _buttons(dialog: QtWidgets.QDialog) -> QtWidgets.QDialogButtonBox:
    box = QtWidgets.QDialogButtonBox(
        QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel,
        dialog)
    box.accepted.connect(dialog.accept)
    box.rejected.connect(dialog.reject)
    return box


class PointCoordsDialog(QtWidgets.QDialog):
    """Explicit coordinate entry for the selected node."""

    def __init__(self, x: float, y: float, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Point coordinates")

        self._x = QtWidgets.QDoubleSpinBox()
        self._y = QtWidgets.QDoubleSpinBox()
        for box, value in ((self._x, x), (self._y, y)):
            box.setRange(-100000.0, 100000.0)
            box.setDecimals(3)
            box.setValue(value)

        form = QtWidgets.QFormLayout(self)
        form.addRow("X", self._x)
        form.addRow("Y", self._y)
        form.addRow(_buttons(self))

    def coords(self) -> tuple[float, float]:
        return self._x.value(), self._y.value()


class CanvasSizeDialog(QtWidgets.QDialog):

    def __init__(self, width: int, height: int, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Canvas Size")

        self._width = QtWidgets.QSpinBox()
        self._height = QtWidgets.QSpinBox()
        for box, value in ((self._width, width), (self._height, height)):
            box.setRange(100, 10000)
            box.setSuffix(" px")
            box.setValue(value)

        form = QtWidgets.QFormLayout(self)
        form.addRow("Width", self._width)
        form.addRow("Height", self._height)
        form.addRow(_buttons(self))

    def canvas_size(self) -> tuple[int, int]:
        return self._width.value(), self._height.value()


class ExportDialog(QtWidgets.QDialog):
    """
    Target file and number of sampled points for a CSV export.
    Ok is only honoured once a file name was entered.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Export Spline to CSV")

        self._filename = QtWidgets.QLineEdit()
        self._filename.setMinimumWidth(200)
        browse = QtWidgets.QPushButton("Browse...")
        browse.clicked.connect(self._browse)

        file_row = QtWidgets.QHBoxLayout()
        file_row.addWidget(self._filename)
        file_row.addWidget(browse)

        self._subdivisions = QtWidgets.QSpinBox()
        self._subdivisions.setRange(1, 100000)
        self._subdivisions.setValue(DEFAULT_EXPORT_SUBDIVISIONS)

        form = QtWidgets.QFormLayout(self)
        form.addRow("Export to file", file_row)
        form.addRow("Points", self._subdivisions)
        form.addRow(_buttons(self))

    def _browse(self):
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Export Spline", self._filename.text(),
                                                        "CSV (*.csv);;All files (*)")
        if path:
            self._filename.setText(path)

    def accept(self):
        if not self._filename.text().strip():
            return
        super().accept()

    def export_file(self) -> str:
        return self._filename.text().strip()

    def subdivisions(self) -> int:
        return self._subdivisions.value()
