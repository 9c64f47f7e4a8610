import logging
import os
import sys

from PySide6 import QtGui, QtWidgets

from cusp.config import SPLINE_EXTENSION, LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL
from cusp.core import CurveModel, CurveMode, CurveIO, CurveFileError, NodeSelection
from cusp.logging_config import setup_logging
from cusp.menu import Bar
from cusp.widgets import CurveCanvasWidget, PointCoordsDialog, CanvasSizeDialog, ExportDialog
from cusp.widgets.canvas import READY

logger = logging.getLogger(__name__)

SPLINE_FILTER = f"Cusp Spline (*.{SPLINE_EXTENSION})"


class CuspWindow(QtWidgets.QMainWindow):
    """
    Editor shell: menus, toolbar and status bar around one CurveCanvasWidget.
    """

    def __init__(self, curve: CurveModel | None = None):
        super().__init__()
        self.setWindowTitle("Cusp")

        self.curve = curve if curve is not None else CurveModel(CurveMode.INTERPOLATED)
        self.canvas = CurveCanvasWidget(self.curve, self)
        self.top_bar = Bar(self.canvas)
        self._spline_file: str | None = None

        self.setCentralWidget(self.canvas)
        self.addToolBar(self.top_bar)
        self.statusBar().showMessage(READY)

        self._init_menus()

        self.top_bar.new_button.clicked.connect(self.new_spline)
        self.canvas.statusChanged.connect(self.statusBar().showMessage)
        self.canvas.curveChanged.connect(self._refresh_actions)
        self.canvas.selectionChanged.connect(self._refresh_actions)
        self._refresh_actions()

    # ---- menus -------------------------------------------------------------
    def _init_menus(self):
        bar = self.menuBar()

        file_menu = bar.addMenu("&File")
        file_menu.addAction("New Spline", self.new_spline)
        file_menu.addSeparator()
        file_menu.addAction("Load", self.load_spline)
        self.save_action = file_menu.addAction("Save", self.save_spline)
        self.export_action = file_menu.addAction("Export CSV", self.export_spline)
        self.export_cp_action = file_menu.addAction("Export Control Points", self.export_control_points)
        file_menu.addSeparator()
        file_menu.addAction("Exit", self.close)

        edit_menu = bar.addMenu("&Edit")
        edit_menu.addAction("Canvas Size", self.change_canvas_size)

        spline_menu = bar.addMenu("&Spline")
        self.point_coords_action = spline_menu.addAction("Set point coords", self.set_point_coords)
        spline_menu.addSeparator()
        spline_menu.addAction("Flip Horizontally", self.canvas.flip_horizontal)
        spline_menu.addAction("Flip Vertically", self.canvas.flip_vertical)
        spline_menu.addSeparator()

        group = QtGui.QActionGroup(self)
        self.mode_actions = {}
        for mode, label in ((CurveMode.FREEFORM, "Freeform"),
                            (CurveMode.INTERPOLATED, "Cubic Spline Interpolation")):
            action = spline_menu.addAction(label)
            action.setCheckable(True)
            action.setChecked(self.curve.mode is mode)
            action.triggered.connect(lambda checked=False, m=mode: self.canvas.set_mode(m))
            group.addAction(action)
            self.mode_actions[mode] = action

    def _refresh_actions(self):
        has_points = len(self.curve) > 0
        self.save_action.setEnabled(has_points)
        self.export_action.setEnabled(has_points)
        self.export_cp_action.setEnabled(has_points)
        self.point_coords_action.setEnabled(isinstance(self.curve.selection, NodeSelection))
        self.mode_actions[self.curve.mode].setChecked(True)

    # ---- helpers -----------------------------------------------------------
    def _confirm(self, title: str, text: str) -> bool:
        answer = QtWidgets.QMessageBox.question(self, title, text)
        return answer == QtWidgets.QMessageBox.StandardButton.Yes

    def _report(self, title: str, err: CurveFileError):
        QtWidgets.QMessageBox.warning(self, title, str(err))

    # ---- actions -----------------------------------------------------------
    def new_spline(self):
        if len(self.curve) > 0 and self.curve.dirty:
            if not self._confirm("Confirm losing previous data", "Your previous spline will be lost. Continue ?"):
                return
        self._spline_file = None
        self.canvas.reset_curve()

    def load_spline(self):
        if len(self.curve) > 0:
            if not self._confirm("Confirm losing previous data", "Your previous spline will be lost. Continue ?"):
                return
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Load Spline", os.getcwd(), SPLINE_FILTER)
        if not path:
            return
        try:
            CurveIO.load(self.curve, path)
        except CurveFileError as err:
            self._report("Error loading spline", err)
            return
        self._spline_file = path
        self.canvas.curveChanged.emit()
        self.canvas.selectionChanged.emit()

    def save_spline(self):
        start = self._spline_file or os.getcwd()
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Save Spline", start, SPLINE_FILTER)
        if not path:
            return
        try:
            written = CurveIO.save(self.curve, path)
        except CurveFileError as err:
            self._report("Error saving spline", err)
            return
        if written is not None:
            self._spline_file = str(written)

    def export_spline(self):
        dialog = ExportDialog(self)
        if dialog.exec() != QtWidgets.QDialog.DialogCode.Accepted:
            return
        try:
            CurveIO.export_samples(self.curve, dialog.export_file(), dialog.subdivisions())
        except CurveFileError as err:
            self._report("Error exporting spline", err)

    def export_control_points(self):
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Export Control Points", os.getcwd(),
                                                        "CSV (*.csv);;All files (*)")
        if not path:
            return
        try:
            CurveIO.export_control_points(self.curve, path)
        except CurveFileError as err:
            self._report("Error exporting control points", err)

    def change_canvas_size(self):
        dialog = CanvasSizeDialog(self.canvas.width(), self.canvas.height(), self)
        if dialog.exec() != QtWidgets.QDialog.DialogCode.Accepted:
            return
        width, height = dialog.canvas_size()
        self.canvas.setFixedSize(width, height)
        self.adjustSize()
        self.statusBar().showMessage(f"{READY}  ({width},{height})")

    def set_point_coords(self):
        p = self.curve.selected_position()
        if p is None or not self.canvas.has_node_selected():
            return
        dialog = PointCoordsDialog(p.x, p.y, self)
        if dialog.exec() == QtWidgets.QDialog.DialogCode.Accepted:
            self.canvas.set_selected_point_coords(*dialog.coords())

    def closeEvent(self, event):
        if self.curve.dirty:
            text = "Any unsaved changes will be lost. Are you sure you want to exit ?"
            title = "Spline unsaved"
        else:
            text = "Are you sure you want to exit Cusp ?"
            title = "Exit confirmation"
        if self._confirm(title, text):
            event.accept()
        else:
            event.ignore()


def main() -> int:
    setup_logging(os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL))
    logger.info("Starting Cusp")
    app = QtWidgets.QApplication(sys.argv)

    window = CuspWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
