from PySide6 import QtCore

from cusp.core import Vector2D


def qpoint_to_vector(p: QtCore.QPointF) -> Vector2D:
    return Vector2D.from_tuple((p.x(), p.y()))

def vector_to_qpoint(v: Vector2D) -> QtCore.QPointF:
    return QtCore.QPointF(*v.to_tuple())
