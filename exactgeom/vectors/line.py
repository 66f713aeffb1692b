"""
Коллекции прямых: Line2Vector (ax + by + c = 0) и Line3Vector (точка + направление).

Таблицы маршрутов повторяют возможности ядра: iso-прямоугольник,
iso-кубоид и окружность передаются ядру первым аргументом.
"""

from exactgeom.core.domain import Line2, Line3, Primitive
from exactgeom.dispatch import OTHER_FIRST, SELF_FIRST, DispatchTable
from exactgeom.vectors.base import GeometryVector

_LINE_2_DISTANCE = {
    Primitive.LINE: SELF_FIRST,
    Primitive.POINT: SELF_FIRST,
    Primitive.RAY: SELF_FIRST,
    Primitive.SEGMENT: SELF_FIRST,
    Primitive.TRIANGLE: SELF_FIRST,
}

_LINE_3_DISTANCE = {
    Primitive.LINE: SELF_FIRST,
    Primitive.PLANE: SELF_FIRST,
    Primitive.POINT: SELF_FIRST,
    Primitive.RAY: SELF_FIRST,
    Primitive.SEGMENT: SELF_FIRST,
}


class Line2Vector(GeometryVector):
    """Коллекция 2D прямых."""

    element_type = Line2
    dispatch_table = DispatchTable(
        intersection={
            Primitive.ISORECT: OTHER_FIRST,
            Primitive.LINE: SELF_FIRST,
            Primitive.POINT: SELF_FIRST,
            Primitive.RAY: SELF_FIRST,
            Primitive.SEGMENT: SELF_FIRST,
            Primitive.TRIANGLE: SELF_FIRST,
        },
        do_intersect={
            Primitive.CIRCLE: OTHER_FIRST,
            Primitive.ISORECT: OTHER_FIRST,
            Primitive.LINE: SELF_FIRST,
            Primitive.POINT: SELF_FIRST,
            Primitive.RAY: SELF_FIRST,
            Primitive.SEGMENT: SELF_FIRST,
            Primitive.TRIANGLE: SELF_FIRST,
        },
        squared_distance=_LINE_2_DISTANCE,
        distance_matrix=_LINE_2_DISTANCE,
    )


class Line3Vector(GeometryVector):
    """Коллекция 3D прямых."""

    element_type = Line3
    dispatch_table = DispatchTable(
        intersection={
            Primitive.ISOCUBE: OTHER_FIRST,
            Primitive.LINE: SELF_FIRST,
            Primitive.PLANE: SELF_FIRST,
            Primitive.POINT: SELF_FIRST,
            Primitive.RAY: SELF_FIRST,
            Primitive.SEGMENT: SELF_FIRST,
            Primitive.TRIANGLE: SELF_FIRST,
        },
        do_intersect={
            Primitive.ISOCUBE: OTHER_FIRST,
            Primitive.LINE: SELF_FIRST,
            Primitive.PLANE: SELF_FIRST,
            Primitive.POINT: SELF_FIRST,
            Primitive.RAY: SELF_FIRST,
            Primitive.SEGMENT: SELF_FIRST,
            Primitive.SPHERE: SELF_FIRST,
            Primitive.TETRAHEDRON: SELF_FIRST,
            Primitive.TRIANGLE: SELF_FIRST,
        },
        squared_distance=_LINE_3_DISTANCE,
        distance_matrix=_LINE_3_DISTANCE,
    )
