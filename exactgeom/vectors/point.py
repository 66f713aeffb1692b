"""Коллекции точек: Point2Vector, Point3Vector."""

from exactgeom.core.domain import Point2, Point3, Primitive
from exactgeom.dispatch import OTHER_FIRST, SELF_FIRST, DispatchTable
from exactgeom.vectors.base import GeometryVector

# Точка идёт вторым аргументом к прямой и первым к другой точке
_POINT_ROUTES = {
    Primitive.LINE: OTHER_FIRST,
    Primitive.POINT: SELF_FIRST,
}

_POINT_TABLE = DispatchTable(
    intersection=_POINT_ROUTES,
    do_intersect=_POINT_ROUTES,
    squared_distance=_POINT_ROUTES,
    distance_matrix=_POINT_ROUTES,
)


class Point2Vector(GeometryVector):
    element_type = Point2
    dispatch_table = _POINT_TABLE


class Point3Vector(GeometryVector):
    element_type = Point3
    dispatch_table = _POINT_TABLE
