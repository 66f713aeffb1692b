"""
Коллекции фигур: треугольники, iso-боксы, окружность/сфера, плоскость,
тетраэдр.

Маршрут каждой фигуры ведёт к прямой. Порядок аргументов совпадает с
регистрацией в ядре: iso-боксы и окружность первыми, остальные вторыми.
"""

from exactgeom.core.domain import (
    Circle2,
    IsoCuboid,
    IsoRectangle,
    Plane,
    Primitive,
    Sphere,
    Tetrahedron,
    Triangle2,
    Triangle3,
)
from exactgeom.dispatch import OTHER_FIRST, SELF_FIRST, DispatchTable
from exactgeom.vectors.base import GeometryVector

_LINE_OTHER_FIRST = {Primitive.LINE: OTHER_FIRST}
_LINE_SELF_FIRST = {Primitive.LINE: SELF_FIRST}


class Triangle2Vector(GeometryVector):
    element_type = Triangle2
    dispatch_table = DispatchTable(
        intersection=_LINE_OTHER_FIRST,
        do_intersect=_LINE_OTHER_FIRST,
        squared_distance=_LINE_OTHER_FIRST,
        distance_matrix=_LINE_OTHER_FIRST,
    )


class Triangle3Vector(GeometryVector):
    element_type = Triangle3
    dispatch_table = DispatchTable(
        intersection=_LINE_OTHER_FIRST,
        do_intersect=_LINE_OTHER_FIRST,
    )


class IsoRectangleVector(GeometryVector):
    element_type = IsoRectangle
    dispatch_table = DispatchTable(
        intersection=_LINE_SELF_FIRST,
        do_intersect=_LINE_SELF_FIRST,
    )


class IsoCuboidVector(GeometryVector):
    element_type = IsoCuboid
    dispatch_table = DispatchTable(
        intersection=_LINE_SELF_FIRST,
        do_intersect=_LINE_SELF_FIRST,
    )


class Circle2Vector(GeometryVector):
    element_type = Circle2
    dispatch_table = DispatchTable(do_intersect=_LINE_SELF_FIRST)


class SphereVector(GeometryVector):
    element_type = Sphere
    dispatch_table = DispatchTable(do_intersect=_LINE_OTHER_FIRST)


class TetrahedronVector(GeometryVector):
    element_type = Tetrahedron
    dispatch_table = DispatchTable(do_intersect=_LINE_OTHER_FIRST)


class PlaneVector(GeometryVector):
    element_type = Plane
    dispatch_table = DispatchTable(
        intersection=_LINE_OTHER_FIRST,
        do_intersect=_LINE_OTHER_FIRST,
        squared_distance=_LINE_OTHER_FIRST,
        distance_matrix=_LINE_OTHER_FIRST,
    )
