"""
Коллекции лучей и отрезков.

Единственный маршрут ведёт к прямой той же размерности; ядро принимает прямую
первым аргументом.
"""

from exactgeom.core.domain import Primitive, Ray2, Ray3, Segment2, Segment3
from exactgeom.dispatch import OTHER_FIRST, DispatchTable
from exactgeom.vectors.base import GeometryVector

_TO_LINE = {Primitive.LINE: OTHER_FIRST}

_LINEAR_TABLE = DispatchTable(
    intersection=_TO_LINE,
    do_intersect=_TO_LINE,
    squared_distance=_TO_LINE,
    distance_matrix=_TO_LINE,
)


class Ray2Vector(GeometryVector):
    element_type = Ray2
    dispatch_table = _LINEAR_TABLE


class Ray3Vector(GeometryVector):
    element_type = Ray3
    dispatch_table = _LINEAR_TABLE


class Segment2Vector(GeometryVector):
    element_type = Segment2
    dispatch_table = _LINEAR_TABLE


class Segment3Vector(GeometryVector):
    element_type = Segment3
    dispatch_table = _LINEAR_TABLE
