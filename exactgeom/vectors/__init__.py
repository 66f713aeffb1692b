"""
Vectors — типизированные коллекции примитивов.

Одна специализация GeometryVector на каждую пару (вид, размерность).
vector_type_for() находит специализацию, from_snapshot() восстанавливает
коллекцию из точного JSON snapshot.
"""

from typing import Any, Dict

from exactgeom.core.contracts import validate_geometry_vector
from exactgeom.core.domain import Primitive
from exactgeom.vectors.base import SNAPSHOT_SCHEMA_VERSION, GeometryVector
from exactgeom.vectors.line import Line2Vector, Line3Vector
from exactgeom.vectors.linear import Ray2Vector, Ray3Vector, Segment2Vector, Segment3Vector
from exactgeom.vectors.point import Point2Vector, Point3Vector
from exactgeom.vectors.shapes import (
    Circle2Vector,
    IsoCuboidVector,
    IsoRectangleVector,
    PlaneVector,
    SphereVector,
    TetrahedronVector,
    Triangle2Vector,
    Triangle3Vector,
)

_VECTOR_TYPES: dict[tuple[Primitive, int], type[GeometryVector]] = {
    (cls.geometry_type(), cls.dimensions()): cls
    for cls in (
        Point2Vector,
        Line2Vector,
        Ray2Vector,
        Segment2Vector,
        Triangle2Vector,
        IsoRectangleVector,
        Circle2Vector,
        Point3Vector,
        Line3Vector,
        Ray3Vector,
        Segment3Vector,
        Triangle3Vector,
        IsoCuboidVector,
        SphereVector,
        PlaneVector,
        TetrahedronVector,
    )
}


def vector_type_for(kind: Primitive | str, dim: int) -> type[GeometryVector]:
    """
    Специализация GeometryVector по виду и размерности.

    Raises:
        KeyError: Если такой коллекции нет (например, CIRCLE в 3D)
    """
    kind = Primitive(kind)
    try:
        return _VECTOR_TYPES[(kind, dim)]
    except KeyError:
        raise KeyError(f"No {dim}D vector of kind {kind.value!r}") from None


def from_snapshot(data: Dict[str, Any]) -> GeometryVector:
    """
    Коллекция из snapshot, созданного GeometryVector.to_snapshot().

    Raises:
        ValidationError: Если snapshot не соответствует контракту
        KeyError: Если пары (geometry_type, dimensions) не существует
        ValueError: Если def_names не совпадают с определением примитива
            или строка не задаёт валидный примитив
    """
    validate_geometry_vector(data)

    cls = vector_type_for(data["geometry_type"], data["dimensions"])
    if list(data["def_names"]) != cls.def_names():
        raise ValueError(
            f"def_names {data['def_names']} do not match {cls.__name__} "
            f"({cls.def_names()})"
        )
    return cls.from_definitions(data["definitions"])


__all__ = [
    "SNAPSHOT_SCHEMA_VERSION",
    "GeometryVector",
    "Circle2Vector",
    "IsoCuboidVector",
    "IsoRectangleVector",
    "Line2Vector",
    "Line3Vector",
    "PlaneVector",
    "Point2Vector",
    "Point3Vector",
    "Ray2Vector",
    "Ray3Vector",
    "Segment2Vector",
    "Segment3Vector",
    "SphereVector",
    "TetrahedronVector",
    "Triangle2Vector",
    "Triangle3Vector",
    "from_snapshot",
    "vector_type_for",
]
