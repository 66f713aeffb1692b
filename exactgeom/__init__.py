"""
exactgeom — пакетные геометрические операции в точной арифметике.

Типизированные коллекции примитивов (GeometryVector) и double-dispatch
бинарных операций (intersection, do_intersect, squared_distance,
distance_matrix) на конкретный алгоритм ядра по паре видов примитивов.
"""

from exactgeom.core.domain import IntersectionKind, IntersectionResult, Primitive
from exactgeom.core.exceptions import (
    DimensionMismatchError,
    GeometryError,
    GeometryTypeError,
    IncompatibleLengthError,
    KernelError,
    MissingValueError,
    UnsupportedGeometryPairError,
)
from exactgeom.core.math import ExactNumber
from exactgeom.dispatch import DispatchConfig, DispatchEngine, default_engine
from exactgeom.vectors import (
    Circle2Vector,
    GeometryVector,
    IsoCuboidVector,
    IsoRectangleVector,
    Line2Vector,
    Line3Vector,
    PlaneVector,
    Point2Vector,
    Point3Vector,
    Ray2Vector,
    Ray3Vector,
    Segment2Vector,
    Segment3Vector,
    SphereVector,
    TetrahedronVector,
    Triangle2Vector,
    Triangle3Vector,
    from_snapshot,
    vector_type_for,
)

__version__ = "0.3.0"

__all__ = [
    # Domain
    "ExactNumber",
    "IntersectionKind",
    "IntersectionResult",
    "Primitive",
    # Exceptions
    "DimensionMismatchError",
    "GeometryError",
    "GeometryTypeError",
    "IncompatibleLengthError",
    "KernelError",
    "MissingValueError",
    "UnsupportedGeometryPairError",
    # Dispatch
    "DispatchConfig",
    "DispatchEngine",
    "default_engine",
    # Vectors
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
