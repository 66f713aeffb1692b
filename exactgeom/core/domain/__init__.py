"""
Domain models and value objects.

Contains the primitive kind registry, immutable exact primitives and the
tagged intersection result.
"""

from exactgeom.core.domain.base import ExactScalar, GeometricPrimitive, coerce_exact
from exactgeom.core.domain.intersection_result import IntersectionResult
from exactgeom.core.domain.kinds import IntersectionKind, Primitive
from exactgeom.core.domain.primitives_2d import (
    Circle2,
    IsoRectangle,
    Line2,
    Point2,
    Ray2,
    Segment2,
    Triangle2,
)
from exactgeom.core.domain.primitives_3d import (
    IsoCuboid,
    Line3,
    Plane,
    Point3,
    Ray3,
    Segment3,
    Sphere,
    Tetrahedron,
    Triangle3,
)

# =============================================================================
# PRIMITIVE TYPE REGISTRY
# =============================================================================

_PRIMITIVE_TYPES: dict[tuple[Primitive, int], type[GeometricPrimitive]] = {
    (cls.kind, cls.dim): cls
    for cls in (
        Point2, Line2, Ray2, Segment2, Triangle2, IsoRectangle, Circle2,
        Point3, Line3, Ray3, Segment3, Triangle3, IsoCuboid, Plane, Sphere, Tetrahedron,
    )
}


def primitive_type(kind: Primitive, dim: int) -> type[GeometricPrimitive]:
    """
    Конкретный тип примитива по виду и размерности.

    Raises:
        KeyError: Если пара (kind, dim) не существует (например, CIRCLE в 3D)
    """
    try:
        return _PRIMITIVE_TYPES[(kind, dim)]
    except KeyError:
        raise KeyError(f"No {dim}D primitive of kind {kind.value!r}") from None


__all__ = [
    # Kinds
    "IntersectionKind",
    "Primitive",
    # Base
    "ExactScalar",
    "GeometricPrimitive",
    "coerce_exact",
    # 2D primitives
    "Circle2",
    "IsoRectangle",
    "Line2",
    "Point2",
    "Ray2",
    "Segment2",
    "Triangle2",
    # 3D primitives
    "IsoCuboid",
    "Line3",
    "Plane",
    "Point3",
    "Ray3",
    "Segment3",
    "Sphere",
    "Tetrahedron",
    "Triangle3",
    # Results
    "IntersectionResult",
    # Registry
    "primitive_type",
]
