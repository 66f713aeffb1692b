"""
Примитивы 3D — Point3, Line3, Ray3, Segment3, Triangle3, Plane, Sphere,
Tetrahedron, IsoCuboid

Immutable Pydantic модели с точными скалярами.
Line3 задаётся точкой при параметре 0 и направлением (6 скаляров).
"""

from fractions import Fraction
from typing import ClassVar

from pydantic import model_validator

from exactgeom.core.domain.base import ExactScalar, GeometricPrimitive, coerce_exact
from exactgeom.core.domain.kinds import Primitive

Vec3 = tuple[Fraction, Fraction, Fraction]


def _cross(u: Vec3, v: Vec3) -> Vec3:
    return (
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    )


# =============================================================================
# POINT
# =============================================================================


class Point3(GeometricPrimitive):
    """Точка в пространстве."""

    kind: ClassVar[Primitive] = Primitive.POINT
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x", "y", "z")

    x: ExactScalar
    y: ExactScalar
    z: ExactScalar

    def coords(self) -> Vec3:
        return (self.x, self.y, self.z)

    @classmethod
    def from_coords(cls, coords: Vec3) -> "Point3":
        return cls(x=coords[0], y=coords[1], z=coords[2])


# =============================================================================
# LINE
# =============================================================================


class Line3(GeometricPrimitive):
    """Прямая: точка (x, y, z) при параметре 0 и ненулевое направление (dx, dy, dz)."""

    kind: ClassVar[Primitive] = Primitive.LINE
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x", "y", "z", "dx", "dy", "dz")

    x: ExactScalar
    y: ExactScalar
    z: ExactScalar
    dx: ExactScalar
    dy: ExactScalar
    dz: ExactScalar

    @model_validator(mode="after")
    def validate_direction(self) -> "Line3":
        if self.dx == 0 and self.dy == 0 and self.dz == 0:
            raise ValueError("Line3 direction must be non-zero")
        return self

    @classmethod
    def through(cls, p: Point3, q: Point3) -> "Line3":
        return cls(x=p.x, y=p.y, z=p.z, dx=q.x - p.x, dy=q.y - p.y, dz=q.z - p.z)

    def point(self) -> Point3:
        return Point3(x=self.x, y=self.y, z=self.z)

    def origin(self) -> Vec3:
        return (self.x, self.y, self.z)

    def direction(self) -> Vec3:
        return (self.dx, self.dy, self.dz)

    def opposite(self) -> "Line3":
        return Line3(x=self.x, y=self.y, z=self.z, dx=-self.dx, dy=-self.dy, dz=-self.dz)


# =============================================================================
# RAY
# =============================================================================


class Ray3(GeometricPrimitive):
    """Луч: начало (x, y, z) и ненулевое направление (dx, dy, dz)."""

    kind: ClassVar[Primitive] = Primitive.RAY
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x", "y", "z", "dx", "dy", "dz")

    x: ExactScalar
    y: ExactScalar
    z: ExactScalar
    dx: ExactScalar
    dy: ExactScalar
    dz: ExactScalar

    @model_validator(mode="after")
    def validate_direction(self) -> "Ray3":
        if self.dx == 0 and self.dy == 0 and self.dz == 0:
            raise ValueError("Ray3 direction must be non-zero")
        return self

    def origin(self) -> Vec3:
        return (self.x, self.y, self.z)

    def direction(self) -> Vec3:
        return (self.dx, self.dy, self.dz)


# =============================================================================
# SEGMENT
# =============================================================================


class Segment3(GeometricPrimitive):
    """Отрезок от (x0, y0, z0) до (x1, y1, z1); концы различны."""

    kind: ClassVar[Primitive] = Primitive.SEGMENT
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x0", "y0", "z0", "x1", "y1", "z1")

    x0: ExactScalar
    y0: ExactScalar
    z0: ExactScalar
    x1: ExactScalar
    y1: ExactScalar
    z1: ExactScalar

    @model_validator(mode="after")
    def validate_endpoints(self) -> "Segment3":
        if (self.x0, self.y0, self.z0) == (self.x1, self.y1, self.z1):
            raise ValueError("Segment3 start and end must be different points")
        return self

    @classmethod
    def from_coords(cls, p: Vec3, q: Vec3) -> "Segment3":
        return cls(x0=p[0], y0=p[1], z0=p[2], x1=q[0], y1=q[1], z1=q[2])

    def source(self) -> Vec3:
        return (self.x0, self.y0, self.z0)

    def target(self) -> Vec3:
        return (self.x1, self.y1, self.z1)


# =============================================================================
# TRIANGLE
# =============================================================================


class Triangle3(GeometricPrimitive):
    """Треугольник в пространстве по трём неколлинеарным вершинам."""

    kind: ClassVar[Primitive] = Primitive.TRIANGLE
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = (
        "x0", "y0", "z0", "x1", "y1", "z1", "x2", "y2", "z2",
    )

    x0: ExactScalar
    y0: ExactScalar
    z0: ExactScalar
    x1: ExactScalar
    y1: ExactScalar
    z1: ExactScalar
    x2: ExactScalar
    y2: ExactScalar
    z2: ExactScalar

    @model_validator(mode="after")
    def validate_not_collinear(self) -> "Triangle3":
        if self.normal() == (0, 0, 0):
            raise ValueError("Triangle3 vertices must not be collinear")
        return self

    def vertices(self) -> tuple[Vec3, Vec3, Vec3]:
        return (
            (self.x0, self.y0, self.z0),
            (self.x1, self.y1, self.z1),
            (self.x2, self.y2, self.z2),
        )

    def normal(self) -> Vec3:
        """Ненормированная нормаль (q - p) x (r - p)."""
        p, q, r = self.vertices()
        return _cross(
            (q[0] - p[0], q[1] - p[1], q[2] - p[2]),
            (r[0] - p[0], r[1] - p[1], r[2] - p[2]),
        )


# =============================================================================
# PLANE
# =============================================================================


class Plane(GeometricPrimitive):
    """Плоскость a*x + b*y + c*z + d = 0; нормаль (a, b, c) ненулевая."""

    kind: ClassVar[Primitive] = Primitive.PLANE
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("a", "b", "c", "d")

    a: ExactScalar
    b: ExactScalar
    c: ExactScalar
    d: ExactScalar

    @model_validator(mode="after")
    def validate_normal(self) -> "Plane":
        if self.a == 0 and self.b == 0 and self.c == 0:
            raise ValueError("Plane normal (a, b, c) must be non-zero")
        return self

    def normal(self) -> Vec3:
        return (self.a, self.b, self.c)

    def value_at(self, p: Vec3) -> Fraction:
        """Значение a*x + b*y + c*z + d: знак задаёт сторону точки."""
        return self.a * p[0] + self.b * p[1] + self.c * p[2] + self.d


# =============================================================================
# SPHERE
# =============================================================================


class Sphere(GeometricPrimitive):
    """Сфера: центр (x, y, z) и квадрат радиуса r2 >= 0."""

    kind: ClassVar[Primitive] = Primitive.SPHERE
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x", "y", "z", "r2")

    x: ExactScalar
    y: ExactScalar
    z: ExactScalar
    r2: ExactScalar

    @model_validator(mode="after")
    def validate_radius(self) -> "Sphere":
        if self.r2 < 0:
            raise ValueError(f"Sphere squared radius must be non-negative, got {self.r2}")
        return self

    def center(self) -> Vec3:
        return (self.x, self.y, self.z)


# =============================================================================
# TETRAHEDRON
# =============================================================================


class Tetrahedron(GeometricPrimitive):
    """Тетраэдр по четырём некомпланарным вершинам."""

    kind: ClassVar[Primitive] = Primitive.TETRAHEDRON
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = (
        "x0", "y0", "z0", "x1", "y1", "z1", "x2", "y2", "z2", "x3", "y3", "z3",
    )

    x0: ExactScalar
    y0: ExactScalar
    z0: ExactScalar
    x1: ExactScalar
    y1: ExactScalar
    z1: ExactScalar
    x2: ExactScalar
    y2: ExactScalar
    z2: ExactScalar
    x3: ExactScalar
    y3: ExactScalar
    z3: ExactScalar

    @model_validator(mode="after")
    def validate_not_coplanar(self) -> "Tetrahedron":
        p, q, r, s = self.vertices()
        u = (q[0] - p[0], q[1] - p[1], q[2] - p[2])
        v = (r[0] - p[0], r[1] - p[1], r[2] - p[2])
        w = (s[0] - p[0], s[1] - p[1], s[2] - p[2])
        n = _cross(u, v)
        if n[0] * w[0] + n[1] * w[1] + n[2] * w[2] == 0:
            raise ValueError("Tetrahedron vertices must not be coplanar")
        return self

    def vertices(self) -> tuple[Vec3, Vec3, Vec3, Vec3]:
        return (
            (self.x0, self.y0, self.z0),
            (self.x1, self.y1, self.z1),
            (self.x2, self.y2, self.z2),
            (self.x3, self.y3, self.z3),
        )

    def faces(self) -> tuple[Triangle3, Triangle3, Triangle3, Triangle3]:
        p, q, r, s = self.vertices()
        return tuple(
            Triangle3(
                x0=a[0], y0=a[1], z0=a[2],
                x1=b[0], y1=b[1], z1=b[2],
                x2=c[0], y2=c[1], z2=c[2],
            )
            for a, b, c in ((p, q, r), (p, q, s), (p, r, s), (q, r, s))
        )


# =============================================================================
# ISO CUBOID
# =============================================================================


class IsoCuboid(GeometricPrimitive):
    """
    Параллелепипед со сторонами, параллельными осям.

    Углы нормализуются покоординатно: min <= max.
    """

    kind: ClassVar[Primitive] = Primitive.ISOCUBE
    dim: ClassVar[int] = 3
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("xmin", "ymin", "zmin", "xmax", "ymax", "zmax")

    xmin: ExactScalar
    ymin: ExactScalar
    zmin: ExactScalar
    xmax: ExactScalar
    ymax: ExactScalar
    zmax: ExactScalar

    @model_validator(mode="before")
    @classmethod
    def normalize_corners(cls, data: object) -> object:
        if isinstance(data, dict) and all(k in data for k in cls.DEF_NAMES):
            data = dict(data)
            for axis in ("x", "y", "z"):
                lo, hi = sorted((coerce_exact(data[f"{axis}min"]), coerce_exact(data[f"{axis}max"])))
                data[f"{axis}min"] = lo
                data[f"{axis}max"] = hi
        return data

    def bounds(self) -> tuple[Vec3, Vec3]:
        return (self.xmin, self.ymin, self.zmin), (self.xmax, self.ymax, self.zmax)
