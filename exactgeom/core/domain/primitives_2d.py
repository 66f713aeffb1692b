"""
Примитивы 2D — Point2, Line2, Ray2, Segment2, Triangle2, IsoRectangle, Circle2

Immutable Pydantic модели с точными скалярами. Вырожденные прямые, лучи,
отрезки и треугольники отклоняются при создании.
"""

from fractions import Fraction
from typing import ClassVar

from pydantic import model_validator

from exactgeom.core.domain.base import ExactScalar, GeometricPrimitive, coerce_exact
from exactgeom.core.domain.kinds import Primitive


# =============================================================================
# POINT
# =============================================================================


class Point2(GeometricPrimitive):
    """Точка на плоскости."""

    kind: ClassVar[Primitive] = Primitive.POINT
    dim: ClassVar[int] = 2
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x", "y")

    x: ExactScalar
    y: ExactScalar

    def coords(self) -> tuple[Fraction, Fraction]:
        return (self.x, self.y)


# =============================================================================
# LINE
# =============================================================================


class Line2(GeometricPrimitive):
    """
    Прямая a*x + b*y + c = 0.

    Направление прямой — (b, -a); (a, b) не может быть нулевым вектором.
    """

    kind: ClassVar[Primitive] = Primitive.LINE
    dim: ClassVar[int] = 2
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("a", "b", "c")

    a: ExactScalar
    b: ExactScalar
    c: ExactScalar

    @model_validator(mode="after")
    def validate_not_degenerate(self) -> "Line2":
        if self.a == 0 and self.b == 0:
            raise ValueError("Line2 requires a and b not both zero")
        return self

    @classmethod
    def through(cls, p: Point2, q: Point2) -> "Line2":
        """Прямая через две различные точки, направленная от p к q."""
        return cls(a=p.y - q.y, b=q.x - p.x, c=p.x * q.y - p.y * q.x)

    def value_at(self, x: Fraction, y: Fraction) -> Fraction:
        """Значение a*x + b*y + c: знак задаёт сторону точки относительно прямой."""
        return self.a * x + self.b * y + self.c

    def direction(self) -> tuple[Fraction, Fraction]:
        return (self.b, -self.a)

    def point(self) -> Point2:
        """Точка прямой (пересечение с осью, которую прямая пересекает)."""
        if self.b != 0:
            return Point2(x=0, y=-self.c / self.b)
        return Point2(x=-self.c / self.a, y=0)

    def opposite(self) -> "Line2":
        """Та же прямая с противоположным направлением."""
        return Line2(a=-self.a, b=-self.b, c=-self.c)


# =============================================================================
# RAY
# =============================================================================


class Ray2(GeometricPrimitive):
    """Луч: начало (x, y) и ненулевое направление (dx, dy)."""

    kind: ClassVar[Primitive] = Primitive.RAY
    dim: ClassVar[int] = 2
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x", "y", "dx", "dy")

    x: ExactScalar
    y: ExactScalar
    dx: ExactScalar
    dy: ExactScalar

    @model_validator(mode="after")
    def validate_direction(self) -> "Ray2":
        if self.dx == 0 and self.dy == 0:
            raise ValueError("Ray2 direction must be non-zero")
        return self

    def source(self) -> Point2:
        return Point2(x=self.x, y=self.y)


# =============================================================================
# SEGMENT
# =============================================================================


class Segment2(GeometricPrimitive):
    """Отрезок от (x0, y0) до (x1, y1); концы различны."""

    kind: ClassVar[Primitive] = Primitive.SEGMENT
    dim: ClassVar[int] = 2
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x0", "y0", "x1", "y1")

    x0: ExactScalar
    y0: ExactScalar
    x1: ExactScalar
    y1: ExactScalar

    @model_validator(mode="after")
    def validate_endpoints(self) -> "Segment2":
        if self.x0 == self.x1 and self.y0 == self.y1:
            raise ValueError("Segment2 start and end must be different points")
        return self

    @classmethod
    def from_points(cls, p: Point2, q: Point2) -> "Segment2":
        return cls(x0=p.x, y0=p.y, x1=q.x, y1=q.y)

    def source(self) -> Point2:
        return Point2(x=self.x0, y=self.y0)

    def target(self) -> Point2:
        return Point2(x=self.x1, y=self.y1)


# =============================================================================
# TRIANGLE
# =============================================================================


class Triangle2(GeometricPrimitive):
    """Треугольник по трём неколлинеарным вершинам."""

    kind: ClassVar[Primitive] = Primitive.TRIANGLE
    dim: ClassVar[int] = 2
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x0", "y0", "x1", "y1", "x2", "y2")

    x0: ExactScalar
    y0: ExactScalar
    x1: ExactScalar
    y1: ExactScalar
    x2: ExactScalar
    y2: ExactScalar

    @model_validator(mode="after")
    def validate_not_collinear(self) -> "Triangle2":
        area2 = (self.x1 - self.x0) * (self.y2 - self.y0) - (self.y1 - self.y0) * (self.x2 - self.x0)
        if area2 == 0:
            raise ValueError("Triangle2 vertices must not be collinear")
        return self

    @classmethod
    def from_points(cls, p: Point2, q: Point2, r: Point2) -> "Triangle2":
        return cls(x0=p.x, y0=p.y, x1=q.x, y1=q.y, x2=r.x, y2=r.y)

    def vertices(self) -> tuple[Point2, Point2, Point2]:
        return (
            Point2(x=self.x0, y=self.y0),
            Point2(x=self.x1, y=self.y1),
            Point2(x=self.x2, y=self.y2),
        )


# =============================================================================
# ISO RECTANGLE
# =============================================================================


class IsoRectangle(GeometricPrimitive):
    """
    Прямоугольник со сторонами, параллельными осям.

    Углы нормализуются: (xmin, ymin) <= (xmax, ymax) покоординатно.
    """

    kind: ClassVar[Primitive] = Primitive.ISORECT
    dim: ClassVar[int] = 2
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("xmin", "ymin", "xmax", "ymax")

    xmin: ExactScalar
    ymin: ExactScalar
    xmax: ExactScalar
    ymax: ExactScalar

    @model_validator(mode="before")
    @classmethod
    def normalize_corners(cls, data: object) -> object:
        if isinstance(data, dict) and all(k in data for k in cls.DEF_NAMES):
            data = dict(data)
            x_lo, x_hi = sorted((coerce_exact(data["xmin"]), coerce_exact(data["xmax"])))
            y_lo, y_hi = sorted((coerce_exact(data["ymin"]), coerce_exact(data["ymax"])))
            data.update(xmin=x_lo, xmax=x_hi, ymin=y_lo, ymax=y_hi)
        return data

    def vertices(self) -> tuple[Point2, Point2, Point2, Point2]:
        """Вершины против часовой стрелки начиная с (xmin, ymin)."""
        return (
            Point2(x=self.xmin, y=self.ymin),
            Point2(x=self.xmax, y=self.ymin),
            Point2(x=self.xmax, y=self.ymax),
            Point2(x=self.xmin, y=self.ymax),
        )


# =============================================================================
# CIRCLE
# =============================================================================


class Circle2(GeometricPrimitive):
    """Окружность: центр (x, y) и квадрат радиуса r2 >= 0."""

    kind: ClassVar[Primitive] = Primitive.CIRCLE
    dim: ClassVar[int] = 2
    DEF_NAMES: ClassVar[tuple[str, ...]] = ("x", "y", "r2")

    x: ExactScalar
    y: ExactScalar
    r2: ExactScalar

    @model_validator(mode="after")
    def validate_radius(self) -> "Circle2":
        if self.r2 < 0:
            raise ValueError(f"Circle2 squared radius must be non-negative, got {self.r2}")
        return self

    def center(self) -> Point2:
        return Point2(x=self.x, y=self.y)

