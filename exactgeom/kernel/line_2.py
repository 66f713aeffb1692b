"""
Алгоритмы 2D для прямых — пересечение, предикат пересечения, квадрат расстояния

Прямая a*x + b*y + c = 0, функция стороны f(p) = a*x + b*y + c.
Квадрат расстояния от точки до прямой: f(p)^2 / (a^2 + b^2).

Соглашения:
- совпадающие прямые пересекаются по самой прямой (первый аргумент)
- параллельные различные прямые не пересекаются; квадрат расстояния между
  ними равен истинному квадрату расстояния (x=0 и x=5 → 25)
- пересечение с выпуклой фигурой (треугольник, iso-прямоугольник): отрезок
  по направлению прямой (b, -a) или точка
"""

from fractions import Fraction
from typing import Sequence

from exactgeom.core.domain import (
    Circle2,
    IntersectionResult,
    IsoRectangle,
    Line2,
    Point2,
    Ray2,
    Segment2,
    Triangle2,
)
from exactgeom.kernel.registry import GeometryKernel


def _norm2(line: Line2) -> Fraction:
    return line.a * line.a + line.b * line.b


def _side(line: Line2, p: Point2) -> Fraction:
    return line.value_at(p.x, p.y)


def _intersect_parametric(
    line: Line2, x: Fraction, y: Fraction, dx: Fraction, dy: Fraction
) -> tuple[Fraction | None, bool]:
    """
    Параметр t точки (x + t*dx, y + t*dy) на прямой.

    Returns:
        (t, collinear): t=None если направление параллельно прямой;
        collinear=True если при этом параметрическая прямая лежит на прямой
    """
    f = line.value_at(x, y)
    g = line.a * dx + line.b * dy
    if g == 0:
        return None, f == 0
    return -f / g, False


def _intersect_convex(line: Line2, vertices: Sequence[Point2]) -> IntersectionResult:
    """Пересечение прямой с выпуклым многоугольником (вершины по обходу)."""
    values = [_side(line, v) for v in vertices]
    points: list[Point2] = []

    def keep(p: Point2) -> None:
        if p not in points:
            points.append(p)

    count = len(vertices)
    for i in range(count):
        v, w = vertices[i], vertices[(i + 1) % count]
        fv, fw = values[i], values[(i + 1) % count]
        if fv == 0:
            keep(v)
        if (fv < 0 < fw) or (fw < 0 < fv):
            t = fv / (fv - fw)
            keep(Point2(x=v.x + t * (w.x - v.x), y=v.y + t * (w.y - v.y)))

    if not points:
        return IntersectionResult.empty()
    if len(points) == 1:
        return IntersectionResult.of(points[0])

    dx, dy = line.direction()
    ordered = sorted(points, key=lambda p: dx * p.x + dy * p.y)
    return IntersectionResult.of(Segment2.from_points(ordered[0], ordered[-1]))


# =============================================================================
# INTERSECTION
# =============================================================================


def intersect_line_line(l1: Line2, l2: Line2) -> IntersectionResult:
    det = l1.a * l2.b - l2.a * l1.b
    if det != 0:
        x = (l1.b * l2.c - l2.b * l1.c) / det
        y = (l2.a * l1.c - l1.a * l2.c) / det
        return IntersectionResult.of(Point2(x=x, y=y))

    # Параллельны: совпадают, если (a2, b2, c2) пропорционален (a1, b1, c1)
    if l1.a * l2.c == l2.a * l1.c and l1.b * l2.c == l2.b * l1.c:
        return IntersectionResult.of(l1)
    return IntersectionResult.empty()


def intersect_line_point(line: Line2, point: Point2) -> IntersectionResult:
    if _side(line, point) == 0:
        return IntersectionResult.of(point)
    return IntersectionResult.empty()


def intersect_line_ray(line: Line2, ray: Ray2) -> IntersectionResult:
    t, collinear = _intersect_parametric(line, ray.x, ray.y, ray.dx, ray.dy)
    if t is None:
        return IntersectionResult.of(ray) if collinear else IntersectionResult.empty()
    if t < 0:
        return IntersectionResult.empty()
    return IntersectionResult.of(Point2(x=ray.x + t * ray.dx, y=ray.y + t * ray.dy))


def intersect_line_segment(line: Line2, segment: Segment2) -> IntersectionResult:
    dx, dy = segment.x1 - segment.x0, segment.y1 - segment.y0
    t, collinear = _intersect_parametric(line, segment.x0, segment.y0, dx, dy)
    if t is None:
        return IntersectionResult.of(segment) if collinear else IntersectionResult.empty()
    if t < 0 or t > 1:
        return IntersectionResult.empty()
    return IntersectionResult.of(Point2(x=segment.x0 + t * dx, y=segment.y0 + t * dy))


def intersect_line_triangle(line: Line2, triangle: Triangle2) -> IntersectionResult:
    return _intersect_convex(line, triangle.vertices())


def intersect_iso_rectangle_line(rect: IsoRectangle, line: Line2) -> IntersectionResult:
    return _intersect_convex(line, rect.vertices())


def intersect_point_point(p: Point2, q: Point2) -> IntersectionResult:
    return IntersectionResult.of(p) if p == q else IntersectionResult.empty()


# =============================================================================
# DO INTERSECT
# =============================================================================


def do_intersect_circle_line(circle: Circle2, line: Line2) -> bool:
    f = _side(line, circle.center())
    return f * f <= circle.r2 * _norm2(line)


# =============================================================================
# SQUARED DISTANCE
# =============================================================================


def squared_distance_line_point(line: Line2, point: Point2) -> Fraction:
    f = _side(line, point)
    return f * f / _norm2(line)


def squared_distance_line_line(l1: Line2, l2: Line2) -> Fraction:
    if l1.a * l2.b - l2.a * l1.b != 0:
        return Fraction(0)
    # Параллельные прямые: квадрат расстояния между ними (как в CGAL), не 0
    return squared_distance_line_point(l1, l2.point())


def squared_distance_line_ray(line: Line2, ray: Ray2) -> Fraction:
    t, _ = _intersect_parametric(line, ray.x, ray.y, ray.dx, ray.dy)
    if t is not None and t >= 0:
        return Fraction(0)
    return squared_distance_line_point(line, ray.source())


def _squared_distance_vertices(line: Line2, vertices: Sequence[Point2]) -> Fraction:
    values = [_side(line, v) for v in vertices]
    if min(values) <= 0 <= max(values):
        return Fraction(0)
    nearest = min(abs(f) for f in values)
    return nearest * nearest / _norm2(line)


def squared_distance_line_segment(line: Line2, segment: Segment2) -> Fraction:
    return _squared_distance_vertices(line, (segment.source(), segment.target()))


def squared_distance_line_triangle(line: Line2, triangle: Triangle2) -> Fraction:
    return _squared_distance_vertices(line, triangle.vertices())


def squared_distance_point_point(p: Point2, q: Point2) -> Fraction:
    dx, dy = q.x - p.x, q.y - p.y
    return dx * dx + dy * dy


# =============================================================================
# INSTALL
# =============================================================================


def install(kernel: GeometryKernel) -> None:
    """Регистрация 2D алгоритмов в ядре."""
    kernel.register_intersection(Line2, Line2, intersect_line_line)
    kernel.register_intersection(Line2, Point2, intersect_line_point)
    kernel.register_intersection(Line2, Ray2, intersect_line_ray)
    kernel.register_intersection(Line2, Segment2, intersect_line_segment)
    kernel.register_intersection(Line2, Triangle2, intersect_line_triangle)
    kernel.register_intersection(IsoRectangle, Line2, intersect_iso_rectangle_line)
    kernel.register_intersection(Point2, Point2, intersect_point_point)

    kernel.register_do_intersect(Circle2, Line2, do_intersect_circle_line)

    kernel.register_squared_distance(Line2, Line2, squared_distance_line_line)
    kernel.register_squared_distance(Line2, Point2, squared_distance_line_point)
    kernel.register_squared_distance(Line2, Ray2, squared_distance_line_ray)
    kernel.register_squared_distance(Line2, Segment2, squared_distance_line_segment)
    kernel.register_squared_distance(Line2, Triangle2, squared_distance_line_triangle)
    kernel.register_squared_distance(Point2, Point2, squared_distance_point_point)
