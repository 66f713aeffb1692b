"""
Алгоритмы 3D для прямых — пересечение, предикат пересечения, квадрат расстояния

Прямая o + t*d. Квадрат расстояния от точки q до прямой:
|(q - o) x d|^2 / |d|^2.

Соглашения:
- совпадающие прямые пересекаются по самой прямой (первый аргумент)
- прямая в плоскости пересекает её по самой прямой
- скрещивающиеся и параллельные различные прямые не пересекаются
- пересечение с iso-кубоидом: отсечение по слоям (slab clipping):
  отрезок по направлению прямой или точка
"""

from fractions import Fraction
from typing import Optional

from exactgeom.core.domain import (
    IntersectionKind,
    IntersectionResult,
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
from exactgeom.kernel.algebra import Vec3, add, cross, dot, is_zero, scale, sub
from exactgeom.kernel.registry import GeometryKernel


def _point(coords: Vec3) -> Point3:
    return Point3.from_coords(coords)


def _collect_segment(line: Line3, points: list[Vec3]) -> IntersectionResult:
    """Точки на прямой → EMPTY / POINT / Segment3 по направлению прямой."""
    unique: list[Vec3] = []
    for p in points:
        if p not in unique:
            unique.append(p)

    if not unique:
        return IntersectionResult.empty()
    if len(unique) == 1:
        return IntersectionResult.of(_point(unique[0]))

    d = line.direction()
    ordered = sorted(unique, key=lambda p: dot(p, d))
    return IntersectionResult.of(Segment3.from_coords(ordered[0], ordered[-1]))


# =============================================================================
# INTERSECTION
# =============================================================================


def intersect_line_line(l1: Line3, l2: Line3) -> IntersectionResult:
    d1, d2 = l1.direction(), l2.direction()
    w = sub(l2.origin(), l1.origin())
    n = cross(d1, d2)

    if is_zero(n):
        if is_zero(cross(w, d1)):
            return IntersectionResult.of(l1)
        return IntersectionResult.empty()

    # Скрещивающиеся прямые
    if dot(w, n) != 0:
        return IntersectionResult.empty()

    t = dot(cross(w, d2), n) / dot(n, n)
    return IntersectionResult.of(_point(add(l1.origin(), scale(d1, t))))


def intersect_line_plane(line: Line3, plane: Plane) -> IntersectionResult:
    f = plane.value_at(line.origin())
    g = dot(plane.normal(), line.direction())
    if g == 0:
        return IntersectionResult.of(line) if f == 0 else IntersectionResult.empty()
    t = -f / g
    return IntersectionResult.of(_point(add(line.origin(), scale(line.direction(), t))))


def intersect_line_point(line: Line3, point: Point3) -> IntersectionResult:
    if is_zero(cross(sub(point.coords(), line.origin()), line.direction())):
        return IntersectionResult.of(point)
    return IntersectionResult.empty()


def intersect_line_ray(line: Line3, ray: Ray3) -> IntersectionResult:
    support = Line3(x=ray.x, y=ray.y, z=ray.z, dx=ray.dx, dy=ray.dy, dz=ray.dz)
    result = intersect_line_line(line, support)
    if result.kind == IntersectionKind.PRIMITIVE:
        return IntersectionResult.of(ray)
    if result.kind == IntersectionKind.POINT:
        if dot(sub(result.geometry.coords(), ray.origin()), ray.direction()) < 0:
            return IntersectionResult.empty()
    return result


def intersect_line_segment(line: Line3, segment: Segment3) -> IntersectionResult:
    s, e = segment.source(), sub(segment.target(), segment.source())
    support = Line3(x=s[0], y=s[1], z=s[2], dx=e[0], dy=e[1], dz=e[2])
    result = intersect_line_line(line, support)
    if result.kind == IntersectionKind.PRIMITIVE:
        return IntersectionResult.of(segment)
    if result.kind == IntersectionKind.POINT:
        u = dot(sub(result.geometry.coords(), s), e)
        if u < 0 or u > dot(e, e):
            return IntersectionResult.empty()
    return result


def intersect_line_triangle(line: Line3, triangle: Triangle3) -> IntersectionResult:
    vertices = triangle.vertices()
    n = triangle.normal()
    o, d = line.origin(), line.direction()
    f = dot(n, sub(o, vertices[0]))
    g = dot(n, d)

    if g != 0:
        x = add(o, scale(d, -f / g))
        for i in range(3):
            a, b = vertices[i], vertices[(i + 1) % 3]
            if dot(cross(sub(b, a), sub(x, a)), n) < 0:
                return IntersectionResult.empty()
        return IntersectionResult.of(_point(x))

    if f != 0:
        return IntersectionResult.empty()

    # Прямая в плоскости треугольника: пересечение с рёбрами
    points: list[Vec3] = []
    for i in range(3):
        edge = Segment3.from_coords(vertices[i], vertices[(i + 1) % 3])
        hit = intersect_line_segment(line, edge)
        if hit.kind == IntersectionKind.POINT:
            points.append(hit.geometry.coords())
        elif hit.kind == IntersectionKind.PRIMITIVE:
            points.extend((edge.source(), edge.target()))
    return _collect_segment(line, points)


def intersect_iso_cuboid_line(box: IsoCuboid, line: Line3) -> IntersectionResult:
    o, d = line.origin(), line.direction()
    lower, upper = box.bounds()
    t_min: Optional[Fraction] = None
    t_max: Optional[Fraction] = None

    for axis in range(3):
        if d[axis] == 0:
            if o[axis] < lower[axis] or o[axis] > upper[axis]:
                return IntersectionResult.empty()
            continue
        t1 = (lower[axis] - o[axis]) / d[axis]
        t2 = (upper[axis] - o[axis]) / d[axis]
        if t1 > t2:
            t1, t2 = t2, t1
        t_min = t1 if t_min is None else max(t_min, t1)
        t_max = t2 if t_max is None else min(t_max, t2)

    # Направление ненулевое, значит хотя бы одна ось ограничила параметр
    if t_min > t_max:
        return IntersectionResult.empty()
    if t_min == t_max:
        return IntersectionResult.of(_point(add(o, scale(d, t_min))))
    return IntersectionResult.of(
        Segment3.from_coords(add(o, scale(d, t_min)), add(o, scale(d, t_max)))
    )


def intersect_point_point(p: Point3, q: Point3) -> IntersectionResult:
    return IntersectionResult.of(p) if p == q else IntersectionResult.empty()


# =============================================================================
# DO INTERSECT
# =============================================================================


def do_intersect_line_sphere(line: Line3, sphere: Sphere) -> bool:
    return squared_distance_line_point(line, _point(sphere.center())) <= sphere.r2


def do_intersect_line_tetrahedron(line: Line3, tetrahedron: Tetrahedron) -> bool:
    # Ограниченное тело: прямая пересекает его тогда и только тогда,
    # когда пересекает границу
    return any(
        not intersect_line_triangle(line, face).is_empty()
        for face in tetrahedron.faces()
    )


# =============================================================================
# SQUARED DISTANCE
# =============================================================================


def _perpendicular(line: Line3, v: Vec3) -> Vec3:
    """Составляющая v, ортогональная направлению прямой."""
    d = line.direction()
    return sub(v, scale(d, dot(v, d) / dot(d, d)))


def _squared_distance_param(
    line: Line3, start: Vec3, step: Vec3, upper: Optional[Fraction]
) -> Fraction:
    """
    Квадрат расстояния от прямой до множества start + u*step, u in [0, upper].

    Квадрат расстояния есть выпуклая квадратичная функция u, поэтому минимум
    на отрезке равен безусловному минимуму, прижатому к границам.
    """
    ps = _perpendicular(line, sub(start, line.origin()))
    pe = _perpendicular(line, step)
    a = dot(pe, pe)

    u = Fraction(0)
    if a != 0:
        u = max(Fraction(0), -dot(ps, pe) / a)
        if upper is not None:
            u = min(u, upper)

    q = add(ps, scale(pe, u))
    return dot(q, q)


def squared_distance_line_point(line: Line3, point: Point3) -> Fraction:
    c = cross(sub(point.coords(), line.origin()), line.direction())
    return dot(c, c) / dot(line.direction(), line.direction())


def squared_distance_line_line(l1: Line3, l2: Line3) -> Fraction:
    n = cross(l1.direction(), l2.direction())
    if is_zero(n):
        return squared_distance_line_point(l1, l2.point())
    w = dot(sub(l2.origin(), l1.origin()), n)
    return w * w / dot(n, n)


def squared_distance_line_plane(line: Line3, plane: Plane) -> Fraction:
    if dot(plane.normal(), line.direction()) != 0:
        return Fraction(0)
    f = plane.value_at(line.origin())
    return f * f / dot(plane.normal(), plane.normal())


def squared_distance_line_ray(line: Line3, ray: Ray3) -> Fraction:
    return _squared_distance_param(line, ray.origin(), ray.direction(), upper=None)


def squared_distance_line_segment(line: Line3, segment: Segment3) -> Fraction:
    step = sub(segment.target(), segment.source())
    return _squared_distance_param(line, segment.source(), step, upper=Fraction(1))


def squared_distance_point_point(p: Point3, q: Point3) -> Fraction:
    v = sub(q.coords(), p.coords())
    return dot(v, v)


# =============================================================================
# INSTALL
# =============================================================================


def install(kernel: GeometryKernel) -> None:
    """Регистрация 3D алгоритмов в ядре."""
    kernel.register_intersection(Line3, Line3, intersect_line_line)
    kernel.register_intersection(Line3, Plane, intersect_line_plane)
    kernel.register_intersection(Line3, Point3, intersect_line_point)
    kernel.register_intersection(Line3, Ray3, intersect_line_ray)
    kernel.register_intersection(Line3, Segment3, intersect_line_segment)
    kernel.register_intersection(Line3, Triangle3, intersect_line_triangle)
    kernel.register_intersection(IsoCuboid, Line3, intersect_iso_cuboid_line)
    kernel.register_intersection(Point3, Point3, intersect_point_point)

    kernel.register_do_intersect(Line3, Sphere, do_intersect_line_sphere)
    kernel.register_do_intersect(Line3, Tetrahedron, do_intersect_line_tetrahedron)

    kernel.register_squared_distance(Line3, Line3, squared_distance_line_line)
    kernel.register_squared_distance(Line3, Plane, squared_distance_line_plane)
    kernel.register_squared_distance(Line3, Point3, squared_distance_line_point)
    kernel.register_squared_distance(Line3, Ray3, squared_distance_line_ray)
    kernel.register_squared_distance(Line3, Segment3, squared_distance_line_segment)
    kernel.register_squared_distance(Point3, Point3, squared_distance_point_point)
