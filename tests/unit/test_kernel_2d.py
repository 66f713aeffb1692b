"""
Тесты 2D алгоритмов ядра для прямых

Coverage:
- Пересечение прямой с прямой, точкой, лучом, отрезком, треугольником,
  iso-прямоугольником
- Предикат пересечения окружности и прямой
- Квадраты расстояний (точные)
- Регистрация в ядре и векторизованные формы (broadcast, пустые операнды)
"""

from fractions import Fraction

import pytest

from exactgeom.core.domain import (
    Circle2,
    IntersectionKind,
    IsoRectangle,
    Line2,
    Point2,
    Ray2,
    Segment2,
    Triangle2,
)
from exactgeom.core.exceptions import IncompatibleLengthError, KernelError
from exactgeom.core.math import ExactNumber
from exactgeom.kernel import GeometryKernel, TypedStorage, broadcast_length, build_kernel
from exactgeom.kernel import line_2

X_AXIS = Line2(a=0, b=1, c=0)  # y = 0
Y_AXIS = Line2(a=1, b=0, c=0)  # x = 0


def storage(element_type, *items):
    return TypedStorage(element_type=element_type, items=tuple(items))


# =============================================================================
# INTERSECTION
# =============================================================================


class TestLineLine:
    """Пересечение двух прямых"""

    def test_crossing_lines_meet_in_point(self) -> None:
        result = line_2.intersect_line_line(X_AXIS, Line2(a=1, b=-1, c=-2))
        assert result.kind == IntersectionKind.POINT
        assert result.geometry == Point2(x=2, y=0)

    def test_exact_rational_point(self) -> None:
        # x + 2y = 1, 3x - y = 0 → x = 1/7, y = 3/7
        result = line_2.intersect_line_line(Line2(a=1, b=2, c=-1), Line2(a=3, b=-1, c=0))
        assert result.geometry == Point2(x="1/7", y="3/7")

    def test_identical_lines_intersect_in_line(self) -> None:
        result = line_2.intersect_line_line(Y_AXIS, Y_AXIS)
        assert result.kind == IntersectionKind.PRIMITIVE
        assert result.geometry == Y_AXIS

    def test_proportional_coefficients_are_same_line(self) -> None:
        l1 = Line2(a=1, b=1, c=-1)
        result = line_2.intersect_line_line(l1, Line2(a=-2, b=-2, c=2))
        assert result.geometry == l1

    def test_parallel_distinct_lines_empty(self) -> None:
        assert line_2.intersect_line_line(Y_AXIS, Line2(a=1, b=0, c=-5)).is_empty()


class TestLineOthers:
    """Пересечение прямой с точкой, лучом, отрезком"""

    def test_point_on_line(self) -> None:
        result = line_2.intersect_line_point(Y_AXIS, Point2(x=0, y=7))
        assert result.geometry == Point2(x=0, y=7)

    def test_point_off_line(self) -> None:
        assert line_2.intersect_line_point(Y_AXIS, Point2(x=1, y=7)).is_empty()

    def test_ray_crossing(self) -> None:
        ray = Ray2(x=-2, y=1, dx=1, dy=0)
        assert line_2.intersect_line_ray(Y_AXIS, ray).geometry == Point2(x=0, y=1)

    def test_ray_pointing_away(self) -> None:
        ray = Ray2(x=-2, y=1, dx=-1, dy=0)
        assert line_2.intersect_line_ray(Y_AXIS, ray).is_empty()

    def test_ray_on_line(self) -> None:
        ray = Ray2(x=0, y=1, dx=0, dy=3)
        result = line_2.intersect_line_ray(Y_AXIS, ray)
        assert result.kind == IntersectionKind.PRIMITIVE
        assert result.geometry == ray

    def test_segment_crossing(self) -> None:
        segment = Segment2(x0=-1, y0=0, x1=3, y1=4)
        assert line_2.intersect_line_segment(Y_AXIS, segment).geometry == Point2(x=0, y=1)

    def test_segment_endpoint_touch(self) -> None:
        segment = Segment2(x0=0, y0=2, x1=3, y1=4)
        assert line_2.intersect_line_segment(Y_AXIS, segment).geometry == Point2(x=0, y=2)

    def test_segment_short_of_line(self) -> None:
        segment = Segment2(x0=1, y0=0, x1=3, y1=4)
        assert line_2.intersect_line_segment(Y_AXIS, segment).is_empty()

    def test_segment_on_line(self) -> None:
        segment = Segment2(x0=0, y0=0, x1=0, y1=4)
        assert line_2.intersect_line_segment(Y_AXIS, segment).geometry == segment


class TestLineConvex:
    """Пересечение прямой с треугольником и iso-прямоугольником"""

    TRIANGLE = Triangle2(x0=-1, y0=0, x1=1, y1=0, x2=0, y2=2)

    def test_triangle_chord(self) -> None:
        result = line_2.intersect_line_triangle(Line2(a=0, b=1, c=-1), self.TRIANGLE)
        assert result.kind == IntersectionKind.PRIMITIVE
        assert result.geometry.definition() == (
            Fraction(-1, 2), 1, Fraction(1, 2), 1,
        )

    def test_chord_ordered_along_line_direction(self) -> None:
        # Противоположное направление меняет порядок концов отрезка
        result = line_2.intersect_line_triangle(Line2(a=0, b=-1, c=1), self.TRIANGLE)
        assert result.geometry.source() == Point2(x="1/2", y=1)
        assert result.geometry.target() == Point2(x="-1/2", y=1)

    def test_triangle_vertex_touch(self) -> None:
        result = line_2.intersect_line_triangle(Line2(a=0, b=1, c=-2), self.TRIANGLE)
        assert result.kind == IntersectionKind.POINT
        assert result.geometry == Point2(x=0, y=2)

    def test_triangle_edge_overlap(self) -> None:
        result = line_2.intersect_line_triangle(X_AXIS, self.TRIANGLE)
        assert result.geometry == Segment2(x0=-1, y0=0, x1=1, y1=0)

    def test_triangle_miss(self) -> None:
        assert line_2.intersect_line_triangle(Line2(a=0, b=1, c=-3), self.TRIANGLE).is_empty()

    def test_iso_rectangle_diagonal(self) -> None:
        rect = IsoRectangle(xmin=0, ymin=0, xmax=2, ymax=2)
        line = Line2.through(Point2(x=0, y=0), Point2(x=1, y=1))
        result = line_2.intersect_iso_rectangle_line(rect, line)
        assert result.geometry == Segment2(x0=0, y0=0, x1=2, y1=2)

    def test_iso_rectangle_miss(self) -> None:
        rect = IsoRectangle(xmin=0, ymin=0, xmax=2, ymax=2)
        assert line_2.intersect_iso_rectangle_line(rect, Line2(a=1, b=0, c=5)).is_empty()


# =============================================================================
# DO INTERSECT / SQUARED DISTANCE
# =============================================================================


class TestCircleLine:
    """Предикат окружность — прямая"""

    @pytest.mark.parametrize(
        "r2, expected",
        [(Fraction(4), False), (Fraction(9), True), (Fraction(16), True)],
    )
    def test_circle_against_vertical_line(self, r2, expected) -> None:
        circle = Circle2(x=3, y=0, r2=r2)
        assert line_2.do_intersect_circle_line(circle, Y_AXIS) is expected


class TestSquaredDistance:
    """Точные квадраты расстояний"""

    def test_line_point(self) -> None:
        # 3x + 4y = 0, точка (3, 4): f = 25, |n|^2 = 25 → 25
        assert line_2.squared_distance_line_point(Line2(a=3, b=4, c=0), Point2(x=3, y=4)) == 25

    def test_line_point_rational(self) -> None:
        assert line_2.squared_distance_line_point(Line2(a=1, b=1, c=0), Point2(x=1, y=0)) == Fraction(1, 2)

    def test_parallel_lines_true_distance(self) -> None:
        """x = 0 и x = 5 → 25"""
        assert line_2.squared_distance_line_line(Y_AXIS, Line2(a=1, b=0, c=-5)) == 25

    def test_crossing_lines_zero(self) -> None:
        assert line_2.squared_distance_line_line(Y_AXIS, X_AXIS) == 0

    def test_ray_towards_and_away(self) -> None:
        assert line_2.squared_distance_line_ray(Y_AXIS, Ray2(x=3, y=0, dx=-1, dy=5)) == 0
        assert line_2.squared_distance_line_ray(Y_AXIS, Ray2(x=3, y=0, dx=1, dy=5)) == 9

    def test_ray_parallel(self) -> None:
        assert line_2.squared_distance_line_ray(Y_AXIS, Ray2(x=-2, y=0, dx=0, dy=1)) == 4

    def test_segment(self) -> None:
        assert line_2.squared_distance_line_segment(Y_AXIS, Segment2(x0=2, y0=0, x1=5, y1=1)) == 4
        assert line_2.squared_distance_line_segment(Y_AXIS, Segment2(x0=-2, y0=0, x1=5, y1=1)) == 0

    def test_triangle(self) -> None:
        triangle = Triangle2(x0=3, y0=0, x1=6, y1=0, x2=4, y2=2)
        assert line_2.squared_distance_line_triangle(Y_AXIS, triangle) == 9

    def test_point_point(self) -> None:
        assert line_2.squared_distance_point_point(Point2(x=0, y=0), Point2(x=3, y=4)) == 25


# =============================================================================
# KERNEL REGISTRY
# =============================================================================


class TestBroadcastLength:
    """Согласование длин поэлементных операций"""

    @pytest.mark.parametrize(
        "n, m, expected",
        [
            (3, 3, 3), (1, 4, 4), (4, 1, 4), (0, 0, 0), (1, 0, 0), (0, 1, 0),
            (1, 1, 1), (0, 2, 0), (5, 0, 0),
        ],
    )
    def test_compatible(self, n, m, expected) -> None:
        assert broadcast_length(n, m) == expected

    @pytest.mark.parametrize("n, m", [(2, 3), (3, 2), (2, 5)])
    def test_incompatible(self, n, m) -> None:
        with pytest.raises(IncompatibleLengthError):
            broadcast_length(n, m)


class TestGeometryKernel:
    """Векторизованные формы и поиск алгоритмов"""

    def test_elementwise_pairs(self) -> None:
        kernel = build_kernel()
        lines = storage(Line2, Y_AXIS, X_AXIS)
        points = storage(Point2, Point2(x=0, y=3), Point2(x=3, y=0))
        assert kernel.do_intersect(lines, points) == [True, True]

    def test_single_element_broadcasts(self) -> None:
        kernel = build_kernel()
        lines = storage(Line2, Y_AXIS)
        points = storage(Point2, Point2(x=0, y=3), Point2(x=2, y=0), Point2(x=-1, y=1))
        result = kernel.squared_distance(lines, points)
        assert result == [ExactNumber(0), ExactNumber(4), ExactNumber(1)]

    def test_empty_operand_empty_result(self) -> None:
        kernel = build_kernel()
        assert kernel.intersection(storage(Line2, Y_AXIS), storage(Point2)) == []

    def test_length_mismatch(self) -> None:
        kernel = build_kernel()
        lines = storage(Line2, Y_AXIS, X_AXIS)
        points = storage(Point2, Point2(x=0, y=0), Point2(x=1, y=0), Point2(x=2, y=0))
        with pytest.raises(IncompatibleLengthError):
            kernel.intersection(lines, points)

    def test_do_intersect_derived_from_intersection(self) -> None:
        kernel = build_kernel()
        rect = storage(IsoRectangle, IsoRectangle(xmin=0, ymin=0, xmax=1, ymax=1))
        lines = storage(Line2, Line2(a=1, b=0, c="-1/2"), Line2(a=1, b=0, c=-2))
        assert kernel.do_intersect(rect, lines) == [True, False]

    def test_distance_matrix_cross_product(self) -> None:
        kernel = build_kernel()
        lines = storage(Line2, Y_AXIS, Line2(a=1, b=0, c=-1))
        points = storage(Point2, Point2(x=0, y=0), Point2(x=5, y=0), Point2(x=-1, y=9))
        grid = kernel.distance_matrix(lines, points)
        assert [[cell.exact for cell in row] for row in grid] == [[0, 25, 1], [1, 16, 4]]

    def test_argument_order_matters(self) -> None:
        kernel = build_kernel()
        assert kernel.supports("intersection", IsoRectangle, Line2)
        assert not kernel.supports("intersection", Line2, IsoRectangle)
        assert kernel.supports("do_intersect", Circle2, Line2)
        assert kernel.supports("distance_matrix", Line2, Point2)

    def test_unknown_operation(self) -> None:
        with pytest.raises(ValueError):
            build_kernel().supports("volume", Line2, Line2)

    def test_missing_algorithm(self) -> None:
        kernel = GeometryKernel()
        with pytest.raises(KernelError, match=r"\(Line2, Point2\)"):
            kernel.squared_distance(storage(Line2, Y_AXIS), storage(Point2, Point2(x=0, y=0)))

    def test_register_as_decorator(self) -> None:
        kernel = GeometryKernel()

        @kernel.register_squared_distance(Point2, Point2)
        def manhattan_squared(p, q):
            return (abs(p.x - q.x) + abs(p.y - q.y)) ** 2

        assert manhattan_squared(Point2(x=0, y=0), Point2(x=1, y=1)) == 4
        result = kernel.squared_distance(
            storage(Point2, Point2(x=0, y=0)), storage(Point2, Point2(x=1, y=2))
        )
        assert result == [ExactNumber(9)]
        assert kernel.supports("do_intersect", Point2, Point2) is False
