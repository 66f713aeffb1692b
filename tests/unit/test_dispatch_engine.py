"""
Тесты Dispatch Engine

Coverage:
- Проверка размерности до обращения к элементам
- Маршрутизация по виду и порядок аргументов ядра (SELF_FIRST / OTHER_FIRST)
- Политика fallback (ошибка / False / NA / NaN) и strict-режим
- Логирование fallback
- Транспонирование distance_matrix для OTHER_FIRST
- Согласованность таблиц маршрутов с ядром
"""

import logging
import math

import numpy as np
import pytest

from exactgeom import vectors
from exactgeom.core.domain import (
    Circle2,
    IntersectionKind,
    IsoCuboid,
    IsoRectangle,
    Line2,
    Line3,
    Point2,
    Point3,
    Primitive,
    Segment2,
    Sphere,
    primitive_type,
)
from exactgeom.core.exceptions import (
    DimensionMismatchError,
    IncompatibleLengthError,
    KernelError,
    UnsupportedGeometryPairError,
)
from exactgeom.core.math import ExactNumber
from exactgeom.dispatch import (
    DIMENSION_MISMATCH_MESSAGE,
    OTHER_FIRST,
    DispatchConfig,
    DispatchEngine,
    Operation,
    default_engine,
    materialize_distance_matrix,
    squared_to_distance,
)
from exactgeom.kernel import GeometryKernel, build_kernel
from exactgeom.vectors import (
    Circle2Vector,
    IsoCuboidVector,
    IsoRectangleVector,
    Line2Vector,
    Line3Vector,
    Point2Vector,
    Point3Vector,
    Segment2Vector,
    SphereVector,
)
from exactgeom.vectors.base import GeometryVector

ENGINE_LOGGER = "exactgeom.dispatch.engine"


@pytest.fixture
def vertical_lines():
    """x = 0 и x = 1."""
    return Line2Vector([Line2(a=1, b=0, c=0), Line2(a=1, b=0, c=-1)])


@pytest.fixture
def points():
    return Point2Vector([Point2(x=0, y=0), Point2(x=5, y=0), Point2(x=0, y=3)])


def all_vector_types():
    return [
        getattr(vectors, name)
        for name in vectors.__all__
        if name.endswith("Vector") and name != "GeometryVector"
    ]


# =============================================================================
# DIMENSION GUARD
# =============================================================================


class TestDimensionGuard:
    """Операнды разной размерности отклоняются"""

    @pytest.mark.parametrize("operation", list(Operation))
    def test_mismatch_raises_for_every_operation(self, operation) -> None:
        this = Line2Vector([Line2(a=1, b=0, c=0)])
        other = Line3Vector([Line3(x=0, y=0, z=0, dx=1, dy=0, dz=0)])
        with pytest.raises(DimensionMismatchError, match=DIMENSION_MISMATCH_MESSAGE):
            getattr(this, operation.value)(other)

    def test_checked_before_routing(self) -> None:
        """Даже для пары видов без маршрута ошибка — размерность"""
        with pytest.raises(DimensionMismatchError):
            Circle2Vector().do_intersect(SphereVector())

    def test_checked_for_empty_operands(self) -> None:
        with pytest.raises(DimensionMismatchError):
            Point3Vector().squared_distance(Point2Vector())


# =============================================================================
# ROUTING
# =============================================================================


class TestRouting:
    """Маршрутизация на алгоритмы ядра"""

    def test_self_first_intersection(self) -> None:
        lines = Line2Vector([Line2(a=1, b=0, c=0)])
        segments = Segment2Vector([Segment2(x0=-1, y0=1, x1=1, y1=1)])
        [result] = lines.intersection(segments)
        assert result.geometry == Point2(x=0, y=1)

    def test_iso_rectangle_passed_first(self) -> None:
        lines = Line2Vector([Line2(a=0, b=1, c=-1), Line2(a=0, b=1, c=-5)])
        rects = IsoRectangleVector([IsoRectangle(xmin=0, ymin=0, xmax=2, ymax=2)])
        results = lines.intersection(rects)
        assert results[0].geometry == Segment2(x0=0, y0=1, x1=2, y1=1)
        assert results[1].is_empty()
        assert rects.intersection(lines) == results

    def test_circle_line_both_directions(self) -> None:
        lines = Line2Vector([Line2(a=1, b=0, c=0)])
        circles = Circle2Vector([Circle2(x=3, y=0, r2=9), Circle2(x=3, y=0, r2=4)])
        assert lines.do_intersect(circles) == [True, False]
        assert circles.do_intersect(lines) == [True, False]

    def test_iso_cuboid_and_sphere_in_3d(self) -> None:
        line = Line3Vector([Line3(x=-1, y=1, z=1, dx=1, dy=0, dz=0)])
        boxes = IsoCuboidVector([IsoCuboid(xmin=0, ymin=0, zmin=0, xmax=2, ymax=2, zmax=2)])
        spheres = SphereVector([Sphere(x=0, y=5, z=1, r2=16)])
        assert line.do_intersect(boxes) == [True]
        assert boxes.intersection(line)[0].kind == IntersectionKind.PRIMITIVE
        assert line.do_intersect(spheres) == [True]
        assert spheres.do_intersect(line) == [True]

    def test_point_point(self) -> None:
        a = Point3Vector([Point3(x=1, y=2, z=3)])
        b = Point3Vector([Point3(x=1, y=2, z=3), Point3(x=0, y=0, z=0)])
        assert a.do_intersect(b) == [True, False]
        assert a.squared_distance(b) == [ExactNumber(0), ExactNumber(14)]

    def test_squared_distance_stays_exact(self) -> None:
        lines = Line2Vector([Line2(a=1, b=1, c=0)])
        pts = Point2Vector([Point2(x=1, y=0)])
        [distance] = lines.squared_distance(pts)
        assert str(distance) == "1/2"

    def test_broadcast_and_length_mismatch(self, vertical_lines, points) -> None:
        single = vertical_lines[:1]
        assert single.do_intersect(points) == [True, False, True]
        with pytest.raises(IncompatibleLengthError):
            vertical_lines.do_intersect(points)

    def test_empty_operand_yields_empty_result(self, vertical_lines) -> None:
        assert vertical_lines[:1].intersection(Point2Vector()) == []
        assert Line2Vector().squared_distance(Point2Vector([Point2(x=1, y=1)])) == []

    def test_empty_operand_against_longer_vector(self, points) -> None:
        """Пустой операнд даёт пустой результат при любой длине второго"""
        assert Line2Vector().do_intersect(points) == []
        assert Line2Vector().intersection(points) == []
        assert points.squared_distance(Line2Vector()) == []

    @pytest.mark.parametrize("operation", ["intersection", "do_intersect", "squared_distance"])
    def test_reversing_inputs_reverses_result(self, operation) -> None:
        """Результат i относится к паре (this[i], other[i]) при любой перестановке"""
        lines = Line2Vector(
            [Line2(a=1, b=0, c=0), Line2(a=1, b=0, c=-1), Line2(a=1, b=-1, c=0)]
        )
        pts = Point2Vector([Point2(x=0, y=3), Point2(x=5, y=0), Point2(x=3, y=0)])

        forward = getattr(lines, operation)(pts)
        backward = getattr(lines[::-1], operation)(pts[::-1])

        assert backward == forward[::-1]
        assert backward != forward

    def test_reversed_pairs_keep_exact_values(self) -> None:
        lines = Line2Vector(
            [Line2(a=1, b=0, c=0), Line2(a=1, b=0, c=-1), Line2(a=1, b=-1, c=0)]
        )
        pts = Point2Vector([Point2(x=0, y=3), Point2(x=5, y=0), Point2(x=3, y=0)])
        assert [str(d) for d in lines.squared_distance(pts)] == ["0", "16", "9/2"]
        assert [str(d) for d in lines[::-1].squared_distance(pts[::-1])] == ["9/2", "16", "0"]
        assert lines[::-1].do_intersect(pts[::-1]) == [False, False, True]

    def test_kernel_without_algorithm(self, vertical_lines, points) -> None:
        """Маршрут есть, алгоритма в ядре нет — ошибка ядра"""
        engine = DispatchEngine(kernel=GeometryKernel())
        with pytest.raises(KernelError):
            vertical_lines.squared_distance(points[:1], engine=engine)


# =============================================================================
# FALLBACK POLICY
# =============================================================================


class TestFallbackPolicy:
    """Пары видов без маршрута"""

    def test_intersection_raises(self, vertical_lines) -> None:
        circles = Circle2Vector([Circle2(x=0, y=0, r2=1)])
        with pytest.raises(
            UnsupportedGeometryPairError,
            match="Don't know how to calculate the intersection of these geometries",
        ):
            vertical_lines.intersection(circles)
        with pytest.raises(UnsupportedGeometryPairError):
            circles.intersection(vertical_lines)

    def test_do_intersect_false_of_max_length(self) -> None:
        spheres = SphereVector([Sphere(x=0, y=0, z=0, r2=1)] * 2)
        pts = Point3Vector([Point3(x=0, y=0, z=0)] * 3)
        assert spheres.do_intersect(pts) == [False, False, False]

    def test_squared_distance_na_of_max_length(self, vertical_lines) -> None:
        circles = Circle2Vector([Circle2(x=0, y=0, r2=1)] * 3)
        result = vertical_lines.squared_distance(circles)
        assert len(result) == 3
        assert all(value.is_na() for value in result)

    def test_distance_matrix_nan(self, vertical_lines) -> None:
        rects = IsoRectangleVector([IsoRectangle(xmin=0, ymin=0, xmax=1, ymax=1)] * 3)
        matrix = vertical_lines.distance_matrix(rects)
        assert matrix.shape == (2, 3)
        assert np.isnan(matrix).all()

    def test_fallback_logged(self, vertical_lines, caplog) -> None:
        circles = Circle2Vector([Circle2(x=0, y=0, r2=1)])
        with caplog.at_level(logging.WARNING, logger=ENGINE_LOGGER):
            vertical_lines.squared_distance(circles)
        assert "no squared_distance route for line2D x circle2D" in caplog.text

    def test_fallback_logging_disabled(self, vertical_lines, caplog) -> None:
        engine = DispatchEngine(config=DispatchConfig(log_fallbacks=False))
        circles = Circle2Vector([Circle2(x=0, y=0, r2=1)])
        with caplog.at_level(logging.WARNING, logger=ENGINE_LOGGER):
            vertical_lines.squared_distance(circles, engine=engine)
        assert caplog.records == []


class TestStrictMode:
    """DispatchConfig(strict_unsupported=True)"""

    @pytest.fixture
    def strict(self):
        return DispatchEngine(config=DispatchConfig(strict_unsupported=True))

    @pytest.mark.parametrize(
        "operation, label",
        [
            ("do_intersect", "intersection"),
            ("squared_distance", "squared distance"),
            ("distance_matrix", "distance matrix"),
        ],
    )
    def test_soft_fallbacks_become_errors(self, strict, vertical_lines, operation, label) -> None:
        circles = Circle2Vector([Circle2(x=0, y=0, r2=1)])
        with pytest.raises(UnsupportedGeometryPairError, match=f"calculate the {label} of"):
            getattr(vertical_lines, operation)(circles, engine=strict)

    def test_supported_pairs_unaffected(self, strict, vertical_lines, points) -> None:
        matrix = vertical_lines.distance_matrix(points, engine=strict)
        assert matrix.shape == (2, 3)


# =============================================================================
# DISTANCE MATRIX
# =============================================================================


class TestDistanceMatrix:
    """Материализация и ориентация distance_matrix"""

    def test_cross_product(self, vertical_lines, points) -> None:
        matrix = vertical_lines.distance_matrix(points)
        assert matrix.dtype == np.float64
        np.testing.assert_array_equal(matrix, [[0.0, 5.0, 0.0], [1.0, 4.0, 1.0]])

    def test_other_first_transposed(self, vertical_lines, points) -> None:
        """(this, other) ориентация для маршрута OTHER_FIRST"""
        assert Point2Vector.dispatch_table.distance_matrix[Primitive.LINE] == OTHER_FIRST
        matrix = points.distance_matrix(vertical_lines)
        assert matrix.shape == (3, 2)
        np.testing.assert_array_equal(matrix, vertical_lines.distance_matrix(points).T)

    def test_irrational_distance(self) -> None:
        lines = Line2Vector([Line2(a=1, b=1, c=0)])
        matrix = lines.distance_matrix(Point2Vector([Point2(x=1, y=0)]))
        assert matrix[0, 0] == math.sqrt(0.5)
        assert matrix[0, 0] == pytest.approx(0.70710678)

    def test_empty_shapes(self, vertical_lines) -> None:
        assert vertical_lines.distance_matrix(Point2Vector()).shape == (2, 0)
        assert Point2Vector().distance_matrix(vertical_lines).shape == (0, 2)

    def test_no_length_constraint(self, vertical_lines, points) -> None:
        """Декартово произведение не требует согласования длин"""
        assert vertical_lines.distance_matrix(points).shape == (2, 3)


# =============================================================================
# TABLES vs KERNEL
# =============================================================================


class TestDispatchTables:
    """Каждый маршрут таблицы ведёт к зарегистрированному алгоритму ядра"""

    @pytest.mark.parametrize("cls", all_vector_types(), ids=lambda cls: cls.__name__)
    def test_routes_resolvable(self, cls: type[GeometryVector]) -> None:
        kernel = build_kernel()
        dim = cls.dimensions()
        for operation in Operation:
            for kind, order in getattr(cls.dispatch_table, operation.value).items():
                other_type = primitive_type(kind, dim)
                if order == OTHER_FIRST:
                    pair = (other_type, cls.element_type)
                else:
                    pair = (cls.element_type, other_type)
                assert kernel.supports(operation.value, *pair), (cls.__name__, operation, kind)

    def test_line2_tables(self) -> None:
        table = Line2Vector.dispatch_table
        assert set(table.intersection) == {
            Primitive.ISORECT, Primitive.LINE, Primitive.POINT,
            Primitive.RAY, Primitive.SEGMENT, Primitive.TRIANGLE,
        }
        assert set(table.do_intersect) == set(table.intersection) | {Primitive.CIRCLE}
        assert set(table.squared_distance) == {
            Primitive.LINE, Primitive.POINT, Primitive.RAY,
            Primitive.SEGMENT, Primitive.TRIANGLE,
        }
        assert table.distance_matrix == table.squared_distance

    def test_line3_tables(self) -> None:
        table = Line3Vector.dispatch_table
        assert set(table.intersection) == {
            Primitive.ISOCUBE, Primitive.LINE, Primitive.PLANE, Primitive.POINT,
            Primitive.RAY, Primitive.SEGMENT, Primitive.TRIANGLE,
        }
        assert set(table.do_intersect) == set(table.intersection) | {
            Primitive.SPHERE, Primitive.TETRAHEDRON,
        }
        assert set(table.squared_distance) == {
            Primitive.LINE, Primitive.PLANE, Primitive.POINT,
            Primitive.RAY, Primitive.SEGMENT,
        }
        assert table.distance_matrix == table.squared_distance


def test_default_engine_is_shared() -> None:
    assert default_engine() is default_engine()
    assert default_engine().config == DispatchConfig()


class TestMaterialize:
    """Приведение сетки ядра к матрице"""

    def test_na_cell_is_nan(self) -> None:
        assert math.isnan(squared_to_distance(ExactNumber.na()))
        assert squared_to_distance(ExactNumber(9)) == 3.0

    def test_shape_mismatch_rejected(self) -> None:
        with pytest.raises(ValueError, match=r"shape \(2, 1\)"):
            materialize_distance_matrix([[ExactNumber(1)]], 2, 1)
