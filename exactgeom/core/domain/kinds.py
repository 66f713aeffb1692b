"""
Primitive Kind — закрытое перечисление видов геометрических примитивов

Вид (kind) — дискриминант динамической диспетчеризации: каждый
GeometryVector сообщает ровно один вид и одну размерность.
"""

from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class Primitive(str, Enum):
    """Вид геометрического примитива."""

    POINT = "point"
    LINE = "line"
    RAY = "ray"
    SEGMENT = "segment"
    TRIANGLE = "triangle"
    ISORECT = "iso_rect"
    ISOCUBE = "iso_cube"
    CIRCLE = "circle"
    SPHERE = "sphere"
    PLANE = "plane"
    TETRAHEDRON = "tetrahedron"


class IntersectionKind(str, Enum):
    """
    Тег варианта результата пересечения.

    - EMPTY: пересечения нет
    - POINT: пересечение в точке
    - PRIMITIVE: пересечение — примитив (прямая, луч, отрезок, ...)
    - UNKNOWN: результат не выражается одним примитивом
    """

    EMPTY = "empty"
    POINT = "point"
    PRIMITIVE = "primitive"
    UNKNOWN = "unknown"

