"""
Иерархия исключений exactgeom.

Все ошибки уровня операции фатальны только для текущего вызова:
коллекции остаются валидными и пригодными для повторного использования.
"""


class GeometryError(Exception):
    """Базовое исключение для геометрических операций."""

    pass


class DimensionMismatchError(GeometryError):
    """Операнды имеют разную размерность объемлющего пространства."""

    pass


class UnsupportedGeometryPairError(GeometryError):
    """Для пары видов примитивов нет маршрута диспетчеризации."""

    pass


class IncompatibleLengthError(GeometryError):
    """Длины операндов нельзя согласовать поэлементно (не равны и ни одна не 1)."""

    pass


class KernelError(GeometryError):
    """В ядре нет алгоритма для упорядоченной пары типов элементов."""

    pass


class GeometryTypeError(GeometryError, TypeError):
    """Элемент или хранилище не соответствует заявленному типу примитива."""

    pass


class MissingValueError(GeometryError):
    """Запрошено точное значение у sentinel-значения (NA)."""

    pass
