"""
GeometryKernel — реестр точных алгоритмов по упорядоченным парам типов

Ядро предоставляет единообразные векторизованные формы для каждой
зарегистрированной пары (тип A, тип B):
- intersection(A seq, B seq)      → list[IntersectionResult]
- do_intersect(A seq, B seq)      → list[bool]
- squared_distance(A seq, B seq)  → list[ExactNumber]
- distance_matrix(A seq, B seq)   → list[list[ExactNumber]] (квадраты расстояний)

Порядок аргументов значим: (IsoRectangle, Line2) и (Line2, IsoRectangle) —
разные ключи. Все алгоритмы чистые и работают в точной арифметике.

Поэлементные операции:
- равные длины → пары (i, i)
- операнд длины 1 транслируется на длину другого
- пустой операнд → пустой результат
- иначе → IncompatibleLengthError
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, Generic, Optional, TypeVar

from exactgeom.core.domain import GeometricPrimitive, IntersectionResult
from exactgeom.core.exceptions import IncompatibleLengthError, KernelError
from exactgeom.core.math import ExactNumber

A = TypeVar("A", bound=GeometricPrimitive)
B = TypeVar("B", bound=GeometricPrimitive)

IntersectionFn = Callable[[A, B], IntersectionResult]
PredicateFn = Callable[[A, B], bool]
SquaredDistanceFn = Callable[[A, B], Fraction]


# =============================================================================
# TYPED STORAGE
# =============================================================================


@dataclass(frozen=True)
class TypedStorage(Generic[A]):
    """
    Хранилище операнда, приведённое к конкретному типу элементов.

    Attributes:
        element_type: Конкретный тип примитива
        items: Элементы в порядке индексов
    """

    element_type: type[A]
    items: tuple[A, ...]

    def __len__(self) -> int:
        return len(self.items)


def broadcast_length(n: int, m: int) -> int:
    """
    Длина результата поэлементной операции.

    Raises:
        IncompatibleLengthError: Если n != m, обе длины ненулевые
            и ни одна не равна 1
    """
    if n == m:
        return n
    if n == 0 or m == 0:
        return 0
    if n == 1 or m == 1:
        return max(n, m)
    raise IncompatibleLengthError(
        f"Cannot pair geometries element-wise: lengths {n} and {m} are incompatible"
    )


def _pairs(left: TypedStorage, right: TypedStorage) -> list[tuple[GeometricPrimitive, GeometricPrimitive]]:
    n, m = len(left), len(right)
    size = broadcast_length(n, m)
    return [
        (left.items[0 if n == 1 else i], right.items[0 if m == 1 else i])
        for i in range(size)
    ]


# =============================================================================
# KERNEL
# =============================================================================


class GeometryKernel:
    """
    Реестр алгоритмов и их векторизованные формы.

    do_intersect без отдельного предиката выводится из intersection:
    пара пересекается, если результат не EMPTY.
    """

    def __init__(self):
        self._intersection: dict[tuple[type, type], IntersectionFn] = {}
        self._do_intersect: dict[tuple[type, type], PredicateFn] = {}
        self._squared_distance: dict[tuple[type, type], SquaredDistanceFn] = {}

    # -------------------------------------------------------------------------
    # Регистрация
    # -------------------------------------------------------------------------

    @staticmethod
    def _register(table: dict, left: type, right: type, fn: Optional[Callable]) -> Callable:
        def decorator(func: Callable) -> Callable:
            table[(left, right)] = func
            return func

        return decorator if fn is None else decorator(fn)

    def register_intersection(
        self, left: type[A], right: type[B], fn: Optional[IntersectionFn] = None
    ) -> Callable:
        """
        Регистрация алгоритма пересечения для упорядоченной пары (left, right).

        Без fn работает как декоратор:

            @kernel.register_intersection(Line2, Point2)
            def intersect(line, point): ...
        """
        return self._register(self._intersection, left, right, fn)

    def register_do_intersect(
        self, left: type[A], right: type[B], fn: Optional[PredicateFn] = None
    ) -> Callable:
        return self._register(self._do_intersect, left, right, fn)

    def register_squared_distance(
        self, left: type[A], right: type[B], fn: Optional[SquaredDistanceFn] = None
    ) -> Callable:
        return self._register(self._squared_distance, left, right, fn)

    def supports(self, operation: str, left: type, right: type) -> bool:
        """Есть ли алгоритм операции для упорядоченной пары типов."""
        if operation == "intersection":
            return (left, right) in self._intersection
        if operation == "do_intersect":
            return (left, right) in self._do_intersect or (left, right) in self._intersection
        if operation in ("squared_distance", "distance_matrix"):
            return (left, right) in self._squared_distance
        raise ValueError(f"Unknown kernel operation: {operation}")

    # -------------------------------------------------------------------------
    # Поиск алгоритма
    # -------------------------------------------------------------------------

    def _intersection_fn(self, left: type, right: type) -> IntersectionFn:
        try:
            return self._intersection[(left, right)]
        except KeyError:
            raise KernelError(
                f"Kernel has no intersection for ({left.__name__}, {right.__name__})"
            ) from None

    def _predicate_fn(self, left: type, right: type) -> PredicateFn:
        if (left, right) in self._do_intersect:
            return self._do_intersect[(left, right)]
        if (left, right) in self._intersection:
            intersect = self._intersection[(left, right)]
            return lambda a, b: not intersect(a, b).is_empty()
        raise KernelError(
            f"Kernel has no do_intersect for ({left.__name__}, {right.__name__})"
        )

    def _squared_distance_fn(self, left: type, right: type) -> SquaredDistanceFn:
        try:
            return self._squared_distance[(left, right)]
        except KeyError:
            raise KernelError(
                f"Kernel has no squared_distance for ({left.__name__}, {right.__name__})"
            ) from None

    # -------------------------------------------------------------------------
    # Векторизованные формы
    # -------------------------------------------------------------------------

    def intersection(self, left: TypedStorage, right: TypedStorage) -> list[IntersectionResult]:
        fn = self._intersection_fn(left.element_type, right.element_type)
        return [fn(a, b) for a, b in _pairs(left, right)]

    def do_intersect(self, left: TypedStorage, right: TypedStorage) -> list[bool]:
        fn = self._predicate_fn(left.element_type, right.element_type)
        return [bool(fn(a, b)) for a, b in _pairs(left, right)]

    def squared_distance(self, left: TypedStorage, right: TypedStorage) -> list[ExactNumber]:
        fn = self._squared_distance_fn(left.element_type, right.element_type)
        return [ExactNumber(fn(a, b)) for a, b in _pairs(left, right)]

    def distance_matrix(self, left: TypedStorage, right: TypedStorage) -> list[list[ExactNumber]]:
        """Полное декартово произведение: grid[i][j] есть квадрат расстояния."""
        fn = self._squared_distance_fn(left.element_type, right.element_type)
        return [[ExactNumber(fn(a, b)) for b in right.items] for a in left.items]
