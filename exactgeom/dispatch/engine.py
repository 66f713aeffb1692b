"""
Dispatch Engine — маршрутизация бинарных операций на алгоритм ядра

Протокол каждой операции:
1. Проверка размерности: other.dimensions() != this.dimensions() → ошибка
   до обращения к любым элементам
2. Выбор по виду: other.geometry_type() ищется в таблице маршрутов this;
   маршрут задаёт порядок аргументов ядра (SELF_FIRST / OTHER_FIRST),
   хранилище other приводится к конкретному типу (storage_as)
3. Политика при отсутствии маршрута:
   - intersection → UnsupportedGeometryPairError
   - do_intersect → [False] * max(n, m)
   - squared_distance → [NA] * max(n, m)
   - distance_matrix → матрица n x m из NaN
   DispatchConfig.strict_unsupported=True превращает три мягких случая
   в ту же ошибку, что и для intersection.

Каждый вызов без состояния: ни this, ни other не изменяются.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Mapping, Optional

import numpy as np

from exactgeom.core.domain import IntersectionResult, Primitive, primitive_type
from exactgeom.core.exceptions import DimensionMismatchError, UnsupportedGeometryPairError
from exactgeom.core.math import ExactNumber
from exactgeom.dispatch.materialize import (
    materialize_distance_matrix,
    materialize_do_intersect,
    materialize_intersection,
    materialize_squared_distance,
    unknown_distance_matrix,
    unknown_intersect,
    unknown_squared_distance,
)
from exactgeom.kernel import GeometryKernel, TypedStorage, default_kernel

if TYPE_CHECKING:
    from exactgeom.vectors.base import GeometryVector

logger = logging.getLogger(__name__)

DIMENSION_MISMATCH_MESSAGE = "Only geometries of the same dimensionality can intersect"


# =============================================================================
# ENUMS
# =============================================================================


class Operation(str, Enum):
    """Бинарная операция над коллекциями."""

    INTERSECTION = "intersection"
    DO_INTERSECT = "do_intersect"
    SQUARED_DISTANCE = "squared_distance"
    DISTANCE_MATRIX = "distance_matrix"

    @property
    def label(self) -> str:
        """Название для сообщений об ошибке."""
        return {
            Operation.INTERSECTION: "intersection",
            Operation.DO_INTERSECT: "intersection",
            Operation.SQUARED_DISTANCE: "squared distance",
            Operation.DISTANCE_MATRIX: "distance matrix",
        }[self]


class ArgumentOrder(str, Enum):
    """Порядок передачи хранилищ в ядро."""

    SELF_FIRST = "self_first"
    OTHER_FIRST = "other_first"


SELF_FIRST = ArgumentOrder.SELF_FIRST
OTHER_FIRST = ArgumentOrder.OTHER_FIRST


# =============================================================================
# CONFIG & TABLES
# =============================================================================


@dataclass(frozen=True)
class DispatchConfig:
    """
    Конфигурация диспетчеризации.

    - strict_unsupported: пара видов без маршрута даёт ошибку для всех операций
      (по умолчанию только для intersection)
    - log_fallbacks: логировать возврат значения-заглушки (WARNING)
    """

    strict_unsupported: bool = False
    log_fallbacks: bool = True


@dataclass(frozen=True)
class DispatchTable:
    """
    Таблица маршрутов одной специализации GeometryVector.

    Для каждой операции: вид второго операнда → порядок аргументов ядра.
    Вид, отсутствующий в таблице, обрабатывается политикой fallback.
    """

    intersection: Mapping[Primitive, ArgumentOrder] = field(default_factory=dict)
    do_intersect: Mapping[Primitive, ArgumentOrder] = field(default_factory=dict)
    squared_distance: Mapping[Primitive, ArgumentOrder] = field(default_factory=dict)
    distance_matrix: Mapping[Primitive, ArgumentOrder] = field(default_factory=dict)

    def route(self, operation: Operation, kind: Primitive) -> Optional[ArgumentOrder]:
        return getattr(self, operation.value).get(kind)


@dataclass(frozen=True)
class _Routed:
    left: TypedStorage
    right: TypedStorage
    order: ArgumentOrder


# =============================================================================
# ENGINE
# =============================================================================


class DispatchEngine:
    """
    Double-dispatch бинарных операций на алгоритмы ядра.

    Args:
        kernel: ядро алгоритмов (по умолчанию общее ядро процесса)
        config: конфигурация политики fallback
    """

    def __init__(
        self,
        kernel: Optional[GeometryKernel] = None,
        config: Optional[DispatchConfig] = None,
    ):
        self.kernel = kernel or default_kernel()
        self.config = config or DispatchConfig()

    def intersection(self, this: "GeometryVector", other: "GeometryVector") -> list[IntersectionResult]:
        routed = self._resolve(Operation.INTERSECTION, this, other)
        if routed is None:
            raise UnsupportedGeometryPairError(
                "Don't know how to calculate the intersection of these geometries"
            )
        return materialize_intersection(self.kernel.intersection(routed.left, routed.right))

    def do_intersect(self, this: "GeometryVector", other: "GeometryVector") -> list[bool]:
        routed = self._resolve(Operation.DO_INTERSECT, this, other)
        if routed is None:
            self._fallback(Operation.DO_INTERSECT, this, other)
            return unknown_intersect(max(this.size(), other.size()))
        return materialize_do_intersect(self.kernel.do_intersect(routed.left, routed.right))

    def squared_distance(self, this: "GeometryVector", other: "GeometryVector") -> list[ExactNumber]:
        routed = self._resolve(Operation.SQUARED_DISTANCE, this, other)
        if routed is None:
            self._fallback(Operation.SQUARED_DISTANCE, this, other)
            return unknown_squared_distance(max(this.size(), other.size()))
        return materialize_squared_distance(self.kernel.squared_distance(routed.left, routed.right))

    def distance_matrix(self, this: "GeometryVector", other: "GeometryVector") -> np.ndarray:
        routed = self._resolve(Operation.DISTANCE_MATRIX, this, other)
        if routed is None:
            self._fallback(Operation.DISTANCE_MATRIX, this, other)
            return unknown_distance_matrix(this.size(), other.size())

        grid = self.kernel.distance_matrix(routed.left, routed.right)
        matrix = materialize_distance_matrix(grid, len(routed.left), len(routed.right))
        if routed.order == OTHER_FIRST:
            # Ядро считало (other, this): возвращаем ориентацию (this, other)
            return np.ascontiguousarray(matrix.T)
        return matrix

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolve(
        self, operation: Operation, this: "GeometryVector", other: "GeometryVector"
    ) -> Optional[_Routed]:
        if other.dimensions() != this.dimensions():
            raise DimensionMismatchError(DIMENSION_MISMATCH_MESSAGE)

        kind = other.geometry_type()
        order = this.dispatch_table.route(operation, kind)
        if order is None:
            return None

        mine = this.storage_as(this.element_type)
        theirs = other.storage_as(primitive_type(kind, other.dimensions()))

        logger.debug(
            "%s: %s%dD[%d] x %s%dD[%d] (%s)",
            operation.value,
            this.geometry_type().value, this.dimensions(), this.size(),
            kind.value, other.dimensions(), other.size(),
            order.value,
        )

        if order == OTHER_FIRST:
            return _Routed(left=theirs, right=mine, order=order)
        return _Routed(left=mine, right=theirs, order=order)

    def _fallback(self, operation: Operation, this: "GeometryVector", other: "GeometryVector") -> None:
        if self.config.strict_unsupported:
            raise UnsupportedGeometryPairError(
                f"Don't know how to calculate the {operation.label} of these geometries"
            )
        if self.config.log_fallbacks:
            logger.warning(
                "no %s route for %s%dD x %s%dD, returning fallback",
                operation.value,
                this.geometry_type().value, this.dimensions(),
                other.geometry_type().value, other.dimensions(),
            )


@lru_cache(maxsize=1)
def default_engine() -> DispatchEngine:
    """Движок по умолчанию: общее ядро, мягкая политика fallback."""
    return DispatchEngine()
