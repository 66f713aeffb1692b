"""Dispatch — маршрутизация операций над коллекциями и материализация результатов.

- DispatchEngine: проверка размерности, выбор маршрута по виду, fallback
- DispatchTable: маршруты одной специализации GeometryVector
- materialize: приведение выходов ядра к форме результата
"""

from .engine import (
    DIMENSION_MISMATCH_MESSAGE,
    OTHER_FIRST,
    SELF_FIRST,
    ArgumentOrder,
    DispatchConfig,
    DispatchEngine,
    DispatchTable,
    Operation,
    default_engine,
)
from .materialize import (
    materialize_distance_matrix,
    squared_to_distance,
    unknown_distance_matrix,
    unknown_intersect,
    unknown_squared_distance,
)

__all__ = [
    "DIMENSION_MISMATCH_MESSAGE",
    "OTHER_FIRST",
    "SELF_FIRST",
    "ArgumentOrder",
    "DispatchConfig",
    "DispatchEngine",
    "DispatchTable",
    "Operation",
    "default_engine",
    "materialize_distance_matrix",
    "squared_to_distance",
    "unknown_distance_matrix",
    "unknown_intersect",
    "unknown_squared_distance",
]
