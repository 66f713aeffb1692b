"""
GeometryVector — упорядоченная коллекция примитивов одного вида и размерности

Инварианты:
- каждый элемент имеет заявленный тип (а значит вид и размерность)
- длина последовательности равна size()
- индекс i ссылается на один и тот же элемент до явной мутации
  (insert / remove / replace); неявного переупорядочивания нет
- операции (intersection, do_intersect, squared_distance, distance_matrix)
  только читают хранилище
"""

from typing import Any, ClassVar, Iterable, Iterator, Optional, overload

import numpy as np

from exactgeom.core.contracts import validate_geometry_vector
from exactgeom.core.domain import GeometricPrimitive, IntersectionResult, Primitive
from exactgeom.core.exceptions import GeometryTypeError
from exactgeom.core.math import ExactNumber, fraction_from_text, fraction_to_text, to_double
from exactgeom.dispatch import DispatchEngine, DispatchTable, default_engine
from exactgeom.kernel import TypedStorage

SNAPSHOT_SCHEMA_VERSION = "1"


class GeometryVector:
    """
    Базовый класс типизированной коллекции.

    Специализация задаёт element_type (а через него kind и dim) и
    dispatch_table (маршруты бинарных операций по виду второго операнда).
    """

    element_type: ClassVar[type[GeometricPrimitive]]
    dispatch_table: ClassVar[DispatchTable] = DispatchTable()

    def __init__(self, elements: Iterable[GeometricPrimitive] = ()):
        self._storage: list[GeometricPrimitive] = [self._checked(e) for e in elements]

    # -------------------------------------------------------------------------
    # Вид и размерность
    # -------------------------------------------------------------------------

    @classmethod
    def geometry_type(cls) -> Primitive:
        return cls.element_type.kind

    @classmethod
    def dimensions(cls) -> int:
        return cls.element_type.dim

    @classmethod
    def def_names(cls) -> list[str]:
        """Имена определяющих скаляров примитива в фиксированном порядке."""
        return list(cls.element_type.DEF_NAMES)

    # -------------------------------------------------------------------------
    # Доступ к элементам
    # -------------------------------------------------------------------------

    def size(self) -> int:
        return len(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def __iter__(self) -> Iterator[GeometricPrimitive]:
        return iter(self._storage)

    @overload
    def __getitem__(self, index: int) -> GeometricPrimitive: ...

    @overload
    def __getitem__(self, index: slice) -> "GeometryVector": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self)(self._storage[index])
        return self._storage[index]

    @property
    def storage(self) -> tuple[GeometricPrimitive, ...]:
        """Read-only представление хранилища в порядке индексов."""
        return tuple(self._storage)

    def storage_as(self, element_type: type[GeometricPrimitive]) -> TypedStorage:
        """
        Приведение хранилища к конкретному типу элементов.

        Raises:
            GeometryTypeError: Если хранилище содержит другой тип
        """
        if element_type is not self.element_type:
            raise GeometryTypeError(
                f"{type(self).__name__} stores {self.element_type.__name__}, "
                f"not {element_type.__name__}"
            )
        return TypedStorage(element_type=element_type, items=tuple(self._storage))

    def get_single_definition(self, i: int, which: int, element: int = 0) -> ExactNumber:
        """
        which-й определяющий скаляр элемента i как ExactNumber.

        Args:
            i: Индекс элемента
            which: Индекс скаляра в def_names()
            element: Зарезервирован для примитивов с несколькими строками

        Raises:
            IndexError: Если i или which вне диапазона
        """
        names = self.element_type.DEF_NAMES
        if not 0 <= which < len(names):
            raise IndexError(
                f"definition index {which} out of range for {list(names)}"
            )
        return ExactNumber(self._element(i).definition()[which])

    def get_row(self, i: int, j: int = 0) -> list[float]:
        """
        Все определяющие скаляры элемента i как double, в порядке def_names().

        Args:
            i: Индекс элемента
            j: Зарезервирован для строк переменной ширины

        Raises:
            IndexError: Если i вне диапазона
        """
        return [to_double(value) for value in self._element(i).definition()]

    def _element(self, i: int) -> GeometricPrimitive:
        if not 0 <= i < len(self._storage):
            raise IndexError(
                f"element index {i} out of range for size {len(self._storage)}"
            )
        return self._storage[i]

    # -------------------------------------------------------------------------
    # Мутации
    # -------------------------------------------------------------------------

    def _checked(self, element: Any) -> GeometricPrimitive:
        if not isinstance(element, self.element_type):
            raise GeometryTypeError(
                f"{type(self).__name__} holds {self.element_type.__name__}, "
                f"got {type(element).__name__}"
            )
        return element

    def append(self, element: GeometricPrimitive) -> None:
        self._storage.append(self._checked(element))

    def extend(self, elements: Iterable[GeometricPrimitive]) -> None:
        # Проверяем всё до записи, чтобы не оставить коллекцию частично изменённой
        checked = [self._checked(e) for e in elements]
        self._storage.extend(checked)

    def insert(self, index: int, element: GeometricPrimitive) -> None:
        self._storage.insert(index, self._checked(element))

    def __setitem__(self, index: int, element: GeometricPrimitive) -> None:
        self._storage[index] = self._checked(element)

    def __delitem__(self, index: int | slice) -> None:
        del self._storage[index]

    # -------------------------------------------------------------------------
    # Бинарные операции
    # -------------------------------------------------------------------------

    def intersection(
        self, other: "GeometryVector", engine: Optional[DispatchEngine] = None
    ) -> list[IntersectionResult]:
        return (engine or default_engine()).intersection(self, other)

    def do_intersect(
        self, other: "GeometryVector", engine: Optional[DispatchEngine] = None
    ) -> list[bool]:
        return (engine or default_engine()).do_intersect(self, other)

    def squared_distance(
        self, other: "GeometryVector", engine: Optional[DispatchEngine] = None
    ) -> list[ExactNumber]:
        return (engine or default_engine()).squared_distance(self, other)

    def distance_matrix(
        self, other: "GeometryVector", engine: Optional[DispatchEngine] = None
    ) -> np.ndarray:
        return (engine or default_engine()).distance_matrix(self, other)

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def to_snapshot(self) -> dict[str, Any]:
        """
        JSON-совместимый точный snapshot (контракт geometry_vector.json).

        Скаляры записываются в каноническом тексте "p/q", поэтому
        from_snapshot восстанавливает коллекцию без потери точности.
        """
        snapshot = {
            "schema_version": SNAPSHOT_SCHEMA_VERSION,
            "geometry_type": self.geometry_type().value,
            "dimensions": self.dimensions(),
            "def_names": self.def_names(),
            "definitions": [
                [fraction_to_text(v) for v in element.definition()]
                for element in self._storage
            ],
        }
        validate_geometry_vector(snapshot)
        return snapshot

    @classmethod
    def from_definitions(cls, rows: Iterable[Iterable[str]]) -> "GeometryVector":
        """Коллекция из строк точных текстовых скаляров в порядке def_names()."""
        return cls(
            cls.element_type.from_definition([fraction_from_text(v) for v in row])
            for row in rows
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeometryVector):
            return NotImplemented
        return type(self) is type(other) and self._storage == other._storage

    __hash__ = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} [{self.size()}]>"
