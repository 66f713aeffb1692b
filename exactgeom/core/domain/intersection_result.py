"""
IntersectionResult — тегированный результат пересечения одной пары

Результат пересечения гетерогенен по построению: две прямые пересекаются
в точке, в прямой (если совпадают) или не пересекаются вовсе. Вариант
задаётся тегом IntersectionKind, геометрия — примитивом соответствующего вида.
"""

from dataclasses import dataclass
from typing import Any, Optional

from exactgeom.core.domain.base import GeometricPrimitive
from exactgeom.core.domain.kinds import IntersectionKind, Primitive
from exactgeom.core.math.conversion import fraction_to_text


@dataclass(frozen=True)
class IntersectionResult:
    """
    Результат пересечения.

    Attributes:
        kind: Тег варианта (EMPTY / POINT / PRIMITIVE / UNKNOWN)
        geometry: Примитив пересечения (None для EMPTY и UNKNOWN)
    """

    kind: IntersectionKind
    geometry: Optional[GeometricPrimitive] = None

    def __post_init__(self) -> None:
        has_geometry = self.geometry is not None
        if self.kind in (IntersectionKind.EMPTY, IntersectionKind.UNKNOWN) and has_geometry:
            raise ValueError(f"{self.kind.value} intersection carries no geometry")
        if self.kind in (IntersectionKind.POINT, IntersectionKind.PRIMITIVE) and not has_geometry:
            raise ValueError(f"{self.kind.value} intersection requires geometry")
        if self.kind == IntersectionKind.POINT and self.geometry.kind != Primitive.POINT:
            raise ValueError(f"POINT intersection holds {self.geometry.kind.value}")

    @classmethod
    def empty(cls) -> "IntersectionResult":
        return cls(kind=IntersectionKind.EMPTY)

    @classmethod
    def unknown(cls) -> "IntersectionResult":
        return cls(kind=IntersectionKind.UNKNOWN)

    @classmethod
    def of(cls, geometry: GeometricPrimitive) -> "IntersectionResult":
        """Результат с геометрией: тег POINT для точек, PRIMITIVE иначе."""
        if geometry.kind == Primitive.POINT:
            return cls(kind=IntersectionKind.POINT, geometry=geometry)
        return cls(kind=IntersectionKind.PRIMITIVE, geometry=geometry)

    def is_empty(self) -> bool:
        return self.kind == IntersectionKind.EMPTY

    @property
    def geometry_type(self) -> Optional[Primitive]:
        """Вид примитива пересечения (None для EMPTY / UNKNOWN)."""
        return None if self.geometry is None else self.geometry.kind

    def to_dict(self) -> dict[str, Any]:
        """
        JSON-совместимое представление (контракт intersection_result.json).

        Скаляры геометрии — в канонической точной текстовой форме.
        """
        if self.geometry is None:
            return {
                "kind": self.kind.value,
                "geometry_type": None,
                "dimensions": None,
                "definition": [],
            }
        return {
            "kind": self.kind.value,
            "geometry_type": self.geometry.kind.value,
            "dimensions": self.geometry.dim,
            "definition": [fraction_to_text(v) for v in self.geometry.definition()],
        }
