"""
GeometricPrimitive — базовая immutable модель примитива

Каждый примитив полностью определяется фиксированным упорядоченным набором
точных скаляров (DEF_NAMES). Все скаляры хранятся как Fraction; входы
приводятся точно (см. core.math.conversion).
"""

from fractions import Fraction
from typing import Annotated, ClassVar, Sequence

from pydantic import BaseModel, BeforeValidator

from exactgeom.core.domain.kinds import Primitive
from exactgeom.core.math.conversion import to_fraction


def coerce_exact(value: object) -> Fraction:
    """Before-validator: точное приведение, TypeError → ValueError для pydantic."""
    try:
        return to_fraction(value)
    except TypeError as e:
        raise ValueError(str(e)) from e


# Точный скаляр в полях моделей
ExactScalar = Annotated[Fraction, BeforeValidator(coerce_exact)]


class GeometricPrimitive(BaseModel):
    """
    Базовый класс примитива.

    Immutable модель (frozen=True): любое «изменение» создаёт новый экземпляр.
    Сравнение двух примитивов одного вида — поэлементное по точным скалярам.
    """

    kind: ClassVar[Primitive]
    dim: ClassVar[int]
    DEF_NAMES: ClassVar[tuple[str, ...]]

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def definition(self) -> tuple[Fraction, ...]:
        """Определяющие скаляры в порядке DEF_NAMES."""
        return tuple(getattr(self, name) for name in self.DEF_NAMES)

    @classmethod
    def from_definition(cls, values: Sequence[object]) -> "GeometricPrimitive":
        """
        Восстановление примитива из определяющих скаляров.

        Обратное к definition(): from_definition(p.definition()) == p.

        Raises:
            ValueError: Если число скаляров не совпадает с DEF_NAMES
        """
        if len(values) != len(cls.DEF_NAMES):
            raise ValueError(
                f"{cls.__name__} is defined by {len(cls.DEF_NAMES)} scalars "
                f"{list(cls.DEF_NAMES)}, got {len(values)}"
            )
        return cls(**dict(zip(cls.DEF_NAMES, values)))

    def __repr__(self) -> str:
        scalars = ", ".join(f"{name}={value}" for name, value in zip(self.DEF_NAMES, self.definition()))
        return f"{type(self).__name__}({scalars})"

    __str__ = __repr__
