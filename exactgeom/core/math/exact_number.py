"""
ExactNumber — точный скаляр с детерминированным double-приближением

Хранит ровно одно каноническое точное значение (Fraction). double не
кэшируется и всегда выводится из точного значения в момент запроса.

Sentinel (NA) используется как значение-заглушка для пар видов без
алгоритма расстояния: точного значения у него нет, double равен NaN.
"""

from dataclasses import dataclass
from fractions import Fraction
from functools import total_ordering
from typing import Optional

from exactgeom.core.exceptions import MissingValueError
from exactgeom.core.math.conversion import (
    fraction_from_text,
    fraction_to_text,
    to_double,
    to_fraction,
)

NA_TEXT = "NA"


@total_ordering
@dataclass(frozen=True, init=False)
class ExactNumber:
    """
    Immutable точный скаляр.

    Attributes:
        value: Fraction или None для sentinel (NA)
    """

    value: Optional[Fraction]

    def __init__(self, value: object) -> None:
        exact = None if value is None else to_fraction(value)
        object.__setattr__(self, "value", exact)

    @classmethod
    def na(cls) -> "ExactNumber":
        """Sentinel «значение неизвестно»."""
        return cls(None)

    @classmethod
    def parse(cls, text: str) -> "ExactNumber":
        """Разбор канонической текстовой формы ("p", "p/q" или "NA")."""
        if text == NA_TEXT:
            return cls.na()
        return cls(fraction_from_text(text))

    def is_na(self) -> bool:
        return self.value is None

    @property
    def exact(self) -> Fraction:
        """
        Точное значение для дальнейших точных вычислений.

        Raises:
            MissingValueError: Для sentinel
        """
        if self.value is None:
            raise MissingValueError("NA has no exact value")
        return self.value

    def to_double(self) -> float:
        """Корректно округлённый double; NaN для sentinel."""
        if self.value is None:
            return float("nan")
        return to_double(self.value)

    def __float__(self) -> float:
        return self.to_double()

    def __lt__(self, other: "ExactNumber") -> bool:
        if not isinstance(other, ExactNumber):
            return NotImplemented
        return self.exact < other.exact

    def __str__(self) -> str:
        if self.value is None:
            return NA_TEXT
        return fraction_to_text(self.value)

    def __repr__(self) -> str:
        return f"ExactNumber({str(self)!r})"
