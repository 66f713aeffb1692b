"""
Contract Validation Module

Модуль для валидации JSON-представлений коллекций и результатов exactgeom.
"""

from .validators import (
    ContractValidator,
    GeometryVectorValidator,
    IntersectionResultValidator,
    SchemaLoader,
    validate_geometry_vector,
    validate_intersection_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "GeometryVectorValidator",
    "IntersectionResultValidator",
    # Functions
    "validate_geometry_vector",
    "validate_intersection_result",
]
