"""
Kernel — точные алгоритмы по парам видов примитивов.

Ядро адресует алгоритм упорядоченной парой конкретных типов элементов и
предоставляет векторизованные формы intersection / do_intersect /
squared_distance / distance_matrix.
"""

from functools import lru_cache

from exactgeom.kernel import line_2, line_3
from exactgeom.kernel.registry import GeometryKernel, TypedStorage, broadcast_length


def build_kernel() -> GeometryKernel:
    """Новое ядро со всеми встроенными алгоритмами 2D и 3D."""
    kernel = GeometryKernel()
    line_2.install(kernel)
    line_3.install(kernel)
    return kernel


@lru_cache(maxsize=1)
def default_kernel() -> GeometryKernel:
    """Общее ядро процесса (создаётся при первом обращении)."""
    return build_kernel()


__all__ = [
    "GeometryKernel",
    "TypedStorage",
    "broadcast_length",
    "build_kernel",
    "default_kernel",
]
