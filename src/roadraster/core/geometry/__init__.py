"""
Геометрические примитивы карты дорог: ориентация (Rotator) и преобразование (Transform).

Конвенции мира: левосторонняя система, Z вверх, X вперёд, углы в градусах.
"""

from .rotator import Rotator
from .transform import Transform, as_vec3, box_corners

__all__ = [
    "Rotator",
    "Transform",
    "as_vec3",
    "box_corners",
]
