from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .rotator import Rotator


def as_vec3(v) -> np.ndarray:
    """Приводит вход к float64 массиву формы (3,) или (N,3)."""
    arr = np.asarray(v, dtype=np.float64)
    if arr.shape[-1:] != (3,):
        raise ValueError(f"Ожидается вектор из 3 компонент, получено shape={arr.shape}")
    return arr


def _vec3_field(*values: float):
    return field(default_factory=lambda: np.array(values, dtype=np.float64))


@dataclass(frozen=True, slots=True, eq=False)
class Transform:
    """
    Поворот + перенос (+ масштаб по осям).

    transform_position:         p' = R @ (scale * p) + translation
    inverse_transform_position: p  = R^T @ (p' - translation) / scale

    Обе операции принимают как один вектор (3,), так и пачку точек (N,3).
    """

    rotation: Rotator = field(default_factory=Rotator)
    translation: np.ndarray = _vec3_field(0.0, 0.0, 0.0)
    scale: np.ndarray = _vec3_field(1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        # frozen: normalize inputs via object.__setattr__
        object.__setattr__(self, "translation", as_vec3(self.translation).reshape(3))
        object.__setattr__(self, "scale", as_vec3(self.scale).reshape(3))

    @staticmethod
    def identity() -> "Transform":
        return Transform()

    @staticmethod
    def from_location(x: float, y: float, z: float = 0.0, *, yaw: float = 0.0) -> "Transform":
        return Transform(rotation=Rotator(yaw=yaw), translation=np.array([x, y, z], dtype=np.float64))

    def validate(self) -> "Transform":
        if not self.rotation.is_finite():
            raise ValueError("Углы поворота должны быть конечными числами")
        if not (np.isfinite(self.translation).all() and np.isfinite(self.scale).all()):
            raise ValueError("Перенос и масштаб должны быть конечными числами")
        if np.any(self.scale == 0.0):
            raise ValueError("Масштаб по каждой оси должен быть ненулевым")
        return self

    def transform_position(self, p) -> np.ndarray:
        pts = as_vec3(p)
        return (pts * self.scale) @ self.rotation.matrix().T + self.translation

    def inverse_transform_position(self, p) -> np.ndarray:
        pts = as_vec3(p)
        # R is orthonormal, so R^-1 == R^T; row vectors: (R^T v)^T == v^T R
        return ((pts - self.translation) @ self.rotation.matrix()) / self.scale

    def forward_vector(self) -> np.ndarray:
        return self.rotation.forward_vector()


def box_corners(transform: Transform, extent) -> np.ndarray:
    """Углы прямоугольника [-ex, ex] x [-ey, ey] (z=0) в мировых координатах, по кругу."""
    ex, ey = float(as_vec3(extent)[0]), float(as_vec3(extent)[1])
    local = np.array(
        [
            [-ex, -ey, 0.0],
            [ex, -ey, 0.0],
            [ex, ey, 0.0],
            [-ex, ey, 0.0],
        ],
        dtype=np.float64,
    )
    return transform.transform_position(local)


__all__ = [
    "Transform",
    "as_vec3",
    "box_corners",
]
