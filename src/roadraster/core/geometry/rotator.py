from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Rotator:
    """
    Ориентация в градусах (pitch, yaw, roll).

    Мир левосторонний, ось Z вверх, X вперёд:
    - yaw вращает вокруг Z,
    - pitch вокруг Y,
    - roll вокруг X.
    """

    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    def add_yaw(self, degrees: float) -> "Rotator":
        return Rotator(pitch=self.pitch, yaw=self.yaw + float(degrees), roll=self.roll)

    def matrix(self) -> np.ndarray:
        """3x3, столбцы — повёрнутые оси X, Y, Z."""
        p, y, r = (math.radians(a) for a in (self.pitch, self.yaw, self.roll))
        sp, cp = math.sin(p), math.cos(p)
        sy, cy = math.sin(y), math.cos(y)
        sr, cr = math.sin(r), math.cos(r)
        x_axis = (cp * cy, cp * sy, sp)
        y_axis = (sr * sp * cy - cr * sy, sr * sp * sy + cr * cy, -sr * cp)
        z_axis = (-(cr * sp * cy + sr * sy), cy * sr - cr * sp * sy, cr * cp)
        return np.array([x_axis, y_axis, z_axis], dtype=np.float64).T

    def forward_vector(self) -> np.ndarray:
        p, y = math.radians(self.pitch), math.radians(self.yaw)
        return np.array([math.cos(p) * math.cos(y), math.cos(p) * math.sin(y), math.sin(p)], dtype=np.float64)

    def is_finite(self) -> bool:
        return bool(np.isfinite([self.pitch, self.yaw, self.roll]).all())


__all__ = [
    "Rotator",
]
