from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from roadraster.core.geometry import Transform, as_vec3


@dataclass(frozen=True, slots=True, eq=False)
class MapTransform:
    """
    Преобразование мир <-> растр.

    - pixels_per_centimeter: сколько ячеек растра приходится на одну единицу длины мира
    - world_to_map: поворот + перенос мира в локальную систему карты
    - map_offset: сдвиг начала растра в локальной системе карты
    """

    pixels_per_centimeter: float = 1.0
    world_to_map: Transform = field(default_factory=Transform.identity)
    map_offset: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels_per_centimeter", float(self.pixels_per_centimeter))
        object.__setattr__(self, "map_offset", as_vec3(self.map_offset).reshape(3))

    def validate(self) -> "MapTransform":
        ppc = self.pixels_per_centimeter
        if not (math.isfinite(ppc) and ppc > 0.0):
            raise ValueError(f"pixels_per_centimeter должен быть > 0, получено {ppc}")
        if not np.isfinite(self.map_offset).all():
            raise ValueError("map_offset должен состоять из конечных чисел")
        self.world_to_map.validate()
        return self

    def world_to_pixels(self, points, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
        """Векторный вариант world_to_pixel для массива точек (N,3)."""
        local = self.world_to_map.transform_position(as_vec3(points).reshape(-1, 3)) - self.map_offset
        if np.isnan(local[:, :2]).any():
            raise ValueError("Позиция в мире содержит NaN")
        fx = np.floor(self.pixels_per_centimeter * local[:, 0])
        fy = np.floor(self.pixels_per_centimeter * local[:, 1])
        # clamp, never fail: off-map locations resolve to the nearest border cell
        xs = np.clip(fx, 0, int(width) - 1).astype(np.int64)
        ys = np.clip(fy, 0, int(height) - 1).astype(np.int64)
        return xs, ys

    def world_to_pixel(self, world_position, width: int, height: int) -> tuple[int, int]:
        xs, ys = self.world_to_pixels(world_position, width, height)
        return int(xs[0]), int(ys[0])

    def pixel_to_world(self, x: int, y: int) -> np.ndarray:
        relative = np.array(
            [float(x) / self.pixels_per_centimeter, float(y) / self.pixels_per_centimeter, 0.0],
            dtype=np.float64,
        )
        return self.world_to_map.inverse_transform_position(relative + self.map_offset)


__all__ = [
    "MapTransform",
]
