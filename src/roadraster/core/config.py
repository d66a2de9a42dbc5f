from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "RoadMapConfig",
]

_MIN_DENSITY = 1e-6


@dataclass(slots=True)
class RoadMapConfig:
    """Параметры построения карты дорог и запросов к ней."""

    # raster resolution: cells per world unit (cm); 0.01 => one cell per meter
    pixels_per_centimeter: float = 0.01
    # default sampling density of RoadMap.intersect (checks per cm along each box axis)
    checks_per_centimeter: float = 0.1
    # marker size for debug_points()
    debug_point_size: float = 20.0

    def clamp(self) -> "RoadMapConfig":
        """Гарантирует положительные плотности и размер маркера."""
        self.pixels_per_centimeter = max(_MIN_DENSITY, float(self.pixels_per_centimeter))
        self.checks_per_centimeter = max(_MIN_DENSITY, float(self.checks_per_centimeter))
        self.debug_point_size = max(0.0, float(self.debug_point_size))
        return self
