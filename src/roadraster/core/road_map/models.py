from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class RoadMapNotBuiltError(RuntimeError):
    """Карта ещё не построена (число ячеек != width * height)."""


class MeshTag(str, Enum):
    """
    Тег геометрии, из которой построена ячейка.

    Направленные полосы: прямая дорога (правая/левая полоса) и четыре полосы поворота на 90°.
    Остальные теги обозначают проезжую часть без канонического направления (перекрёстки и т.п.).
    """

    ROAD_TWO_LANES_LANE_RIGHT = "road_two_lanes_lane_right"
    ROAD_TWO_LANES_LANE_LEFT = "road_two_lanes_lane_left"
    ROAD_90_DEG_TURN_LANE_0 = "road_90_deg_turn_lane_0"
    ROAD_90_DEG_TURN_LANE_1 = "road_90_deg_turn_lane_1"
    ROAD_90_DEG_TURN_LANE_2 = "road_90_deg_turn_lane_2"
    ROAD_90_DEG_TURN_LANE_3 = "road_90_deg_turn_lane_3"
    ROAD_T_INTERSECTION = "road_t_intersection"
    ROAD_X_INTERSECTION = "road_x_intersection"
    OTHER = "other"


@dataclass(frozen=True, slots=True, eq=False)
class PixelCell:
    """
    Одна ячейка растра.

    - is_off_road: ячейка вне проезжей части
    - has_direction: определено ли направление полосы (всегда False для off-road)
    - direction: единичный вектор направления (нулевой, если has_direction == False)
    """

    is_off_road: bool
    has_direction: bool
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))

    @staticmethod
    def empty() -> "PixelCell":
        return PixelCell(is_off_road=True, has_direction=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelCell):
            return NotImplemented
        return (
            self.is_off_road == other.is_off_road
            and self.has_direction == other.has_direction
            and bool(np.array_equal(self.direction, other.direction))
        )


@dataclass(frozen=True, slots=True)
class IntersectionResult:
    """Доли точек бокса вне дороги и на встречной полосе, плюс число проверок."""

    off_road: float = 0.0
    opposite_lane: float = 0.0
    check_count: int = 0

    @property
    def is_empty(self) -> bool:
        # zero checks => the ratios are a placeholder (0, 0), not a measurement
        return self.check_count == 0


__all__ = [
    "RoadMapNotBuiltError",
    "MeshTag",
    "PixelCell",
    "IntersectionResult",
]
