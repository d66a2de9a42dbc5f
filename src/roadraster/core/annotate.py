from __future__ import annotations

from dataclasses import dataclass

import cv2
import numpy as np

from roadraster.core.encode import Rgba, encode
from roadraster.core.geometry import Transform, box_corners
from roadraster.core.road_map import IntersectionResult, RoadMap

__all__ = [
    "DebugPoint",
    "debug_points",
    "draw_intersection",
]


@dataclass(frozen=True, slots=True, eq=False)
class DebugPoint:
    """Маркер для отрисовки карты в 3D-сцене: мировая позиция ячейки + её цвет."""

    location: np.ndarray  # (3,) world space
    color: Rgba
    size: float


def debug_points(road_map: RoadMap, size: float | None = None) -> list[DebugPoint]:
    """По одному маркеру на ячейку (обход: x внешний, y внутренний)."""
    road_map.require_valid()
    s = road_map.config.debug_point_size if size is None else float(size)
    out: list[DebugPoint] = []
    for x in range(road_map.width):
        for y in range(road_map.height):
            out.append(
                DebugPoint(
                    location=road_map.pixel_to_world(x, y),
                    color=encode(road_map.cell_at(x, y)),
                    size=s,
                )
            )
    return out


def draw_intersection(
    image_rgba: np.ndarray,
    road_map: RoadMap,
    box_transform: Transform,
    box_extent,
    result: IntersectionResult | None = None,
    *,
    thickness: int = 1,
) -> np.ndarray:
    """
    Рисует контур бокса (в координатах растра) поверх encode_image(road_map).

    Красный: бокс частично вне дороги или на встречной полосе, иначе зелёный.
    """
    out = image_rgba.copy()
    corners = box_corners(box_transform, box_extent)
    xs, ys = road_map.world_to_pixels(corners)
    poly = np.stack([xs, ys], axis=1).astype(np.int32)

    bad = result is not None and (result.off_road > 0.0 or result.opposite_lane > 0.0)
    color = (255, 0, 0, 255) if bad else (0, 200, 0, 255)
    cv2.polylines(out, [poly], isClosed=True, color=color, thickness=int(thickness))

    if result is not None and not result.is_empty:
        label = f"off {result.off_road:.2f} opp {result.opposite_lane:.2f}"
        x0 = int(poly[:, 0].min())
        y0 = max(0, int(poly[:, 1].min()) - 3)
        cv2.putText(out, label, (x0, y0), cv2.FONT_HERSHEY_SIMPLEX, 0.35, color, 1, cv2.LINE_AA)
    return out
