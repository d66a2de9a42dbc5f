from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from roadraster.core.geometry import Transform, as_vec3

from .models import IntersectionResult

if TYPE_CHECKING:
    from .road_map import RoadMap

logger = logging.getLogger(__name__)


def _sample_axis(extent: float, step: float) -> np.ndarray:
    # Accumulating loop over [-extent, extent): float drift may add or drop the
    # last sample near the bound; this is accepted.
    values: list[float] = []
    v = -extent
    while v < extent:
        values.append(v)
        nxt = v + step
        if nxt <= v:
            # step below float resolution at this magnitude
            break
        v = nxt
    return np.asarray(values, dtype=np.float64)


def sample_points(box_extent, checks_per_centimeter: float) -> np.ndarray:
    """
    Локальные точки (N,3) внутри бокса: сетка с шагом 1 / checks_per_centimeter
    по [-ex, ex) x [-ey, ey), z = 0. Пустой массив, если проверок не получается.
    """
    cpc = float(checks_per_centimeter)
    if not (math.isfinite(cpc) and cpc > 0.0):
        return np.zeros((0, 3), dtype=np.float64)
    step = 1.0 / cpc
    ext = as_vec3(box_extent)
    ex, ey = float(ext[0]), float(ext[1])
    if not (math.isfinite(ex) and math.isfinite(ey)):
        return np.zeros((0, 3), dtype=np.float64)
    xs = _sample_axis(ex, step)
    ys = _sample_axis(ey, step)
    if xs.size == 0 or ys.size == 0:
        return np.zeros((0, 3), dtype=np.float64)
    gx, gy = np.meshgrid(xs, ys, indexing="ij")
    return np.stack([gx.ravel(), gy.ravel(), np.zeros(gx.size)], axis=1)


def intersect(
    road_map: "RoadMap",
    box_transform: Transform,
    box_extent,
    checks_per_centimeter: float,
) -> IntersectionResult:
    """
    Доля площади бокса вне дороги и на «встречной» полосе.

    Точка считается встречной, если направление её полосы даёт строго положительное
    скалярное произведение с forward-вектором бокса (dot > 0, не dot < 0).
    """
    road_map.require_valid()
    local = sample_points(box_extent, checks_per_centimeter)
    check_count = int(local.shape[0])
    if check_count == 0:
        logger.warning(
            "RoadMap.intersect did zero checks (extent=%s, checks_per_centimeter=%s)",
            tuple(np.asarray(box_extent, dtype=float).ravel()),
            checks_per_centimeter,
        )
        return IntersectionResult(off_road=0.0, opposite_lane=0.0, check_count=0)

    world = box_transform.transform_position(local)
    xs, ys = road_map.world_to_pixels(world)
    idx = ys * road_map.width + xs

    grid = road_map.grid
    off_road = grid.off_road[idx]
    has_direction = grid.has_direction[idx]
    forward = box_transform.forward_vector()
    dots = grid.direction[idx] @ forward
    opposite = (~off_road) & has_direction & (dots > 0.0)

    return IntersectionResult(
        off_road=float(np.count_nonzero(off_road)) / check_count,
        opposite_lane=float(np.count_nonzero(opposite)) / check_count,
        check_count=check_count,
    )


__all__ = [
    "sample_points",
    "intersect",
]
