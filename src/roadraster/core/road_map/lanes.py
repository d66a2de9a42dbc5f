from __future__ import annotations

import numpy as np

from roadraster.core.geometry import Transform

from .models import MeshTag

# Yaw offset (degrees) applied to the mesh rotation to get the lane direction.
# None => drivable surface without a canonical direction.
LANE_YAW_OFFSETS: dict[MeshTag, float | None] = {
    MeshTag.ROAD_TWO_LANES_LANE_RIGHT: 0.0,
    MeshTag.ROAD_90_DEG_TURN_LANE_0: 0.0,
    MeshTag.ROAD_TWO_LANES_LANE_LEFT: 180.0,
    MeshTag.ROAD_90_DEG_TURN_LANE_1: 180.0,
    MeshTag.ROAD_90_DEG_TURN_LANE_2: 90.0,
    MeshTag.ROAD_90_DEG_TURN_LANE_3: 270.0,
    MeshTag.ROAD_T_INTERSECTION: None,
    MeshTag.ROAD_X_INTERSECTION: None,
    MeshTag.OTHER: None,
}


def _coerce_tag(tag: MeshTag | str | None) -> MeshTag | None:
    if isinstance(tag, MeshTag):
        return tag
    try:
        return MeshTag(str(tag).strip().lower())
    except ValueError:
        return None


def lane_yaw_offset(tag: MeshTag | str | None) -> float | None:
    """Сдвиг yaw для тега; None, если у ячейки нет направления (в т.ч. для неизвестного тега)."""
    t = _coerce_tag(tag)
    if t is None:
        return None
    return LANE_YAW_OFFSETS.get(t)


def lane_direction(tag: MeshTag | str | None, transform: Transform, invert_direction: bool = False) -> np.ndarray | None:
    """
    Направление полосы для ячейки, построенной из меша с тегом `tag` и ориентацией `transform`.

    - прямая правая полоса / полоса поворота 0: forward-вектор поворота меша
    - прямая левая полоса / полоса поворота 1: yaw + 180°
    - полоса поворота 2: yaw + 90°
    - полоса поворота 3: yaw + 270°
    - остальные (и неизвестные) теги: None

    invert_direction разворачивает уже вычисленное направление.
    """
    offset = lane_yaw_offset(tag)
    if offset is None:
        return None
    d = transform.rotation.add_yaw(offset).forward_vector()
    # unit by construction; renormalize to absorb trig rounding
    d = d / np.linalg.norm(d)
    if invert_direction:
        d = -d
    return d


__all__ = [
    "LANE_YAW_OFFSETS",
    "lane_yaw_offset",
    "lane_direction",
]
