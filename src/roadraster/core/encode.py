from __future__ import annotations

import numpy as np

from roadraster.core.road_map import PixelCell, RoadMap

__all__ = [
    "Rgba",
    "OFF_ROAD_RGBA",
    "UNDIRECTED_RGBA",
    "encode",
    "encode_image",
]

Rgba = tuple[int, int, int, int]

OFF_ROAD_RGBA: Rgba = (0, 0, 0, 255)
UNDIRECTED_RGBA: Rgba = (255, 255, 255, 255)


def _component_to_u8(c):
    # [-1, 1] -> [0, 255]; direction is assumed unit-length
    return np.floor(255.0 * (np.asarray(c, dtype=np.float64) + 1.0) / 2.0)


def encode(cell: PixelCell) -> Rgba:
    """Цвет ячейки: чёрный — вне дороги, белый — без направления, иначе RGB = направление."""
    if cell.is_off_road:
        return OFF_ROAD_RGBA
    if not cell.has_direction:
        return UNDIRECTED_RGBA
    r, g, b = (int(v) for v in _component_to_u8(cell.direction))
    return (r, g, b, 255)


def encode_image(road_map: RoadMap) -> np.ndarray:
    """RGBA-изображение (H, W, 4) uint8 всей карты; строка изображения = y, столбец = x."""
    road_map.require_valid()
    grid = road_map.grid
    n = grid.count
    out = np.empty((n, 4), dtype=np.uint8)
    rgb = np.clip(_component_to_u8(grid.direction), 0, 255).astype(np.uint8)
    out[:, :3] = np.where(grid.has_direction[:, None], rgb, 255)
    out[:, 3] = 255
    out[grid.off_road] = OFF_ROAD_RGBA
    return out.reshape(road_map.height, road_map.width, 4)
