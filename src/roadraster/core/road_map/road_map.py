from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

import numpy as np

from roadraster.core.config import RoadMapConfig
from roadraster.core.geometry import Transform

from .coords import MapTransform
from .grid import PixelGrid
from .intersect import intersect as _intersect
from .lanes import lane_direction
from .models import IntersectionResult, MeshTag, PixelCell, RoadMapNotBuiltError

logger = logging.getLogger(__name__)


class RoadMap:
    """
    Растровая карта проезжей части.

    Жизненный цикл:
    - RoadMap() — валидная «пустая» карта 1x1 (вся плоскость вне дороги);
    - configure(...) — размеры и преобразование мир->растр, начало прохода построения;
    - ровно width * height вызовов append_cell / append_empty_cell в порядке row-major;
    - дальше только чтение: cell_at_world, intersect и т.п.
    """

    def __init__(self, config: RoadMapConfig | None = None) -> None:
        # private copy: clamp() mutates in place
        self._config = replace(config or RoadMapConfig()).clamp()
        self._transform = MapTransform()
        self._grid = PixelGrid(1, 1)
        self._grid.append_empty_cell()

    # ==== state ====
    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def pixels_per_centimeter(self) -> float:
        return self._transform.pixels_per_centimeter

    @property
    def config(self) -> RoadMapConfig:
        """Параметры запросов по умолчанию (checks_per_centimeter, debug_point_size)."""
        return self._config

    @property
    def transform(self) -> MapTransform:
        return self._transform

    @property
    def grid(self) -> PixelGrid:
        return self._grid

    def is_valid(self) -> bool:
        return self._grid.is_full

    def require_valid(self) -> None:
        if not self.is_valid():
            raise RoadMapNotBuiltError(
                f"Карта дорог не построена: {self._grid.count} из {self._grid.capacity} ячеек"
            )

    # ==== build pass ====
    def configure(
        self,
        width: int,
        height: int,
        pixels_per_centimeter: float,
        world_to_map: Transform | None = None,
        map_offset=(0.0, 0.0, 0.0),
    ) -> None:
        """Задаёт размеры и преобразование одним вызовом и начинает новый проход построения."""
        transform = MapTransform(
            pixels_per_centimeter=pixels_per_centimeter,
            world_to_map=world_to_map if world_to_map is not None else Transform.identity(),
            map_offset=map_offset,
        ).validate()
        grid = PixelGrid(width, height)
        self._transform = transform
        self._grid = grid
        logger.debug(
            "Road map build pass started: %dx%d, %.6g px/cm",
            grid.width,
            grid.height,
            transform.pixels_per_centimeter,
        )

    def append_empty_cell(self) -> None:
        self._grid.append_empty_cell()
        self._log_if_complete()

    def append_cell(self, tag: MeshTag | str, transform: Transform, invert_direction: bool = False) -> None:
        """Дописывает ячейку проезжей части; направление выводится из тега и ориентации меша."""
        direction = lane_direction(tag, transform, invert_direction)
        self._grid.append(is_off_road=False, direction=direction)
        self._log_if_complete()

    def _log_if_complete(self) -> None:
        if self._grid.is_full:
            logger.debug("Road map build pass complete: %d cells", self._grid.count)

    # ==== queries ====
    def world_to_pixel(self, world_position) -> tuple[int, int]:
        return self._transform.world_to_pixel(world_position, self.width, self.height)

    def world_to_pixels(self, points) -> tuple[np.ndarray, np.ndarray]:
        return self._transform.world_to_pixels(points, self.width, self.height)

    def pixel_to_world(self, x: int, y: int) -> np.ndarray:
        return self._transform.pixel_to_world(x, y)

    def cell_at(self, x: int, y: int) -> PixelCell:
        return self._grid.cell_at(x, y)

    def cell_at_world(self, world_position) -> PixelCell:
        self.require_valid()
        x, y = self.world_to_pixel(world_position)
        return self._grid.cell_at(x, y)

    def intersect(
        self,
        box_transform: Transform,
        box_extent,
        checks_per_centimeter: float | None = None,
    ) -> IntersectionResult:
        cpc = self._config.checks_per_centimeter if checks_per_centimeter is None else checks_per_centimeter
        return _intersect(self, box_transform, box_extent, cpc)


CellSource = Iterable["tuple[MeshTag | str, Transform] | tuple[MeshTag | str, Transform, bool] | None"]


def build_road_map(
    width: int,
    height: int,
    cells: CellSource,
    *,
    config: RoadMapConfig | None = None,
    world_to_map: Transform | None = None,
    map_offset=(0.0, 0.0, 0.0),
) -> RoadMap:
    """
    Строит карту из источника геометрии.

    `cells` перечисляет ячейки в порядке row-major: None означает ячейку вне дороги,
    (tag, transform) или (tag, transform, invert_direction) задают проезжую часть.
    """
    road_map = RoadMap(config)
    cfg = road_map.config
    road_map.configure(width, height, cfg.pixels_per_centimeter, world_to_map, map_offset)
    capacity = road_map.grid.capacity
    n = 0
    for item in cells:
        if n >= capacity:
            raise ValueError(f"Источник геометрии дал больше {capacity} ячеек")
        if item is None:
            road_map.append_empty_cell()
        else:
            tag, transform, *rest = item
            road_map.append_cell(tag, transform, bool(rest[0]) if rest else False)
        n += 1
    if n != capacity:
        raise ValueError(f"Источник геометрии дал {n} ячеек, ожидалось {capacity}")
    return road_map


__all__ = [
    "RoadMap",
    "build_road_map",
]
