"""
Растровая карта проезжей части: на каждую ячейку «вне дороги» и направление полосы.

Публичный API: RoadMap, build_road_map, PixelGrid, MapTransform, MeshTag, PixelCell,
IntersectionResult, RoadMapNotBuiltError, lane_direction.
"""

from .models import IntersectionResult, MeshTag, PixelCell, RoadMapNotBuiltError
from .grid import PixelGrid
from .coords import MapTransform
from .lanes import LANE_YAW_OFFSETS, lane_direction
from .intersect import intersect, sample_points
from .road_map import RoadMap, build_road_map

__all__ = [
    "IntersectionResult",
    "MeshTag",
    "PixelCell",
    "RoadMapNotBuiltError",
    "PixelGrid",
    "MapTransform",
    "LANE_YAW_OFFSETS",
    "lane_direction",
    "intersect",
    "sample_points",
    "RoadMap",
    "build_road_map",
]
